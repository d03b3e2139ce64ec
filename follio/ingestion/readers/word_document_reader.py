"""word_document_reader.py

Holds WordDocumentReader class using docx2txt for text extraction.
"""
import io

import docx2txt

from follio.config import DOCX_MEDIA_TYPE
from follio.exceptions import IngestionError
from follio.models import UploadedFile
from follio.ingestion.readers.text_reader import TextReader


class WordDocumentReader(TextReader):
    """
    Concrete reader for Microsoft Word documents (.docx).

    Uses ``docx2txt`` to extract textual content (including from textboxes)
    straight from the uploaded bytes. Legacy ``.doc`` files are not handled.
    """
    SUPPORTED_MEDIA_TYPES = [DOCX_MEDIA_TYPE]

    def _get_contents(self, file: UploadedFile) -> str:
        """
        Opens the Word document using docx2txt and extracts all text content.

        Raises:
            IngestionError: If the Word document cannot be opened or read.
        """
        try:
            full_text = docx2txt.process(io.BytesIO(file.content))
        except Exception as e:
            raise IngestionError(file.name, message="Failed to open Word document", original_error=str(e))

        return (full_text or "").strip()
