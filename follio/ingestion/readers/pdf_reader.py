"""pdf_reader.py

Holds PDFReader class.
"""
import pymupdf

from follio.config import PDF_MEDIA_TYPE
from follio.exceptions import IngestionError
from follio.models import UploadedFile
from follio.ingestion.readers.text_reader import TextReader


class PDFReader(TextReader):
    """
    Concrete reader for PDF documents.

    Uses PyMuPDF to open the uploaded bytes in memory and joins the text of
    every page with newlines.
    """
    SUPPORTED_MEDIA_TYPES = [PDF_MEDIA_TYPE]

    def _get_contents(self, file: UploadedFile) -> str:
        """
        Opens the PDF bytes using PyMuPDF, combines any pages, and returns
        its contents as a string.

        Raises:
            IngestionError: If the PDF cannot be opened.
        """
        try:
            with pymupdf.open(stream=file.content, filetype="pdf") as doc:
                pages = [page.get_text() for page in doc]
        except Exception as e:
            raise IngestionError(file.name, message="Failed to open PDF", original_error=str(e))

        return "\n".join(pages).strip()
