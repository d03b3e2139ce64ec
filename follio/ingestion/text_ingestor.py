"""text_ingestor.py
Holds TextIngestor, which builds a ResumeDocument from the text inside the uploaded bytes.
"""
from typing import Dict, Optional, Type

from follio.exceptions import IngestionError
from follio.models import ResumeDocument, UploadedFile
from follio.ingestion.ingestor import Ingestor
from follio.ingestion.readers.text_reader import TextReader
from follio.ingestion.readers.pdf_reader import PDFReader
from follio.ingestion.readers.word_document_reader import WordDocumentReader
from follio.ingestion.helpers.split_sections import split_sections
from follio.ingestion.helpers.extract_fields import (
    extract_education,
    extract_experience,
    extract_profile,
    extract_skills,
)


class TextIngestor(Ingestor):
    """
    Content-driven ingestor.

    Reads the text of the upload with the reader registered for its media type,
    splits it into headed sections and fills each ResumeDocument section with
    heuristics from `extract_fields`. Entry ids are sequential, so the same bytes
    always produce the same document.

    Parameters
    ----------
    reader_map : dict[str, type[TextReader]], optional
        Media type to reader class. Defaults to ``MEDIA_TYPE_READER_MAP``.

    Example
    -------
    >>> ingestor = TextIngestor()
    >>> document = ingestor.ingest(UploadedFile.from_bytes("cv.pdf", "application/pdf", data))
    """

    MEDIA_TYPE_READER_MAP: Dict[str, Type[TextReader]] = {
        media_type: reader
        for reader in (PDFReader, WordDocumentReader)
        for media_type in reader.SUPPORTED_MEDIA_TYPES
    }

    def __init__(self, reader_map: Optional[Dict[str, Type[TextReader]]] = None):
        self.reader_map = reader_map if reader_map is not None else dict(self.MEDIA_TYPE_READER_MAP)

    def _build_document(self, file: UploadedFile) -> ResumeDocument:
        reader_class = self.reader_map.get(file.media_type)
        if reader_class is None:
            raise IngestionError(
                file.name,
                message=f"No reader registered for media type '{file.media_type}'",
            )

        full_text = reader_class().read(file)
        return self.document_from_text(full_text)

    @staticmethod
    def document_from_text(full_text: str) -> ResumeDocument:
        """Build a ResumeDocument from already extracted resume text."""
        sections = split_sections(full_text)
        return ResumeDocument(
            profile=extract_profile(sections["profile"]),
            experience=tuple(extract_experience(sections["experience"])),
            education=tuple(extract_education(sections["education"])),
            skills=tuple(extract_skills(sections["skills"])),
        )
