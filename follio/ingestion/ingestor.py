"""ingestor.py
Holds abstract Ingestor class inherited by concrete ingestion strategies.
"""
from abc import ABC, abstractmethod

from follio.logging import LoggerFactory
from follio.models import ResumeDocument, UploadedFile

# Ingestion failures are logged per ingestor to their own folder, never raised
logger_factory = LoggerFactory()


class Ingestor(ABC):
    """
    Abstract base class turning an uploaded file into an initial ResumeDocument.

    Concrete ingestors implement `_build_document`. Callers use `ingest`, which
    guarantees that one complete ResumeDocument comes back for every file: any
    failure inside `_build_document` is logged and replaced by an empty document
    so the review step always stays reachable.

    Implementations must be deterministic for identical file content.
    """

    def ingest(self, file: UploadedFile) -> ResumeDocument:
        """
        Build a ResumeDocument from `file`. Never raises.

        Args:
            file (UploadedFile): The accepted upload.

        Returns:
            ResumeDocument: The extracted document, or `ResumeDocument.empty()` if
            extraction failed.
        """
        failure_logger = logger_factory.get_ingestion_failure_logger(type(self).__name__)
        try:
            document = self._build_document(file)
        except Exception as e:
            failure_logger.info(
                f"{type(self).__name__} failed on '{file.name}' "
                f"({file.media_type}, {file.size_bytes} bytes): {e}"
            )
            return ResumeDocument.empty()

        if not isinstance(document, ResumeDocument):
            failure_logger.info(
                f"{type(self).__name__} returned {type(document).__name__} for '{file.name}', "
                "expected ResumeDocument."
            )
            return ResumeDocument.empty()
        return document

    @abstractmethod
    def _build_document(self, file: UploadedFile) -> ResumeDocument:
        """
        Extract a ResumeDocument from `file`. May raise; `ingest` handles it.
        """
        pass
