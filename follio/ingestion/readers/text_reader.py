"""text_reader.py

Holds abstract TextReader class inherited by media-type-specific readers.
"""
from abc import ABC, abstractmethod
from typing import List

from follio.exceptions import IngestionError
from follio.models import UploadedFile


class TextReader(ABC):
    """
    Abstract base class turning the bytes of an uploaded file into plain text.

    All concrete readers must implement `_get_contents`.

    Attributes:
        SUPPORTED_MEDIA_TYPES (List[str]): Media types handled by the concrete reader.
    """
    # Media types supported by a specific concrete class (to be overwritten by children)
    SUPPORTED_MEDIA_TYPES: List[str] = []

    def read(self, file: UploadedFile) -> str:
        """
        Return the full text of `file`.

        Raises:
            IngestionError: If the media type is not handled, the bytes cannot be
                opened, or the document contains no readable text.
        """
        if file.media_type not in self.SUPPORTED_MEDIA_TYPES:
            raise IngestionError(
                file.name,
                message=f"{type(self).__name__} cannot read media type '{file.media_type}'",
            )
        if not file.content:
            raise IngestionError(file.name, message="Uploaded file has no content")

        full_text = self._get_contents(file)
        if not full_text.strip():
            raise IngestionError(file.name, message="File contains no parsable text")
        return full_text

    @abstractmethod
    def _get_contents(self, file: UploadedFile) -> str:
        """
        Open `file.content` and return its raw text.

        Raises:
            IngestionError: If the bytes cannot be opened or read.
        """
        pass
