"""check_file_acceptance.py
Checks that an uploaded file may be selected for parsing.
"""
from typing import Sequence

from follio.exceptions import FileTooLargeError, UnsupportedFileTypeError
from follio.models import UploadedFile


def check_file_acceptance(
    file: UploadedFile,
    accepted_media_types: Sequence[str],
    max_file_size_bytes: int | None,
) -> None:
    """
    Validate the media type and size of `file`.

    A file exactly `max_file_size_bytes` long is accepted. A `max_file_size_bytes`
    of None disables the size check.

    Raises:
        UnsupportedFileTypeError: If `file.media_type` is not in `accepted_media_types`.
        FileTooLargeError: If `file.size_bytes` exceeds `max_file_size_bytes`.
    """
    if file.media_type not in accepted_media_types:
        raise UnsupportedFileTypeError(
            media_type=file.media_type,
            accepted_media_types=accepted_media_types,
        )

    if max_file_size_bytes is not None and file.size_bytes > max_file_size_bytes:
        raise FileTooLargeError(
            max_size=max_file_size_bytes,
            actual_size=file.size_bytes,
        )
