"""exceptions.py
Defines custom exceptions for this project.
"""
from typing import Any, Optional, Sequence

# ------------------------ File Validation Errors ------------------------
class FileValidationError(Exception):
    """Base exception for files rejected at the upload step."""
    pass

class UnsupportedFileTypeError(FileValidationError):
    """Raised when an uploaded file has a media type outside the accepted whitelist."""
    def __init__(self, media_type: str, accepted_media_types: Sequence[str]):
        self.media_type = media_type
        self.accepted_media_types = list(accepted_media_types)
        super().__init__(
            f"Files of type '{media_type}' are not supported. "
            "Please upload a PDF or DOCX file."
        )

class FileTooLargeError(FileValidationError):
    """Raised when an uploaded file exceeds the allowed file size."""
    def __init__(self, max_size: int, actual_size: int):
        super().__init__(
            f"File size is {actual_size} bytes, which exceeds the max allowed {max_size} bytes."
        )
        self.max_size = max_size
        self.actual_size = actual_size

# ------------------------ Ingestion Errors ------------------------
class IngestionError(Exception):
    """
    Raised inside an Ingestor when the uploaded file cannot be turned into text.
    Never escapes `Ingestor.ingest()`; it degrades to an empty ResumeDocument.

    Attributes:
        file_name (str): Name of the file being ingested.
        original_error (str | None): Message of the underlying failure, if any.
    """
    def __init__(self, file_name: str, message: str = "Failed to ingest file", original_error: Optional[str] = None):
        self.file_name = file_name
        self.original_error = original_error
        full_message = f"{message}: {file_name}"
        if original_error:
            full_message += f". Original error: {original_error}"
        super().__init__(full_message)

# ------------------------ Document Model Errors ------------------------
class UnknownFieldError(ValueError):
    """Raised when an edit names a field that is not part of the section schema."""
    def __init__(self, section: str, field_name: str, allowed_fields: Sequence[str]):
        self.section = section
        self.field_name = field_name
        self.allowed_fields = list(allowed_fields)
        super().__init__(
            f"'{field_name}' is not an editable {section} field. "
            f"Editable fields: {self.allowed_fields}"
        )

class InvalidFieldValueError(ValueError):
    """Raised when an edit passes a value of the wrong type for a known field."""
    def __init__(self, section: str, field_name: str, value: Any, expected: str):
        self.section = section
        self.field_name = field_name
        self.value = value
        super().__init__(
            f"{section}.{field_name} expects {expected}, got {type(value).__name__}: {value!r}"
        )

class UnknownSectionError(ValueError):
    """Raised when a section name is not one of profile, experience, education, skills."""
    def __init__(self, section: str):
        self.section = section
        super().__init__(f"Unknown section: '{section}'")

# ------------------------ Identity Provider Errors ------------------------
class AuthError(Exception):
    """Raised when sign in, sign up or social sign in fails."""
    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        original_exception: Optional[Exception] = None
    ):
        self.provider = provider
        self.original_exception = original_exception
        base_msg = message
        if provider:
            base_msg += f" | Provider: {provider}"
        super().__init__(base_msg)

# ------------------------ Persistence Errors ------------------------
class PersistenceError(Exception):
    """Base exception for record store failures."""
    def __init__(
        self,
        account_id: str,
        message: str,
        original_exception: Optional[Exception] = None
    ):
        self.account_id = account_id
        self.original_exception = original_exception
        base_msg = f"{message} | Account: {account_id}"
        if original_exception:
            base_msg += f" | Original Exception: {original_exception}"
        super().__init__(base_msg)

class DocumentLoadError(PersistenceError):
    """Raised when a saved document cannot be loaded."""
    def __init__(self, account_id: str, original_exception: Optional[Exception] = None):
        super().__init__(
            account_id=account_id,
            message="Failed to load saved resume document",
            original_exception=original_exception,
        )

class DocumentSaveError(PersistenceError):
    """Raised when the current document cannot be saved."""
    def __init__(self, account_id: str, original_exception: Optional[Exception] = None):
        super().__init__(
            account_id=account_id,
            message="Failed to save resume document",
            original_exception=original_exception,
        )

# ------------------------ AppContext Errors ------------------------
class ContextConfigError(Exception):
    """Raised when a required configuration (in .env by default) for AppContext is
    missing or invalid."""
    def __init__(self, variable_name: str, message: str = None):
        if message is None:
            message = f"Missing or invalid configuration: {variable_name}. Please set it in your .env file."
        super().__init__(message)
        self.variable_name = variable_name

    def __str__(self):
        return f"[CONFIG ERROR] {super().__str__()} | Variable: {self.variable_name}"
