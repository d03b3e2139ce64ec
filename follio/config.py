"""config.py
Holds various defaults for the upload, review and persistence flow.
"""
import os
from dataclasses import dataclass, field
from typing import Tuple

from dotenv import load_dotenv

load_dotenv()  # load .env

# --------------------------------------------------------------
# MEDIA TYPES
# --------------------------------------------------------------
PDF_MEDIA_TYPE = "application/pdf"
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
DOC_MEDIA_TYPE = "application/msword"


# --------------------------------------------------------------
# SETUP DEFAULT VALUES
# --------------------------------------------------------------
@dataclass
class FollioDefaults:
    """
    Default settings for parameters used across the follio package.
    """
    # ---- Upload settings ----
    MAX_FILE_SIZE_MB: float = field(
        default = 10.0,
        metadata = {
            "description": "Maximum allowed upload size in MB"
    })
    ACCEPTED_MEDIA_TYPES: Tuple[str, ...] = field(
        default = (PDF_MEDIA_TYPE, DOCX_MEDIA_TYPE, DOC_MEDIA_TYPE),
        metadata = {
            "description": "Media types accepted at the upload step"
    })

    # ---- PageFlowController settings ----
    PARSE_DELAY_SECONDS: float = field(
        default = 1.5,
        metadata = {
            "description": "Seconds to wait after a parse is confirmed before ingesting"
    })

    # ---- Supabase settings ----
    PROFILES_TABLE: str = field(
        default = "profiles",
        metadata = {
            "description": "Table holding one resume document per account"
    })
    OAUTH_REDIRECT_URL: str = field(
        default = os.getenv("OAUTH_REDIRECT_URL", "http://localhost:8001/auth/callback"),
        metadata = {
            "description": "Where the identity provider redirects after social sign in"
    })

    # ---- AppContext settings ----
    BACKEND: str = field(
        default = os.getenv("FOLLIO_BACKEND", "memory"),
        metadata = {
            "description": 'Collaborator backend: "memory" or "supabase"'
    })
    INGESTOR: str = field(
        default = os.getenv("FOLLIO_INGESTOR", "text"),
        metadata = {
            "description": 'Ingestion strategy: "text" (reads file bytes) or "sample" (file name only)'
    })

    @property
    def max_file_size_bytes(self) -> int:
        return int(self.MAX_FILE_SIZE_MB * 1024 * 1024)


# Import this where needed
FOLLIO_DEFAULTS = FollioDefaults()
