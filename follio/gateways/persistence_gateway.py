"""persistence_gateway.py
Holds the PersistenceGateway interface and an in-memory implementation.
"""
import copy
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from follio.models import ResumeDocument


class PersistenceGateway(ABC):
    """
    Thin interface to the external record store.

    One document per account id, upsert semantics (last write wins, no
    versioning). The stored shape is `ResumeDocument.to_dict()`, so a save
    followed by a load returns an equal document.
    """

    @abstractmethod
    async def load_document(self, account_id: str) -> Optional[ResumeDocument]:
        """
        Return the saved document for `account_id`, or None if there is none.

        Raises:
            DocumentLoadError: If the store cannot be read.
        """
        pass

    @abstractmethod
    async def save_document(
        self,
        account_id: str,
        display_name: str,
        document: ResumeDocument,
        email: Optional[str] = None,
    ) -> None:
        """
        Insert or replace the document for `account_id`.

        Raises:
            DocumentSaveError: If the store rejects the write.
        """
        pass


class InMemoryPersistenceGateway(PersistenceGateway):
    """
    Process-local record store for local runs and tests.

    Records are kept as deep copies of the persisted dict shape, so callers can
    never alias stored state.

    Attributes:
        records (Dict[str, Dict[str, Any]]): Account id to
            {"id", "email", "name", "resume_data"} rows.
    """

    def __init__(self):
        self.records: Dict[str, Dict[str, Any]] = {}

    async def load_document(self, account_id: str) -> Optional[ResumeDocument]:
        record = self.records.get(account_id)
        if record is None or not record.get("resume_data"):
            return None
        return ResumeDocument.from_dict(copy.deepcopy(record["resume_data"]))

    async def save_document(
        self,
        account_id: str,
        display_name: str,
        document: ResumeDocument,
        email: Optional[str] = None,
    ) -> None:
        self.records[account_id] = {
            "id": account_id,
            "email": email,
            "name": display_name,
            "resume_data": copy.deepcopy(document.to_dict()),
        }
