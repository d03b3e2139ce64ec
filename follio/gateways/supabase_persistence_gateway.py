"""supabase_persistence_gateway.py
Holds SupabasePersistenceGateway, storing one resume document per account in a Supabase table.
"""
import asyncio
from typing import Optional

from supabase import Client

from follio.config import FOLLIO_DEFAULTS
from follio.exceptions import DocumentLoadError, DocumentSaveError
from follio.models import ResumeDocument
from follio.gateways.persistence_gateway import PersistenceGateway


class SupabasePersistenceGateway(PersistenceGateway):
    """
    PersistenceGateway backed by a Supabase table.

    Rows have the columns ``id`` (account id, primary key), ``email``, ``name``
    and ``resume_data`` (JSON in the `ResumeDocument.to_dict()` shape). The
    client is synchronous, so each request is executed in a worker thread.

    Args:
        client (supabase.Client): A connected client, usually owned by AppContext.
        table (str): Table name. Defaults to ``FOLLIO_DEFAULTS.PROFILES_TABLE``.
    """

    def __init__(self, client: Client, table: str = FOLLIO_DEFAULTS.PROFILES_TABLE):
        self.client = client
        self.table = table

    async def load_document(self, account_id: str) -> Optional[ResumeDocument]:
        try:
            query = (
                self.client.table(self.table)
                .select("resume_data")
                .eq("id", account_id)
                .limit(1)
            )
            response = await asyncio.to_thread(query.execute)
        except Exception as e:
            raise DocumentLoadError(account_id, original_exception=e)

        rows = response.data or []
        if not rows or not rows[0].get("resume_data"):
            return None
        return ResumeDocument.from_dict(rows[0]["resume_data"])

    async def save_document(
        self,
        account_id: str,
        display_name: str,
        document: ResumeDocument,
        email: Optional[str] = None,
    ) -> None:
        row = {
            "id": account_id,
            "name": display_name,
            "resume_data": document.to_dict(),
        }
        if email is not None:
            row["email"] = email
        try:
            await asyncio.to_thread(self.client.table(self.table).upsert(row).execute)
        except Exception as e:
            raise DocumentSaveError(account_id, original_exception=e)
