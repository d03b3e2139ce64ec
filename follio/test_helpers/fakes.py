"""fakes.py
Collaborator doubles for PageFlowController tests.
"""
import asyncio
import threading
from typing import List, Optional

from follio.exceptions import DocumentLoadError, DocumentSaveError
from follio.models import ResumeDocument, UploadedFile
from follio.ingestion.ingestor import Ingestor
from follio.gateways.persistence_gateway import InMemoryPersistenceGateway


class FailingPersistenceGateway(InMemoryPersistenceGateway):
    """InMemoryPersistenceGateway whose loads and/or saves raise."""

    def __init__(self, fail_load: bool = False, fail_save: bool = False):
        super().__init__()
        self.fail_load = fail_load
        self.fail_save = fail_save

    async def load_document(self, account_id: str) -> Optional[ResumeDocument]:
        if self.fail_load:
            raise DocumentLoadError(account_id, original_exception=ConnectionError("store offline"))
        return await super().load_document(account_id)

    async def save_document(self, account_id, display_name, document, email=None) -> None:
        if self.fail_save:
            raise DocumentSaveError(account_id, original_exception=ConnectionError("store offline"))
        await super().save_document(account_id, display_name, document, email=email)


class BlockingPersistenceGateway(InMemoryPersistenceGateway):
    """InMemoryPersistenceGateway whose saves wait until `release` is set."""

    def __init__(self):
        super().__init__()
        self.release = asyncio.Event()
        self.save_calls = 0

    async def save_document(self, account_id, display_name, document, email=None) -> None:
        self.save_calls += 1
        await self.release.wait()
        await super().save_document(account_id, display_name, document, email=email)


class ExplodingIngestor(Ingestor):
    """Ingestor whose extraction always raises."""

    def _build_document(self, file: UploadedFile) -> ResumeDocument:
        raise RuntimeError("extraction engine crashed")


class ThreadRecordingIngestor(Ingestor):
    """Ingestor that records the thread each document is built on."""

    def __init__(self):
        super().__init__()
        self.thread_ids: List[int] = []

    def _build_document(self, file: UploadedFile) -> ResumeDocument:
        self.thread_ids.append(threading.get_ident())
        return ResumeDocument.empty()
