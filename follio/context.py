"""context.py
Holds AppContext, the explicitly constructed owner of the external collaborators.
"""
import os
from typing import Optional

from dotenv import load_dotenv
from supabase import create_client

from follio.config import FOLLIO_DEFAULTS
from follio.exceptions import ContextConfigError
from follio.logging import LoggerFactory
from follio.ingestion.ingestor import Ingestor
from follio.ingestion.sample_ingestor import SampleIngestor
from follio.ingestion.text_ingestor import TextIngestor
from follio.gateways.identity_provider import IdentityProvider, InMemoryIdentityProvider
from follio.gateways.persistence_gateway import InMemoryPersistenceGateway, PersistenceGateway
from follio.gateways.supabase_identity_provider import SupabaseIdentityProvider
from follio.gateways.supabase_persistence_gateway import SupabasePersistenceGateway
from follio.flow.page_flow_controller import PageFlowController

load_dotenv()  # load .env

logger = LoggerFactory().get_logger(name="app_context")

BACKENDS = ("memory", "supabase")
INGESTORS = {
    "text": TextIngestor,
    "sample": SampleIngestor,
}


class AppContext:
    """
    Builds and owns the identity provider, persistence gateway and ingestor.

    Nothing is connected at import time: `open()` creates the collaborators and
    `close()` drops them. Use as a context manager to pair the two.

    Args:
        backend (str): "memory" for process-local collaborators, "supabase" for
            Supabase Auth and a Supabase table.
        ingestor (str): Key into INGESTORS.
        supabase_url (str | None): Defaults to the SUPABASE_URL environment variable.
        supabase_key (str | None): Defaults to the SUPABASE_KEY environment variable.

    Example
    -------
    >>> with AppContext(backend="memory") as context:
    ...     controller = context.new_controller()
    """

    def __init__(
        self,
        backend: str = FOLLIO_DEFAULTS.BACKEND,
        ingestor: str = FOLLIO_DEFAULTS.INGESTOR,
        supabase_url: Optional[str] = None,
        supabase_key: Optional[str] = None,
    ):
        if backend not in BACKENDS:
            raise ContextConfigError("FOLLIO_BACKEND", message=f"Unknown backend '{backend}'. Options: {BACKENDS}")
        if ingestor not in INGESTORS:
            raise ContextConfigError("FOLLIO_INGESTOR", message=f"Unknown ingestor '{ingestor}'. Options: {list(INGESTORS)}")

        self.backend = backend
        self.ingestor_name = ingestor
        self.supabase_url = supabase_url or os.getenv("SUPABASE_URL")
        self.supabase_key = supabase_key or os.getenv("SUPABASE_KEY")

        self.client = None
        self.identity_provider: Optional[IdentityProvider] = None
        self.persistence_gateway: Optional[PersistenceGateway] = None
        self.ingestor: Optional[Ingestor] = None

    @property
    def is_open(self) -> bool:
        return self.persistence_gateway is not None

    def open(self) -> "AppContext":
        """
        Create the collaborators for the configured backend.

        Raises:
            ContextConfigError: If the supabase backend is selected without
                SUPABASE_URL / SUPABASE_KEY, or the client cannot be created.
        """
        if self.is_open:
            return self

        if self.backend == "supabase":
            self._open_supabase()
        else:
            self.identity_provider = InMemoryIdentityProvider()
            self.persistence_gateway = InMemoryPersistenceGateway()

        self.ingestor = INGESTORS[self.ingestor_name]()
        logger.info(f"AppContext opened (backend={self.backend}, ingestor={self.ingestor_name})")
        return self

    def _open_supabase(self) -> None:
        if not self.supabase_url:
            raise ContextConfigError("SUPABASE_URL")
        if not self.supabase_key:
            raise ContextConfigError("SUPABASE_KEY")
        try:
            self.client = create_client(self.supabase_url, self.supabase_key)
        except Exception as e:
            raise ContextConfigError(
                "SUPABASE_URL",
                message=f"Failed to initialize Supabase client: {e}",
            )
        self.identity_provider = SupabaseIdentityProvider(self.client)
        self.persistence_gateway = SupabasePersistenceGateway(self.client)

    def close(self) -> None:
        self.client = None
        self.identity_provider = None
        self.persistence_gateway = None
        self.ingestor = None
        logger.info("AppContext closed")

    def new_controller(self, **kwargs) -> PageFlowController:
        """Return a PageFlowController wired to this context's collaborators."""
        if not self.is_open:
            self.open()
        return PageFlowController(
            identity_provider=self.identity_provider,
            persistence_gateway=self.persistence_gateway,
            ingestor=self.ingestor,
            **kwargs,
        )

    def __enter__(self) -> "AppContext":
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()
