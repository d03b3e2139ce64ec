"""page_flow_controller.py
Holds PageFlowController, the state machine sequencing login -> upload -> review -> dashboard.
"""
import asyncio
import functools
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set

from follio.config import FOLLIO_DEFAULTS
from follio.exceptions import PersistenceError
from follio.logging import LoggerFactory
from follio.models import Identity, PageName, ResumeDocument, UploadedFile
from follio.editor.section_editor import SectionEditor
from follio.ingestion.ingestor import Ingestor
from follio.gateways.identity_provider import IdentityProvider
from follio.gateways.persistence_gateway import PersistenceGateway
from follio.flow.dashboard import DashboardSummary, build_dashboard_summary
from follio.flow.helpers.check_file_acceptance import check_file_acceptance

logger = LoggerFactory().get_logger(
    name="page_flow",
    logger_type="flow"
)


@dataclass(frozen=True)
class SessionState:
    """Snapshot of everything the controller holds for the current session."""
    page: PageName
    identity: Optional[Identity]
    selected_file: Optional[UploadedFile]
    document: Optional[ResumeDocument]


def single_flight(action: str):
    """
    Allow one in-flight call of the decorated coroutine per controller.

    A call made while the same action is still pending is rejected: it logs a
    warning and returns False without awaiting anything.
    """
    def decorator(method):
        @functools.wraps(method)
        async def wrapper(self, *args, **kwargs):
            if action in self._pending:
                logger.warning(f"Rejected '{action}': a previous '{action}' is still pending.")
                return False
            self._pending.add(action)
            try:
                return await method(self, *args, **kwargs)
            finally:
                self._pending.discard(action)
        return wrapper
    return decorator


class PageFlowController:
    """
    Finite state machine for one user session.

    Pages and transitions:
        login      -- sign_in / sign_up ------> upload
        upload     -- confirm_parse ----------> review     (ingest selected file)
        review     -- commit -----------------> dashboard  (persist document)
        review     -- back -------------------> upload     (discard document and file)
        dashboard  -- edit_profile -----------> review     (reopen saved document)
        dashboard  -- logout -----------------> login      (clear session)

    A transition called from the wrong page, or without the state it needs, is
    rejected: it is logged and returns False. Validation, auth and save errors
    are raised to the caller and leave the state unchanged.

    Suspending actions (start, sign in/up, parse, commit, logout) are
    single-flight; use `is_pending(action)` to disable the triggering control.

    Args:
        identity_provider (IdentityProvider): Account/session collaborator.
        persistence_gateway (PersistenceGateway): Record store collaborator.
        ingestor (Ingestor): Turns the selected file into a ResumeDocument.
        accepted_media_types (Sequence[str]): Upload whitelist.
        max_file_size_bytes (int | None): Upload size limit; None disables it.
        parse_delay_seconds (float): Wait before ingesting after a parse is confirmed.
    """

    def __init__(
        self,
        identity_provider: IdentityProvider,
        persistence_gateway: PersistenceGateway,
        ingestor: Ingestor,
        accepted_media_types: Sequence[str] = FOLLIO_DEFAULTS.ACCEPTED_MEDIA_TYPES,
        max_file_size_bytes: Optional[int] = FOLLIO_DEFAULTS.max_file_size_bytes,
        parse_delay_seconds: float = FOLLIO_DEFAULTS.PARSE_DELAY_SECONDS,
    ):
        self.identity_provider = identity_provider
        self.persistence_gateway = persistence_gateway
        self.ingestor = ingestor
        self.accepted_media_types = tuple(accepted_media_types)
        self.max_file_size_bytes = max_file_size_bytes
        self.parse_delay_seconds = parse_delay_seconds

        self.page: PageName = "login"
        self.identity: Optional[Identity] = None
        self.selected_file: Optional[UploadedFile] = None
        self.editor: Optional[SectionEditor] = None
        self._document: Optional[ResumeDocument] = None
        self._pending: Set[str] = set()

    # ------------------------------------------
    # STATE
    # ------------------------------------------
    @property
    def document(self) -> Optional[ResumeDocument]:
        """The active document; while reviewing this is the editor's live copy."""
        if self.editor is not None:
            return self.editor.document
        return self._document

    def session_state(self) -> SessionState:
        return SessionState(
            page=self.page,
            identity=self.identity,
            selected_file=self.selected_file,
            document=self.document,
        )

    def is_pending(self, action: str) -> bool:
        return action in self._pending

    def pending_actions(self) -> List[str]:
        return sorted(self._pending)

    def _reject(self, action: str, reason: str) -> bool:
        logger.warning(f"Rejected '{action}' on page '{self.page}': {reason}")
        return False

    def _open_editor(self, document: ResumeDocument) -> None:
        self._document = document
        self.editor = SectionEditor(document, on_commit=self.commit)
        self.page = "review"

    def _clear_session(self) -> None:
        self.identity = None
        self.selected_file = None
        self.editor = None
        self._document = None

    # ------------------------------------------
    # STARTUP
    # ------------------------------------------
    @single_flight("start")
    async def start(self) -> PageName:
        """
        Pick the initial page from the current session.

        An existing session with a saved document opens the dashboard, a session
        without one opens upload, and no session opens login. A failed document
        load counts as "no saved document".

        Returns:
            PageName: The page the controller starts on.
        """
        try:
            identity = await self.identity_provider.get_current_session()
        except Exception as e:
            logger.warning(f"Session check failed, starting at login: {e}")
            identity = None

        if identity is None:
            self._clear_session()
            self.page = "login"
            return self.page

        self.identity = identity
        try:
            saved = await self.persistence_gateway.load_document(identity.id)
        except PersistenceError as e:
            logger.warning(f"Treating failed load as no saved document: {e}")
            saved = None

        self._document = saved
        self.page = "dashboard" if saved is not None else "upload"
        logger.info(f"Started session for account {identity.id} on '{self.page}'")
        return self.page

    # ------------------------------------------
    # LOGIN
    # ------------------------------------------
    @single_flight("sign_in")
    async def sign_in(self, email: str, password: str) -> bool:
        """
        Sign in with email and password and move to upload.

        Raises:
            AuthError: If the identity provider rejects the credentials.
        """
        if self.page != "login":
            return self._reject("sign_in", "not on the login page")
        self.identity = await self.identity_provider.sign_in(email, password)
        self.page = "upload"
        logger.info(f"Account {self.identity.id} signed in")
        return True

    @single_flight("sign_up")
    async def sign_up(self, email: str, password: str) -> bool:
        """
        Create an account and move to upload.

        Raises:
            AuthError: If the identity provider rejects the sign up.
        """
        if self.page != "login":
            return self._reject("sign_up", "not on the login page")
        self.identity = await self.identity_provider.sign_up(email, password)
        self.page = "upload"
        logger.info(f"Account {self.identity.id} signed up")
        return True

    @single_flight("sign_in_with_provider")
    async def sign_in_with_provider(self, provider: str) -> Optional[str]:
        """
        Start a social sign in. The page does not change; the returned URL is
        where the user should be redirected.

        Raises:
            AuthError: If the provider cannot be reached or is unsupported.
        """
        if self.page != "login":
            self._reject("sign_in_with_provider", "not on the login page")
            return None
        return await self.identity_provider.sign_in_with_provider(provider)

    # ------------------------------------------
    # UPLOAD
    # ------------------------------------------
    def select_file(self, file: UploadedFile) -> bool:
        """
        Accept `file` as the selected upload.

        Raises:
            UnsupportedFileTypeError: If the media type is not accepted.
            FileTooLargeError: If the file exceeds the size limit.
        """
        if self.page != "upload":
            return self._reject("select_file", "not on the upload page")
        check_file_acceptance(file, self.accepted_media_types, self.max_file_size_bytes)
        self.selected_file = file
        return True

    def clear_file(self) -> bool:
        if self.page != "upload":
            return self._reject("clear_file", "not on the upload page")
        self.selected_file = None
        return True

    @single_flight("parse")
    async def confirm_parse(self) -> bool:
        """
        Ingest the selected file and open the review page.

        Ingestion never fails; an unreadable file opens review with an empty
        document. It runs in a worker thread so file reading does not block the
        event loop.
        """
        if self.page != "upload":
            return self._reject("confirm_parse", "not on the upload page")
        if self.identity is None:
            return self._reject("confirm_parse", "no signed in account")
        if self.selected_file is None:
            return self._reject("confirm_parse", "no file selected")

        file = self.selected_file
        await asyncio.sleep(self.parse_delay_seconds)
        document = await asyncio.to_thread(self.ingestor.ingest, file)
        self._open_editor(document)
        logger.info(f"Ingested '{file.name}' for account {self.identity.id}")
        return True

    # ------------------------------------------
    # REVIEW
    # ------------------------------------------
    @single_flight("commit")
    async def commit(self, editor: Optional[SectionEditor] = None) -> bool:
        """
        Persist the document of `editor` (defaults to the active editor) and open the dashboard.

        Only the active review editor can commit. An editor left over from an
        earlier review session is rejected.

        Raises:
            DocumentSaveError: If the store rejects the write. The controller
                stays on review so the user can retry.
        """
        if self.page != "review" or self.editor is None:
            return self._reject("commit", "not on the review page")
        if self.identity is None:
            return self._reject("commit", "no signed in account")
        editor = editor if editor is not None else self.editor
        if editor is not self.editor:
            return self._reject("commit", "editor is not the active review session")

        document = editor.document
        display_name = document.profile.name or self.identity.name
        try:
            await self.persistence_gateway.save_document(
                self.identity.id,
                display_name,
                document,
                email=self.identity.email,
            )
        except PersistenceError as e:
            logger.error(f"Save failed, staying on review: {e}")
            raise

        self.editor = None
        self._document = document
        self.page = "dashboard"
        logger.info(f"Saved document for account {self.identity.id}")
        return True

    def back(self) -> bool:
        """Leave review for upload, discarding the document and the selected file."""
        if self.page != "review":
            return self._reject("back", "not on the review page")
        if self.is_pending("commit"):
            return self._reject("back", "a save is in progress")
        self.editor = None
        self._document = None
        self.selected_file = None
        self.page = "upload"
        return True

    # ------------------------------------------
    # DASHBOARD
    # ------------------------------------------
    def dashboard_summary(self) -> Optional[DashboardSummary]:
        if self.page != "dashboard" or self._document is None:
            return None
        return build_dashboard_summary(self._document)

    def edit_profile(self) -> bool:
        """Reopen the saved document in a fresh editor."""
        if self.page != "dashboard":
            return self._reject("edit_profile", "not on the dashboard")
        if self.identity is None or self._document is None:
            return self._reject("edit_profile", "no saved document in this session")
        self._open_editor(self._document)
        return True

    @single_flight("logout")
    async def logout(self) -> bool:
        """
        Sign out and clear identity, file and document.

        The saved document stays in the store. A failing sign out call is
        logged; the local session is cleared either way.
        """
        if self.page != "dashboard":
            return self._reject("logout", "not on the dashboard")
        try:
            await self.identity_provider.sign_out()
        except Exception as e:
            logger.warning(f"Sign out call failed, clearing local session anyway: {e}")
        self._clear_session()
        self.page = "login"
        return True
