"""identity_provider.py
Holds the IdentityProvider interface and an in-memory implementation.
"""
import uuid
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple
from urllib.parse import urlencode

from follio.config import FOLLIO_DEFAULTS
from follio.exceptions import AuthError
from follio.models import Identity

SOCIAL_PROVIDERS = ("google", "linkedin_oidc")


class IdentityProvider(ABC):
    """
    Interface to the external identity provider.

    All calls may suspend on the network. Failed sign in / sign up attempts
    raise `AuthError`.
    """

    @abstractmethod
    async def get_current_session(self) -> Optional[Identity]:
        """Return the identity of an existing session, or None."""
        pass

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> Identity:
        pass

    @abstractmethod
    async def sign_up(self, email: str, password: str) -> Identity:
        pass

    @abstractmethod
    async def sign_in_with_provider(self, provider: str) -> str:
        """Start a social sign in and return the URL to redirect the user to."""
        pass

    @abstractmethod
    async def sign_out(self) -> None:
        pass


class InMemoryIdentityProvider(IdentityProvider):
    """
    Process-local identity provider for local runs and tests.

    Accounts are kept in a dict keyed by lowercase email. Passwords are compared
    as given; this class is not meant to guard real accounts.

    Args:
        redirect_url (str): Base URL returned by `sign_in_with_provider`.
    """

    def __init__(self, redirect_url: str = FOLLIO_DEFAULTS.OAUTH_REDIRECT_URL):
        self.redirect_url = redirect_url
        self.accounts: Dict[str, Tuple[str, Identity]] = {}
        self.current: Optional[Identity] = None

    async def get_current_session(self) -> Optional[Identity]:
        return self.current

    async def sign_in(self, email: str, password: str) -> Identity:
        account = self.accounts.get(email.strip().lower())
        if account is None or account[0] != password:
            raise AuthError("Invalid login credentials")
        self.current = account[1]
        return self.current

    async def sign_up(self, email: str, password: str) -> Identity:
        key = email.strip().lower()
        if not key or "@" not in key:
            raise AuthError("A valid email address is required")
        if not password:
            raise AuthError("Password should not be empty")
        if key in self.accounts:
            raise AuthError("User already registered")
        identity = Identity(id=uuid.uuid4().hex, email=key)
        self.accounts[key] = (password, identity)
        self.current = identity
        return identity

    async def sign_in_with_provider(self, provider: str) -> str:
        if provider not in SOCIAL_PROVIDERS:
            raise AuthError("Unsupported provider", provider=provider)
        return f"{self.redirect_url}?{urlencode({'provider': provider})}"

    async def sign_out(self) -> None:
        self.current = None
