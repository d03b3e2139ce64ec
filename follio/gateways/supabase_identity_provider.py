"""supabase_identity_provider.py
Holds SupabaseIdentityProvider, delegating accounts and sessions to Supabase Auth.
"""
import asyncio
from typing import Any, Optional

from supabase import Client

from follio.config import FOLLIO_DEFAULTS
from follio.exceptions import AuthError
from follio.models import Identity
from follio.gateways.identity_provider import IdentityProvider


def identity_from_user(user: Any) -> Identity:
    """Convert a Supabase auth user into an Identity."""
    metadata = getattr(user, "user_metadata", None) or {}
    return Identity(
        id=user.id,
        email=user.email or "",
        name=metadata.get("name", ""),
    )


class SupabaseIdentityProvider(IdentityProvider):
    """
    IdentityProvider backed by Supabase Auth. The client is synchronous, so
    each auth call runs in a worker thread.

    Args:
        client (supabase.Client): A connected client, usually owned by AppContext.
        redirect_url (str): Where social sign in returns to.
    """

    def __init__(self, client: Client, redirect_url: str = FOLLIO_DEFAULTS.OAUTH_REDIRECT_URL):
        self.client = client
        self.redirect_url = redirect_url

    async def get_current_session(self) -> Optional[Identity]:
        session = await asyncio.to_thread(self.client.auth.get_session)
        if session is None or session.user is None:
            return None
        return identity_from_user(session.user)

    async def sign_in(self, email: str, password: str) -> Identity:
        try:
            response = await asyncio.to_thread(
                self.client.auth.sign_in_with_password,
                {"email": email, "password": password},
            )
        except Exception as e:
            raise AuthError(str(e), original_exception=e)
        return self._identity_from_response(response)

    async def sign_up(self, email: str, password: str) -> Identity:
        try:
            response = await asyncio.to_thread(
                self.client.auth.sign_up, {"email": email, "password": password}
            )
        except Exception as e:
            raise AuthError(str(e), original_exception=e)
        return self._identity_from_response(response)

    async def sign_in_with_provider(self, provider: str) -> str:
        try:
            response = await asyncio.to_thread(self.client.auth.sign_in_with_oauth, {
                "provider": provider,
                "options": {"redirect_to": self.redirect_url},
            })
        except Exception as e:
            raise AuthError("Social login failed", provider=provider, original_exception=e)
        return response.url

    async def sign_out(self) -> None:
        await asyncio.to_thread(self.client.auth.sign_out)

    @staticmethod
    def _identity_from_response(response: Any) -> Identity:
        if response is None or response.user is None:
            raise AuthError("Identity provider returned no user")
        return identity_from_user(response.user)
