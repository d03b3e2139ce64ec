"""test_in_memory_gateways.py
Test the process-local identity provider and record store.
"""
import asyncio

import pytest

from follio.exceptions import AuthError
from follio.models import ResumeDocument
from follio.document import operations
from follio.gateways.identity_provider import InMemoryIdentityProvider
from follio.gateways.persistence_gateway import InMemoryPersistenceGateway
from follio.test_helpers.documents import make_document


class TestInMemoryPersistenceGateway:

    def test_load_unknown_account_returns_none(self):
        assert asyncio.run(InMemoryPersistenceGateway().load_document("nobody")) is None

    def test_save_then_load_returns_equal_document(self):
        gateway = InMemoryPersistenceGateway()
        document = make_document()
        asyncio.run(gateway.save_document("acct-1", "Jane Doe", document, email="jane@example.com"))
        assert asyncio.run(gateway.load_document("acct-1")) == document
        assert gateway.records["acct-1"]["email"] == "jane@example.com"

    def test_second_save_replaces_first(self):
        gateway = InMemoryPersistenceGateway()
        first = make_document()
        second = operations.remove_skill_at(first, 0)
        asyncio.run(gateway.save_document("acct-1", "Jane", first))
        asyncio.run(gateway.save_document("acct-1", "Jane D.", second))
        assert asyncio.run(gateway.load_document("acct-1")) == second
        assert gateway.records["acct-1"]["name"] == "Jane D."

    def test_empty_document_is_stored(self):
        gateway = InMemoryPersistenceGateway()
        asyncio.run(gateway.save_document("acct-1", "Jane", ResumeDocument.empty()))
        assert asyncio.run(gateway.load_document("acct-1")) == ResumeDocument.empty()

    def test_stored_record_is_a_copy(self):
        gateway = InMemoryPersistenceGateway()
        asyncio.run(gateway.save_document("acct-1", "Jane", make_document()))
        loaded = asyncio.run(gateway.load_document("acct-1"))
        gateway.records["acct-1"]["resume_data"]["skills"].append("Injected")
        assert "Injected" not in loaded.skills


class TestInMemoryIdentityProvider:

    def test_sign_up_creates_session(self):
        provider = InMemoryIdentityProvider()
        identity = asyncio.run(provider.sign_up("Jane@Example.com", "pw"))
        assert identity.email == "jane@example.com"
        assert asyncio.run(provider.get_current_session()) == identity

    def test_sign_in_is_case_insensitive_on_email(self):
        provider = InMemoryIdentityProvider()
        identity = asyncio.run(provider.sign_up("jane@example.com", "pw"))
        asyncio.run(provider.sign_out())
        assert asyncio.run(provider.sign_in("JANE@example.com", "pw")) == identity

    @pytest.mark.parametrize(
        "email, password",
        [("not-an-email", "pw"), ("", "pw"), ("jane@example.com", "")],
    )
    def test_sign_up_rejects_bad_input(self, email, password):
        with pytest.raises(AuthError):
            asyncio.run(InMemoryIdentityProvider().sign_up(email, password))

    def test_duplicate_sign_up_raises(self):
        provider = InMemoryIdentityProvider()
        asyncio.run(provider.sign_up("jane@example.com", "pw"))
        with pytest.raises(AuthError, match="already registered"):
            asyncio.run(provider.sign_up("jane@example.com", "other"))

    def test_wrong_password_raises(self):
        provider = InMemoryIdentityProvider()
        asyncio.run(provider.sign_up("jane@example.com", "pw"))
        with pytest.raises(AuthError, match="Invalid login credentials"):
            asyncio.run(provider.sign_in("jane@example.com", "nope"))

    def test_provider_url_uses_redirect(self):
        provider = InMemoryIdentityProvider(redirect_url="https://app.test/callback")
        url = asyncio.run(provider.sign_in_with_provider("linkedin_oidc"))
        assert url == "https://app.test/callback?provider=linkedin_oidc"

    def test_sign_out_clears_session(self):
        provider = InMemoryIdentityProvider()
        asyncio.run(provider.sign_up("jane@example.com", "pw"))
        asyncio.run(provider.sign_out())
        assert asyncio.run(provider.get_current_session()) is None
