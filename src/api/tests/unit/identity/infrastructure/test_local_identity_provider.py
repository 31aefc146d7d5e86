"""Unit tests for the document-store identity provider."""

import pytest

from identity.infrastructure import LocalIdentityProvider
from identity.infrastructure.local_identity_provider import CREDENTIALS
from identity.infrastructure.passwords import hash_password, verify_password
from identity.ports.exceptions import (
    EmailAlreadyRegisteredError,
    IdentityNotFoundError,
    InvalidCredentialsError,
    WeakPasswordError,
)


@pytest.fixture
def provider(store):
    return LocalIdentityProvider(store)


class TestPasswords:
    """Tests for bcrypt helpers."""

    def test_hash_and_verify(self):
        password_hash = hash_password("secret123")

        assert password_hash != "secret123"
        assert verify_password("secret123", password_hash)
        assert not verify_password("wrong", password_hash)

    def test_malformed_hash_does_not_verify(self):
        assert verify_password("secret123", "not-a-bcrypt-hash") is False


class TestLocalIdentityProvider:
    """Tests for register and sign_in."""

    @pytest.mark.asyncio
    async def test_register_then_sign_in(self, provider, store):
        identity = await provider.register(" Rohan@NFSU.ac.in ", "secret123")

        signed_in = await provider.sign_in("rohan@nfsu.ac.in", "secret123")

        assert signed_in == identity
        assert identity.email == "rohan@nfsu.ac.in"
        credential = await store.get(CREDENTIALS, "rohan@nfsu.ac.in")
        assert credential["uid"] == identity.uid
        assert "secret123" not in credential["passwordHash"]

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, provider):
        await provider.register("rohan@nfsu.ac.in", "secret123")

        with pytest.raises(EmailAlreadyRegisteredError) as exc_info:
            await provider.register("ROHAN@nfsu.ac.in", "other-pass")

        assert exc_info.value.reason == "email_in_use"

    @pytest.mark.asyncio
    async def test_short_password_rejected(self, provider):
        with pytest.raises(WeakPasswordError):
            await provider.register("rohan@nfsu.ac.in", "12345")

    @pytest.mark.asyncio
    async def test_unknown_email(self, provider):
        with pytest.raises(IdentityNotFoundError) as exc_info:
            await provider.sign_in("nobody@nfsu.ac.in", "secret123")

        assert exc_info.value.reason == "invalid_credentials"

    @pytest.mark.asyncio
    async def test_wrong_password(self, provider):
        await provider.register("rohan@nfsu.ac.in", "secret123")

        with pytest.raises(InvalidCredentialsError) as exc_info:
            await provider.sign_in("rohan@nfsu.ac.in", "wrong-pass")

        assert not isinstance(exc_info.value, IdentityNotFoundError)
