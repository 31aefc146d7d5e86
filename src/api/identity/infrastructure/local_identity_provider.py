"""Identity provider backed by the document store.

Used with the local backends. Credentials live in the ``credentials``
collection keyed by normalized email, holding the uid and a bcrypt hash.
"""

from __future__ import annotations

from identity.domain.value_objects import Identity, normalize_email
from identity.infrastructure.passwords import hash_password_async, verify_password_async
from identity.ports.exceptions import (
    EmailAlreadyRegisteredError,
    IdentityNotFoundError,
    InvalidCredentialsError,
    WeakPasswordError,
)
from shared_kernel.documents import (
    CreateDocument,
    DocumentAlreadyExistsError,
    DocumentStore,
)
from shared_kernel.identifiers import generate_id

CREDENTIALS = "credentials"

# Same floor Firebase Authentication applies.
MIN_PASSWORD_LENGTH = 6


class LocalIdentityProvider:
    """IdentityProvider storing bcrypt credentials next to the data."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def sign_in(self, email: str, password: str) -> Identity:
        key = normalize_email(email)
        document = await self._store.get(CREDENTIALS, key)
        if document is None:
            raise IdentityNotFoundError()
        if not await verify_password_async(password, document["passwordHash"]):
            raise InvalidCredentialsError()
        return Identity(uid=document["uid"], email=document["email"])

    async def register(self, email: str, password: str) -> Identity:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise WeakPasswordError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )

        key = normalize_email(email)
        identity = Identity(uid=generate_id(), email=key)
        credential = {
            "uid": identity.uid,
            "email": key,
            "passwordHash": await hash_password_async(password),
        }
        try:
            await self._store.commit([CreateDocument(CREDENTIALS, key, credential)])
        except DocumentAlreadyExistsError as e:
            raise EmailAlreadyRegisteredError() from e
        return identity

    async def close(self) -> None:
        return None
