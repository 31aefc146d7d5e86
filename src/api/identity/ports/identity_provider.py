"""Identity provider port."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from identity.domain.value_objects import Identity


@runtime_checkable
class IdentityProvider(Protocol):
    """Authenticates email/password pairs and registers new identities."""

    async def sign_in(self, email: str, password: str) -> Identity:
        """Authenticate an existing identity.

        Raises:
            IdentityNotFoundError: If no identity exists for the email
            InvalidCredentialsError: If the password does not match
            TransportError: If the provider cannot be reached
        """
        ...

    async def register(self, email: str, password: str) -> Identity:
        """Create a new identity.

        Raises:
            EmailAlreadyRegisteredError: If the email is already registered
            WeakPasswordError: If the password is refused
            TransportError: If the provider cannot be reached
        """
        ...

    async def close(self) -> None:
        """Release network resources held by the provider."""
        ...
