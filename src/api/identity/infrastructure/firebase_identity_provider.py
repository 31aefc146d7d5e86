"""Firebase Authentication adapter.

Talks to the Identity Toolkit REST API with httpx. Only the two endpoints
needed for password accounts are used; both authenticate with the project's
web API key passed as the ``key`` query parameter.
"""

from __future__ import annotations

from typing import Any

import httpx

from identity.domain.value_objects import Identity
from identity.infrastructure.observability import (
    DefaultIdentityProviderProbe,
    IdentityProviderProbe,
)
from identity.ports.exceptions import (
    EmailAlreadyRegisteredError,
    IdentityNotFoundError,
    InvalidCredentialsError,
    WeakPasswordError,
)
from infrastructure.settings import FirebaseSettings
from shared_kernel.errors import (
    AccessDeniedError,
    ServiceError,
    TransportError,
    ValidationFailedError,
)

SIGN_IN_ENDPOINT = "accounts:signInWithPassword"
SIGN_UP_ENDPOINT = "accounts:signUp"


def _error_code(response: httpx.Response) -> str:
    """Extract the Identity Toolkit error code.

    Messages look like ``"WEAK_PASSWORD : Password should be ..."``; only the
    leading code is stable.
    """
    try:
        message = response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return f"HTTP_{response.status_code}"
    return str(message).split(":", 1)[0].strip()


def _map_error(code: str) -> ServiceError:
    # Only sent when email-enumeration protection is off; protected projects
    # report unknown emails as INVALID_LOGIN_CREDENTIALS.
    if code == "EMAIL_NOT_FOUND":
        return IdentityNotFoundError()
    if code in ("INVALID_PASSWORD", "INVALID_LOGIN_CREDENTIALS", "USER_DISABLED"):
        return InvalidCredentialsError(code)
    if code == "EMAIL_EXISTS":
        return EmailAlreadyRegisteredError()
    if code == "WEAK_PASSWORD":
        return WeakPasswordError()
    if code in ("INVALID_EMAIL", "MISSING_EMAIL"):
        return ValidationFailedError("invalid_email", code)
    if code == "MISSING_PASSWORD":
        return ValidationFailedError("missing_password", code)
    if code == "TOO_MANY_ATTEMPTS_TRY_LATER":
        return AccessDeniedError("too_many_attempts", code)
    return TransportError("identity_provider_error", code)


class FirebaseIdentityProvider:
    """IdentityProvider over the Firebase Identity Toolkit REST API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://identitytoolkit.googleapis.com/v1",
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
        probe: IdentityProviderProbe | None = None,
    ):
        """Initialize the provider.

        Args:
            api_key: Firebase web API key
            base_url: Identity Toolkit base URL (overridable for the emulator)
            timeout: Request timeout in seconds
            client: Optional preconfigured client; the provider then does
                not close it
            probe: Optional domain probe for observability
        """
        self._api_key = api_key
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self._probe = probe or DefaultIdentityProviderProbe()

    @classmethod
    def from_settings(
        cls, settings: FirebaseSettings, probe: IdentityProviderProbe | None = None
    ) -> FirebaseIdentityProvider:
        return cls(
            api_key=settings.api_key.get_secret_value(),
            base_url=settings.identity_toolkit_url,
            timeout=settings.request_timeout_seconds,
            probe=probe,
        )

    async def sign_in(self, email: str, password: str) -> Identity:
        data = await self._post(
            SIGN_IN_ENDPOINT,
            {"email": email, "password": password, "returnSecureToken": True},
        )
        return Identity(uid=data["localId"], email=data.get("email", email))

    async def register(self, email: str, password: str) -> Identity:
        data = await self._post(
            SIGN_UP_ENDPOINT,
            {"email": email, "password": password, "returnSecureToken": True},
        )
        return Identity(uid=data["localId"], email=data.get("email", email))

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _post(self, endpoint: str, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            response = await self._client.post(
                f"/{endpoint}", params={"key": self._api_key}, json=payload
            )
        except httpx.HTTPError as e:
            self._probe.provider_unreachable(endpoint=endpoint, error=str(e))
            raise TransportError("identity_provider_unavailable", str(e)) from e

        if response.is_success:
            return response.json()

        code = _error_code(response)
        self._probe.provider_rejected(endpoint=endpoint, error_code=code)
        raise _map_error(code)
