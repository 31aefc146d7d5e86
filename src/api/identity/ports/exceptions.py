"""Identity provider exceptions.

Each maps onto the shared failure taxonomy so the façade can classify it
without knowing which provider raised it.
"""

from shared_kernel.errors import AccessDeniedError, ConflictError, ValidationFailedError


class InvalidCredentialsError(AccessDeniedError):
    """Raised when the email/password pair is rejected."""

    def __init__(self, message: str | None = None):
        super().__init__("invalid_credentials", message)


class IdentityNotFoundError(InvalidCredentialsError):
    """Raised when no identity exists for the email.

    Callers that do not care about the distinction treat it as invalid
    credentials; admin bootstrap uses it to provision the first login.
    """


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when registering an email the provider already knows."""

    def __init__(self, message: str | None = None):
        super().__init__("email_in_use", message)


class WeakPasswordError(ValidationFailedError):
    """Raised when the provider refuses a password as too weak."""

    def __init__(self, message: str | None = None):
        super().__init__("weak_password", message)
