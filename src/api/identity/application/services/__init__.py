"""Application services for the identity context."""

from identity.application.services.auth_service import (
    AuthCallback,
    AuthService,
    AuthSubscription,
)

__all__ = [
    "AuthCallback",
    "AuthService",
    "AuthSubscription",
]
