"""Application layer for the identity context."""

from identity.application.services import AuthCallback, AuthService, AuthSubscription

__all__ = ["AuthCallback", "AuthService", "AuthSubscription"]
