"""Observability for identity application services."""

from identity.application.observability.auth_service_probe import (
    AuthServiceProbe,
    DefaultAuthServiceProbe,
)

__all__ = [
    "AuthServiceProbe",
    "DefaultAuthServiceProbe",
]
