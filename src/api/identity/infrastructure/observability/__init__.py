"""Observability for identity infrastructure adapters."""

from identity.infrastructure.observability.identity_provider_probe import (
    DefaultIdentityProviderProbe,
    IdentityProviderProbe,
)

__all__ = [
    "DefaultIdentityProviderProbe",
    "IdentityProviderProbe",
]
