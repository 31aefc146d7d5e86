"""Ports for the identity context."""

from identity.ports.exceptions import (
    EmailAlreadyRegisteredError,
    IdentityNotFoundError,
    InvalidCredentialsError,
    WeakPasswordError,
)
from identity.ports.identity_provider import IdentityProvider
from identity.ports.repositories import ITenantLookup, IUserProfileRepository, TenantRecord

__all__ = [
    "EmailAlreadyRegisteredError",
    "ITenantLookup",
    "IUserProfileRepository",
    "IdentityNotFoundError",
    "IdentityProvider",
    "InvalidCredentialsError",
    "TenantRecord",
    "WeakPasswordError",
]
