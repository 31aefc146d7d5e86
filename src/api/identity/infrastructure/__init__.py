"""Identity infrastructure adapters."""

from identity.infrastructure.firebase_identity_provider import FirebaseIdentityProvider
from identity.infrastructure.local_identity_provider import LocalIdentityProvider
from identity.infrastructure.profile_repository import UserProfileRepository

__all__ = [
    "FirebaseIdentityProvider",
    "LocalIdentityProvider",
    "UserProfileRepository",
]
