"""Identity domain: profiles, identities and sessions."""

from identity.domain.profile import EDITABLE_FIELDS, UserProfile, default_avatar_url
from identity.domain.session import AuthSession, SessionListener
from identity.domain.value_objects import Identity, ProfileUpdate, normalize_email

__all__ = [
    "AuthSession",
    "EDITABLE_FIELDS",
    "Identity",
    "ProfileUpdate",
    "SessionListener",
    "UserProfile",
    "default_avatar_url",
    "normalize_email",
]
