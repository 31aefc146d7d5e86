"""UserProfile aggregate for the identity context."""

from __future__ import annotations

from dataclasses import dataclass, replace
from urllib.parse import quote

from shared_kernel.authorization import UserRole

AVATAR_SERVICE_URL = "https://ui-avatars.com/api/"

# Fields a member may change on their own profile.
EDITABLE_FIELDS = frozenset({"name", "bio", "avatar", "batch"})


def default_avatar_url(name: str) -> str:
    """Initials avatar for a display name."""
    return f"{AVATAR_SERVICE_URL}?name={quote(name, safe='!~*()')}"


@dataclass(frozen=True)
class UserProfile:
    """A person's profile within exactly one institution.

    Business rules:
    - institution_id never changes after creation
    - role decides which façade operations accept the profile as caller
    - a blocked profile cannot log in or act, but stays visible to admins
    """

    uid: str
    institution_id: str
    name: str
    role: UserRole
    email: str | None = None
    roll_no: str | None = None
    avatar: str | None = None
    batch: str | None = None
    bio: str | None = None
    blocked: bool = False

    def with_blocked(self, blocked: bool) -> UserProfile:
        """Return a copy with the blocked flag set."""
        return replace(self, blocked=blocked)

    def with_changes(self, **changes: str | None) -> UserProfile:
        """Return a copy with editable fields changed.

        Raises:
            ValueError: If a non-editable field is included
        """
        forbidden = set(changes) - EDITABLE_FIELDS
        if forbidden:
            raise ValueError(f"Fields cannot be edited: {sorted(forbidden)}")
        return replace(self, **changes)
