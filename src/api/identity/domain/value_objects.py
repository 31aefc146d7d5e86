"""Value objects for the identity domain."""

from __future__ import annotations

from dataclasses import dataclass


def normalize_email(email: str) -> str:
    """Canonical form used for comparisons and credential keys."""
    return email.strip().lower()


@dataclass(frozen=True)
class Identity:
    """An authenticated identity issued by the identity provider.

    The uid doubles as the key of the matching UserProfile document.
    """

    uid: str
    email: str


@dataclass(frozen=True)
class ProfileUpdate:
    """Self-service profile edit; None leaves a field unchanged."""

    name: str | None = None
    bio: str | None = None
    avatar: str | None = None
    batch: str | None = None

    def changes(self) -> dict[str, str]:
        """The fields that were actually provided."""
        return {
            key: value
            for key, value in (
                ("name", self.name),
                ("bio", self.bio),
                ("avatar", self.avatar),
                ("batch", self.batch),
            )
            if value is not None
        }
