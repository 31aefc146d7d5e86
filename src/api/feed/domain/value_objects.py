"""Value objects for the feed domain."""

from __future__ import annotations

from enum import StrEnum

from shared_kernel.errors import ValidationFailedError


class PostType(StrEnum):
    """Which board a post appears on."""

    NEWSLETTER = "NEWSLETTER"
    JOB = "JOB"
    EVENTS = "EVENTS"

    @classmethod
    def parse(cls, value: str | None) -> PostType:
        try:
            return cls(value)
        except ValueError as e:
            raise ValidationFailedError("unknown_post_type") from e


class PostStatus(StrEnum):
    """Moderation state. PENDING -> VERIFIED is the only transition."""

    PENDING = "PENDING"
    VERIFIED = "VERIFIED"

    @classmethod
    def parse(cls, value: str | None) -> PostStatus:
        try:
            return cls(value)
        except ValueError as e:
            raise ValidationFailedError("unknown_post_status") from e
