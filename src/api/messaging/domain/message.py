"""Message aggregate for pairwise direct messaging."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Message:
    """A direct message between two members of one institution.

    Messages are never edited or retracted.
    """

    id: str
    institution_id: str
    sender_id: str
    receiver_id: str
    text: str
    timestamp: int
    read: bool = False

    @property
    def participants(self) -> tuple[str, str]:
        """The pair used for membership queries."""
        return (self.sender_id, self.receiver_id)

    def involves(self, user_a: str, user_b: str) -> bool:
        """True if this message was exchanged between the two users."""
        return {self.sender_id, self.receiver_id} == {user_a, user_b}

    def counterpart_of(self, user_id: str) -> str | None:
        """The other participant, or None if ``user_id`` is not one."""
        if self.sender_id == user_id:
            return self.receiver_id
        if self.receiver_id == user_id:
            return self.sender_id
        return None
