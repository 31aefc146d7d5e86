"""Repository protocols (ports) for the messaging context."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from messaging.domain.message import Message


@runtime_checkable
class IMessageRepository(Protocol):
    """Repository for Message persistence."""

    async def save(self, message: Message) -> None:
        """Persist a new message."""
        ...

    async def list_for_participant(self, user_id: str) -> list[Message]:
        """Every message sent or received by ``user_id``; order unspecified."""
        ...

    async def delete_by_institution(self, institution_id: str) -> int:
        """Delete every message of an institution; returns the count."""
        ...
