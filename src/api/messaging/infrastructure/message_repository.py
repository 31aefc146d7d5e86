"""DocumentStore implementation of IMessageRepository.

Messages live in the ``messages`` collection. Each document carries a
``participants`` array so both directions of a thread are found with one
array-contains query.
"""

from __future__ import annotations

from typing import Any

from messaging.domain.message import Message
from messaging.ports.repositories import IMessageRepository
from shared_kernel.documents import (
    CreateDocument,
    DocumentStore,
    array_contains,
    delete_documents,
    eq,
)

MESSAGES = "messages"


def message_to_document(message: Message) -> dict[str, Any]:
    return {
        "id": message.id,
        "institutionId": message.institution_id,
        "senderId": message.sender_id,
        "receiverId": message.receiver_id,
        "text": message.text,
        "timestamp": message.timestamp,
        "read": message.read,
        "participants": list(message.participants),
    }


def message_from_document(document: dict[str, Any]) -> Message:
    return Message(
        id=document["id"],
        institution_id=document.get("institutionId", ""),
        sender_id=document["senderId"],
        receiver_id=document["receiverId"],
        text=document.get("text", ""),
        timestamp=int(document.get("timestamp", 0)),
        read=bool(document.get("read", False)),
    )


class MessageRepository(IMessageRepository):
    """Repository for messages over a DocumentStore."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def save(self, message: Message) -> None:
        await self._store.commit(
            [CreateDocument(MESSAGES, message.id, message_to_document(message))]
        )

    async def list_for_participant(self, user_id: str) -> list[Message]:
        documents = await self._store.query(
            MESSAGES, [array_contains("participants", user_id)]
        )
        return [message_from_document(document) for document in documents]

    async def delete_by_institution(self, institution_id: str) -> int:
        documents = await self._store.query(
            MESSAGES, [eq("institutionId", institution_id)]
        )
        return await delete_documents(
            self._store, MESSAGES, [document["id"] for document in documents]
        )
