"""In-memory DocumentStore for development and tests.

Documents are deep-copied on the way in and out so callers can never mutate
stored state by accident. A single asyncio lock serializes writes, which
makes ``transact`` and ``commit`` atomic within the event loop.
"""

from __future__ import annotations

import asyncio
import copy
from collections.abc import Callable, Sequence
from typing import Any

from infrastructure.observability import DefaultDocumentStoreProbe, DocumentStoreProbe
from shared_kernel.documents import (
    CreateDocument,
    Delete,
    DeleteDocument,
    DocumentAlreadyExistsError,
    DocumentNotFoundError,
    DocumentWrite,
    FieldFilter,
    Mutation,
    Replace,
    SetDocument,
)
from shared_kernel.documents.operations import apply_changes

BACKEND = "memory"


class InMemoryDocumentStore:
    """Dict-backed implementation of the DocumentStore protocol."""

    def __init__(self, probe: DocumentStoreProbe | None = None):
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._lock = asyncio.Lock()
        self._probe = probe or DefaultDocumentStoreProbe()
        self._probe.store_opened(BACKEND)

    def _collection(self, name: str) -> dict[str, dict[str, Any]]:
        return self._collections.setdefault(name, {})

    async def get(self, collection: str, document_id: str) -> dict[str, Any] | None:
        document = self._collection(collection).get(document_id)
        return copy.deepcopy(document) if document is not None else None

    async def query(
        self, collection: str, filters: Sequence[FieldFilter] = ()
    ) -> list[dict[str, Any]]:
        return [
            copy.deepcopy(document)
            for document in self._collection(collection).values()
            if all(f.matches(document) for f in filters)
        ]

    async def set(
        self, collection: str, document_id: str, data: dict[str, Any]
    ) -> None:
        async with self._lock:
            self._collection(collection)[document_id] = copy.deepcopy(data)

    async def update(
        self, collection: str, document_id: str, changes: dict[str, Any]
    ) -> None:
        async with self._lock:
            documents = self._collection(collection)
            if document_id not in documents:
                raise DocumentNotFoundError(collection, document_id)
            documents[document_id] = copy.deepcopy(
                apply_changes(documents[document_id], changes)
            )

    async def delete(self, collection: str, document_id: str) -> None:
        async with self._lock:
            self._collection(collection).pop(document_id, None)

    async def commit(self, writes: Sequence[DocumentWrite]) -> None:
        async with self._lock:
            for write in writes:
                if (
                    isinstance(write, CreateDocument)
                    and write.document_id in self._collection(write.collection)
                ):
                    raise DocumentAlreadyExistsError(write.collection, write.document_id)

            for write in writes:
                documents = self._collection(write.collection)
                if isinstance(write, (CreateDocument, SetDocument)):
                    documents[write.document_id] = copy.deepcopy(write.data)
                elif isinstance(write, DeleteDocument):
                    documents.pop(write.document_id, None)

        self._probe.batch_committed(BACKEND, len(writes))

    async def transact(
        self,
        collection: str,
        document_id: str,
        mutate: Callable[[dict[str, Any] | None], Mutation],
    ) -> dict[str, Any] | None:
        async with self._lock:
            documents = self._collection(collection)
            current = documents.get(document_id)
            mutation = mutate(copy.deepcopy(current) if current is not None else None)

            if isinstance(mutation, Replace):
                documents[document_id] = copy.deepcopy(mutation.data)
                return copy.deepcopy(mutation.data)
            if isinstance(mutation, Delete):
                documents.pop(document_id, None)
                return None
            return copy.deepcopy(current) if current is not None else None

    async def close(self) -> None:
        self._probe.store_closed(BACKEND)

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self._collections.clear()
