"""Persistence adapter port.

``DocumentStore`` is the single interface every service is written against.
Backends (Firestore, SQL, in-memory) implement it with identical contracts,
so switching backends never touches business logic.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from shared_kernel.documents.operations import (
        DocumentWrite,
        FieldFilter,
        Mutation,
    )


@runtime_checkable
class DocumentStore(Protocol):
    """Collection-oriented document persistence.

    Documents are JSON-compatible dicts addressed by (collection, id).
    Result ordering is never guaranteed; callers sort.

    Every method raises ``TransportError`` when the backend is unreachable.
    """

    async def get(self, collection: str, document_id: str) -> dict[str, Any] | None:
        """Fetch a single document.

        Returns:
            The document data, or None if absent
        """
        ...

    async def query(
        self, collection: str, filters: Sequence[FieldFilter] = ()
    ) -> list[dict[str, Any]]:
        """Return every document matching all filters.

        An empty filter sequence fetches the full collection.
        """
        ...

    async def set(
        self, collection: str, document_id: str, data: dict[str, Any]
    ) -> None:
        """Create or overwrite a document (upsert by id)."""
        ...

    async def update(
        self, collection: str, document_id: str, changes: dict[str, Any]
    ) -> None:
        """Apply a partial update atomically.

        Values may be plain JSON values or field transforms
        (Increment, ArrayUnion, ArrayRemove).

        Raises:
            DocumentNotFoundError: If the document does not exist
        """
        ...

    async def delete(self, collection: str, document_id: str) -> None:
        """Delete a document; deleting an absent document is a no-op."""
        ...

    async def commit(self, writes: Sequence[DocumentWrite]) -> None:
        """Apply a batch of writes atomically (all or nothing).

        Raises:
            DocumentAlreadyExistsError: If a CreateDocument target exists
        """
        ...

    async def transact(
        self,
        collection: str,
        document_id: str,
        mutate: Callable[[dict[str, Any] | None], Mutation],
    ) -> dict[str, Any] | None:
        """Atomically read, mutate and write back a single document.

        ``mutate`` receives the current document (or None) and returns a
        Replace, a Delete, or None to leave the document untouched. It may
        raise to abort without writing; the exception propagates. Backends
        may invoke ``mutate`` more than once on contention, so it must be
        free of side effects.

        Returns:
            The document as stored after the mutation (None if absent or deleted)
        """
        ...

    async def close(self) -> None:
        """Release backend resources."""
        ...
