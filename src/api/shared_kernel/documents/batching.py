"""Helpers for large multi-document writes."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from shared_kernel.documents.operations import DeleteDocument, DocumentWrite
from shared_kernel.documents.ports import DocumentStore

# Firestore caps a batch at 500 writes.
MAX_BATCH_WRITES = 400


def chunked(
    writes: Sequence[DocumentWrite], size: int = MAX_BATCH_WRITES
) -> Iterable[Sequence[DocumentWrite]]:
    """Split writes into batches no larger than ``size``."""
    for start in range(0, len(writes), size):
        yield writes[start : start + size]


async def delete_documents(
    store: DocumentStore, collection: str, document_ids: Iterable[str]
) -> int:
    """Delete documents in as few atomic batches as the backend allows.

    Each batch is atomic on its own; a failure part-way leaves earlier
    batches applied, so the caller must be safe to retry.

    Returns:
        Number of delete writes issued
    """
    writes = [DeleteDocument(collection, document_id) for document_id in document_ids]
    for batch in chunked(writes):
        await store.commit(batch)
    return len(writes)
