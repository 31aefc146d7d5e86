"""Shared infrastructure dependencies.

Provides ONLY raw infrastructure resources (document stores).
Does NOT import from bounded contexts to maintain DDD boundaries.
"""

from __future__ import annotations

from infrastructure.database.engines import create_document_engine
from infrastructure.documents import InMemoryDocumentStore, SqlDocumentStore
from infrastructure.settings import (
    FirebaseSettings,
    StorageSettings,
    get_firebase_settings,
    get_storage_settings,
)
from shared_kernel.documents import DocumentStore


async def open_document_store(
    storage: StorageSettings | None = None,
    firebase: FirebaseSettings | None = None,
) -> DocumentStore:
    """Create the DocumentStore selected by ``storage.backend``.

    The Firestore modules are imported lazily so the local backends work
    without Google credentials on the machine.

    Args:
        storage: Storage settings (defaults to environment settings)
        firebase: Firebase settings used by the firestore backend

    Returns:
        A ready-to-use DocumentStore
    """
    storage = storage or get_storage_settings()

    if storage.backend == "memory":
        return InMemoryDocumentStore()

    if storage.backend == "firestore":
        from infrastructure.documents.firestore_store import (
            FirestoreDocumentStore,
            create_firestore_client,
        )

        client = create_firestore_client(firebase or get_firebase_settings())
        return FirestoreDocumentStore(client)

    store = SqlDocumentStore(create_document_engine(storage))
    await store.create_schema()
    return store
