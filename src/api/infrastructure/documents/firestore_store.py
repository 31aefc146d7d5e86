"""Firestore-backed DocumentStore (the remote backend).

Uses the async Firestore client from google-cloud-firestore, created through
firebase-admin. Field transforms, batches and transactions map onto the
native Firestore primitives, so like-toggles and comment appends never do a
client-side read-modify-write.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Sequence
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import firebase_admin
from firebase_admin import credentials, firestore_async
from google.api_core import exceptions as google_exceptions
from google.cloud.firestore import (
    ArrayRemove as FirestoreArrayRemove,
    ArrayUnion as FirestoreArrayUnion,
    AsyncClient,
    Increment as FirestoreIncrement,
    async_transactional,
)
from google.cloud.firestore_v1.base_query import FieldFilter as FirestoreFieldFilter

from infrastructure.observability import DefaultDocumentStoreProbe, DocumentStoreProbe
from shared_kernel.documents import (
    ArrayRemove,
    ArrayUnion,
    CreateDocument,
    Delete,
    DeleteDocument,
    DocumentAlreadyExistsError,
    DocumentNotFoundError,
    DocumentWrite,
    FieldFilter,
    FilterOp,
    Increment,
    Mutation,
    Replace,
    SetDocument,
)
from shared_kernel.errors import TransportError

if TYPE_CHECKING:
    from infrastructure.settings import FirebaseSettings

BACKEND = "firestore"

_FIRESTORE_OPS = {
    FilterOp.EQUAL: "==",
    FilterOp.ARRAY_CONTAINS: "array_contains",
}


def create_firestore_client(settings: FirebaseSettings) -> AsyncClient:
    """Create an async Firestore client for the configured Firebase project.

    Reuses the default firebase-admin app when one is already initialized.
    """
    try:
        app = firebase_admin.get_app()
    except ValueError:
        credential = (
            credentials.Certificate(settings.credentials_path)
            if settings.credentials_path
            else credentials.ApplicationDefault()
        )
        options = {"projectId": settings.project_id} if settings.project_id else None
        app = firebase_admin.initialize_app(credential, options)

    return firestore_async.client(app)


def _to_firestore_value(value: Any) -> Any:
    if isinstance(value, Increment):
        return FirestoreIncrement(value.amount)
    if isinstance(value, ArrayUnion):
        return FirestoreArrayUnion(list(value.values))
    if isinstance(value, ArrayRemove):
        return FirestoreArrayRemove(list(value.values))
    return value


class FirestoreDocumentStore:
    """DocumentStore over Cloud Firestore collections."""

    def __init__(self, client: AsyncClient, probe: DocumentStoreProbe | None = None):
        """Initialize the store.

        Args:
            client: Async Firestore client (see create_firestore_client)
            probe: Optional domain probe for observability
        """
        self._client = client
        self._probe = probe or DefaultDocumentStoreProbe()
        self._probe.store_opened(BACKEND)

    @asynccontextmanager
    async def _translate_errors(self, operation: str, collection: str) -> AsyncIterator[None]:
        try:
            yield
        except google_exceptions.NotFound:
            raise
        except google_exceptions.AlreadyExists:
            raise
        except (google_exceptions.GoogleAPICallError, google_exceptions.RetryError) as e:
            self._probe.operation_failed(BACKEND, operation, collection, e)
            raise TransportError("storage_unavailable", str(e)) from e

    def _ref(self, collection: str, document_id: str):
        return self._client.collection(collection).document(document_id)

    async def get(self, collection: str, document_id: str) -> dict[str, Any] | None:
        async with self._translate_errors("get", collection):
            snapshot = await self._ref(collection, document_id).get()
        return snapshot.to_dict() if snapshot.exists else None

    async def query(
        self, collection: str, filters: Sequence[FieldFilter] = ()
    ) -> list[dict[str, Any]]:
        query = self._client.collection(collection)
        for f in filters:
            query = query.where(
                filter=FirestoreFieldFilter(f.field, _FIRESTORE_OPS[f.op], f.value)
            )

        async with self._translate_errors("query", collection):
            return [snapshot.to_dict() async for snapshot in query.stream()]

    async def set(
        self, collection: str, document_id: str, data: dict[str, Any]
    ) -> None:
        async with self._translate_errors("set", collection):
            await self._ref(collection, document_id).set(data)

    async def update(
        self, collection: str, document_id: str, changes: dict[str, Any]
    ) -> None:
        payload = {key: _to_firestore_value(value) for key, value in changes.items()}
        try:
            async with self._translate_errors("update", collection):
                await self._ref(collection, document_id).update(payload)
        except google_exceptions.NotFound as e:
            raise DocumentNotFoundError(collection, document_id) from e

    async def delete(self, collection: str, document_id: str) -> None:
        async with self._translate_errors("delete", collection):
            await self._ref(collection, document_id).delete()

    async def commit(self, writes: Sequence[DocumentWrite]) -> None:
        batch = self._client.batch()
        for write in writes:
            ref = self._ref(write.collection, write.document_id)
            if isinstance(write, CreateDocument):
                batch.create(ref, write.data)
            elif isinstance(write, SetDocument):
                batch.set(ref, write.data)
            elif isinstance(write, DeleteDocument):
                batch.delete(ref)

        collections = ",".join(sorted({w.collection for w in writes}))
        try:
            async with self._translate_errors("commit", collections):
                await batch.commit()
        except google_exceptions.AlreadyExists as e:
            raise DocumentAlreadyExistsError(collections) from e

        self._probe.batch_committed(BACKEND, len(writes))

    async def transact(
        self,
        collection: str,
        document_id: str,
        mutate: Callable[[dict[str, Any] | None], Mutation],
    ) -> dict[str, Any] | None:
        ref = self._ref(collection, document_id)
        transaction = self._client.transaction()

        @async_transactional
        async def _run(transaction) -> dict[str, Any] | None:
            snapshot = await ref.get(transaction=transaction)
            current = snapshot.to_dict() if snapshot.exists else None
            mutation = mutate(current)

            if isinstance(mutation, Replace):
                transaction.set(ref, mutation.data)
                return mutation.data
            if isinstance(mutation, Delete):
                transaction.delete(ref)
                return None
            return current

        async with self._translate_errors("transact", collection):
            return await _run(transaction)

    async def close(self) -> None:
        self._probe.store_closed(BACKEND)
