"""SQLAlchemy-backed DocumentStore.

The local persistent backend: collections serialized as JSON rows in one
table. Filters are evaluated in Python after a per-collection scan, which
keeps the store portable between SQLite and PostgreSQL.

Writes run inside a session transaction with ``SELECT ... FOR UPDATE`` and
are additionally serialized by an in-process lock, since SQLite ignores row
locks and the store is meant for a single process.
"""

from __future__ import annotations

import asyncio
import copy
from collections.abc import AsyncIterator, Callable, Sequence
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.models import Base, DocumentModel
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
from shared_kernel.errors import TransportError

BACKEND = "sql"


class SqlDocumentStore:
    """DocumentStore over a single ``documents`` table."""

    def __init__(self, engine: AsyncEngine, probe: DocumentStoreProbe | None = None):
        """Initialize the store.

        Args:
            engine: Async engine (see infrastructure.database.create_document_engine)
            probe: Optional domain probe for observability
        """
        self._engine = engine
        self._session_factory = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False
        )
        self._write_lock = asyncio.Lock()
        self._probe = probe or DefaultDocumentStoreProbe()

    async def create_schema(self) -> None:
        """Create the documents table if it does not exist."""
        async with self._translate_errors("create_schema", "*"):
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        self._probe.store_opened(BACKEND)

    @asynccontextmanager
    async def _translate_errors(self, operation: str, collection: str) -> AsyncIterator[None]:
        try:
            yield
        except (OperationalError, InterfaceError) as e:
            self._probe.operation_failed(BACKEND, operation, collection, e)
            raise TransportError("storage_unavailable", str(e)) from e

    async def get(self, collection: str, document_id: str) -> dict[str, Any] | None:
        async with self._translate_errors("get", collection):
            async with self._session_factory() as session:
                model = await session.get(DocumentModel, (collection, document_id))
                return copy.deepcopy(model.data) if model is not None else None

    async def query(
        self, collection: str, filters: Sequence[FieldFilter] = ()
    ) -> list[dict[str, Any]]:
        async with self._translate_errors("query", collection):
            async with self._session_factory() as session:
                stmt = select(DocumentModel).where(DocumentModel.collection == collection)
                result = await session.execute(stmt)
                models = result.scalars().all()

        return [
            copy.deepcopy(model.data)
            for model in models
            if all(f.matches(model.data) for f in filters)
        ]

    async def set(
        self, collection: str, document_id: str, data: dict[str, Any]
    ) -> None:
        async with self._write_lock, self._translate_errors("set", collection):
            async with self._session_factory() as session, session.begin():
                await self._upsert(session, collection, document_id, data)

    async def update(
        self, collection: str, document_id: str, changes: dict[str, Any]
    ) -> None:
        async with self._write_lock, self._translate_errors("update", collection):
            async with self._session_factory() as session, session.begin():
                model = await session.get(
                    DocumentModel, (collection, document_id), with_for_update=True
                )
                if model is None:
                    raise DocumentNotFoundError(collection, document_id)
                model.data = apply_changes(model.data, changes)

    async def delete(self, collection: str, document_id: str) -> None:
        async with self._write_lock, self._translate_errors("delete", collection):
            async with self._session_factory() as session, session.begin():
                await session.execute(
                    delete(DocumentModel).where(
                        DocumentModel.collection == collection,
                        DocumentModel.id == document_id,
                    )
                )

    async def commit(self, writes: Sequence[DocumentWrite]) -> None:
        collections = ",".join(sorted({w.collection for w in writes}))
        async with self._write_lock, self._translate_errors("commit", collections):
            try:
                async with self._session_factory() as session, session.begin():
                    for write in writes:
                        await self._apply_write(session, write)
            except IntegrityError as e:
                # A concurrent writer outside this process created the same key
                raise DocumentAlreadyExistsError(collections) from e

        self._probe.batch_committed(BACKEND, len(writes))

    async def transact(
        self,
        collection: str,
        document_id: str,
        mutate: Callable[[dict[str, Any] | None], Mutation],
    ) -> dict[str, Any] | None:
        async with self._write_lock, self._translate_errors("transact", collection):
            async with self._session_factory() as session, session.begin():
                model = await session.get(
                    DocumentModel, (collection, document_id), with_for_update=True
                )
                current = copy.deepcopy(model.data) if model is not None else None
                mutation = mutate(current)

                if isinstance(mutation, Replace):
                    await self._upsert(session, collection, document_id, mutation.data)
                    return copy.deepcopy(mutation.data)
                if isinstance(mutation, Delete):
                    if model is not None:
                        await session.delete(model)
                    return None
                return current

    async def close(self) -> None:
        await self._engine.dispose()
        self._probe.store_closed(BACKEND)

    async def _apply_write(self, session: AsyncSession, write: DocumentWrite) -> None:
        if isinstance(write, CreateDocument):
            existing = await session.get(
                DocumentModel, (write.collection, write.document_id)
            )
            if existing is not None:
                raise DocumentAlreadyExistsError(write.collection, write.document_id)
            session.add(
                DocumentModel(
                    collection=write.collection,
                    id=write.document_id,
                    data=copy.deepcopy(write.data),
                )
            )
            await session.flush()
        elif isinstance(write, SetDocument):
            await self._upsert(session, write.collection, write.document_id, write.data)
        elif isinstance(write, DeleteDocument):
            await session.execute(
                delete(DocumentModel).where(
                    DocumentModel.collection == write.collection,
                    DocumentModel.id == write.document_id,
                )
            )

    async def _upsert(
        self,
        session: AsyncSession,
        collection: str,
        document_id: str,
        data: dict[str, Any],
    ) -> None:
        model = await session.get(DocumentModel, (collection, document_id))
        if model is not None:
            model.data = copy.deepcopy(data)
        else:
            session.add(
                DocumentModel(
                    collection=collection, id=document_id, data=copy.deepcopy(data)
                )
            )
        await session.flush()
