"""Unit tests for DocumentStore selection."""

import pytest

from infrastructure.dependencies import open_document_store
from infrastructure.documents import InMemoryDocumentStore, SqlDocumentStore
from infrastructure.settings import StorageSettings


class TestOpenDocumentStore:
    """Tests for open_document_store."""

    @pytest.mark.asyncio
    async def test_memory_backend(self):
        store = await open_document_store(StorageSettings(backend="memory"))

        assert isinstance(store, InMemoryDocumentStore)

    @pytest.mark.asyncio
    async def test_sql_backend_creates_schema(self, tmp_path):
        """A fresh SQLite file is usable immediately."""
        url = f"sqlite+aiosqlite:///{tmp_path / 'squadran.db'}"
        store = await open_document_store(
            StorageSettings(backend="sql", database_url=url)
        )

        try:
            assert isinstance(store, SqlDocumentStore)
            await store.set("users", "u1", {"name": "Rohan"})
            assert await store.get("users", "u1") == {"name": "Rohan"}
        finally:
            await store.close()
