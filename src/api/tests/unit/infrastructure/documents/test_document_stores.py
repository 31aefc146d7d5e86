"""Contract tests shared by the local DocumentStore backends.

Every backend must behave identically, so each test runs against the
in-memory store and the SQL store (in-memory SQLite through aiosqlite).
"""

from unittest.mock import create_autospec

import pytest
import pytest_asyncio

from infrastructure.database.engines import create_document_engine
from infrastructure.documents import InMemoryDocumentStore, SqlDocumentStore
from infrastructure.observability import DocumentStoreProbe
from infrastructure.settings import StorageSettings
from shared_kernel.documents import (
    ArrayRemove,
    ArrayUnion,
    CreateDocument,
    Delete,
    DeleteDocument,
    DocumentAlreadyExistsError,
    DocumentNotFoundError,
    Increment,
    Replace,
    SetDocument,
    array_contains,
    eq,
)


@pytest_asyncio.fixture(params=["memory", "sql"])
async def document_store(request):
    """A fresh store for each backend."""
    probe = create_autospec(DocumentStoreProbe, instance=True)
    if request.param == "memory":
        store = InMemoryDocumentStore(probe=probe)
    else:
        settings = StorageSettings(backend="sql", database_url="sqlite+aiosqlite://")
        store = SqlDocumentStore(create_document_engine(settings), probe=probe)
        await store.create_schema()

    yield store

    await store.close()


class TestReads:
    """Tests for get and query."""

    @pytest.mark.asyncio
    async def test_get_absent_returns_none(self, document_store):
        """Missing documents are returned as None rather than raised."""
        assert await document_store.get("posts", "missing") is None

    @pytest.mark.asyncio
    async def test_returned_documents_are_copies(self, document_store):
        """Mutating a fetched document must not change stored state."""
        await document_store.set("posts", "p1", {"likedBy": ["u1"]})

        fetched = await document_store.get("posts", "p1")
        fetched["likedBy"].append("u2")

        assert await document_store.get("posts", "p1") == {"likedBy": ["u1"]}

    @pytest.mark.asyncio
    async def test_query_applies_every_filter(self, document_store):
        await document_store.set(
            "posts", "p1", {"institutionId": "a", "type": "JOB", "tags": ["x"]}
        )
        await document_store.set(
            "posts", "p2", {"institutionId": "a", "type": "EVENTS", "tags": ["y"]}
        )
        await document_store.set(
            "posts", "p3", {"institutionId": "b", "type": "JOB", "tags": ["x"]}
        )

        results = await document_store.query(
            "posts", [eq("institutionId", "a"), array_contains("tags", "x")]
        )

        assert results == [{"institutionId": "a", "type": "JOB", "tags": ["x"]}]

    @pytest.mark.asyncio
    async def test_query_without_filters_returns_collection(self, document_store):
        await document_store.set("users", "u1", {"n": 1})
        await document_store.set("users", "u2", {"n": 2})
        await document_store.set("posts", "p1", {"n": 3})

        results = await document_store.query("users")

        assert sorted(doc["n"] for doc in results) == [1, 2]


class TestWrites:
    """Tests for set, update and delete."""

    @pytest.mark.asyncio
    async def test_set_overwrites(self, document_store):
        await document_store.set("users", "u1", {"name": "a", "bio": "x"})
        await document_store.set("users", "u1", {"name": "b"})

        assert await document_store.get("users", "u1") == {"name": "b"}

    @pytest.mark.asyncio
    async def test_update_applies_values_and_transforms(self, document_store):
        await document_store.set(
            "posts", "p1", {"likes": 1, "likedBy": ["u1"], "comments": []}
        )

        await document_store.update(
            "posts",
            "p1",
            {
                "likes": Increment(),
                "likedBy": ArrayUnion(("u2",)),
                "comments": ArrayUnion(({"id": "c1", "text": "hi"},)),
                "status": "VERIFIED",
            },
        )
        await document_store.update("posts", "p1", {"likedBy": ArrayRemove(("u1",))})

        assert await document_store.get("posts", "p1") == {
            "likes": 2,
            "likedBy": ["u2"],
            "comments": [{"id": "c1", "text": "hi"}],
            "status": "VERIFIED",
        }

    @pytest.mark.asyncio
    async def test_update_absent_document_raises(self, document_store):
        """Updates never create documents."""
        with pytest.raises(DocumentNotFoundError) as exc_info:
            await document_store.update("posts", "missing", {"status": "VERIFIED"})

        assert exc_info.value.reason == "posts_not_found"
        assert await document_store.get("posts", "missing") is None

    @pytest.mark.asyncio
    async def test_delete_absent_is_noop(self, document_store):
        await document_store.delete("posts", "missing")

        await document_store.set("posts", "p1", {"a": 1})
        await document_store.delete("posts", "p1")

        assert await document_store.get("posts", "p1") is None


class TestCommit:
    """Tests for atomic batch writes."""

    @pytest.mark.asyncio
    async def test_commit_applies_all_writes(self, document_store):
        await document_store.set("users", "old", {"a": 1})

        await document_store.commit(
            [
                CreateDocument("institutions", "i1", {"code": "TESTU"}),
                SetDocument("requests", "r1", {"status": "APPROVED"}),
                DeleteDocument("users", "old"),
            ]
        )

        assert await document_store.get("institutions", "i1") == {"code": "TESTU"}
        assert await document_store.get("requests", "r1") == {"status": "APPROVED"}
        assert await document_store.get("users", "old") is None

    @pytest.mark.asyncio
    async def test_create_of_existing_document_aborts_whole_batch(
        self, document_store
    ):
        """A failing create must leave every other write in the batch unapplied."""
        await document_store.set("institution_codes", "TESTU", {"id": "i0"})

        with pytest.raises(DocumentAlreadyExistsError):
            await document_store.commit(
                [
                    SetDocument("requests", "r1", {"status": "APPROVED"}),
                    CreateDocument("institution_codes", "TESTU", {"id": "i1"}),
                    CreateDocument("institutions", "i1", {"code": "TESTU"}),
                ]
            )

        assert await document_store.get("requests", "r1") is None
        assert await document_store.get("institutions", "i1") is None
        assert await document_store.get("institution_codes", "TESTU") == {"id": "i0"}

    @pytest.mark.asyncio
    async def test_commit_reports_batch_size(self, document_store):
        await document_store.commit([SetDocument("posts", "p1", {"a": 1})])

        document_store._probe.batch_committed.assert_called_once()
        assert document_store._probe.batch_committed.call_args.args[1] == 1


class TestTransact:
    """Tests for single-document read-modify-write."""

    @pytest.mark.asyncio
    async def test_replace_returns_stored_document(self, document_store):
        await document_store.set("posts", "p1", {"likes": 0})

        result = await document_store.transact(
            "posts", "p1", lambda current: Replace({**current, "likes": 1})
        )

        assert result == {"likes": 1}
        assert await document_store.get("posts", "p1") == {"likes": 1}

    @pytest.mark.asyncio
    async def test_mutate_receives_none_for_absent_document(self, document_store):
        seen = []

        def mutate(current):
            seen.append(current)
            return None

        assert await document_store.transact("posts", "missing", mutate) is None
        assert seen == [None]

    @pytest.mark.asyncio
    async def test_delete_mutation(self, document_store):
        await document_store.set("posts", "p1", {"status": "PENDING"})

        result = await document_store.transact("posts", "p1", lambda current: Delete())

        assert result is None
        assert await document_store.get("posts", "p1") is None

    @pytest.mark.asyncio
    async def test_raising_mutate_writes_nothing(self, document_store):
        await document_store.set("posts", "p1", {"status": "VERIFIED"})

        def mutate(current):
            raise ValueError("refused")

        with pytest.raises(ValueError):
            await document_store.transact("posts", "p1", mutate)

        assert await document_store.get("posts", "p1") == {"status": "VERIFIED"}


class TestInMemoryDocumentStore:
    """Tests specific to the in-memory backend."""

    @pytest.mark.asyncio
    async def test_reset_clears_all_collections(self, store):
        await store.set("posts", "p1", {"a": 1})

        store.reset()

        assert await store.query("posts") == []

    @pytest.mark.asyncio
    async def test_lifecycle_reported_to_probe(self, store, store_probe):
        await store.close()

        store_probe.store_opened.assert_called_once_with("memory")
        store_probe.store_closed.assert_called_once_with("memory")
