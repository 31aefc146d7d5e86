"""Unit tests for database engine creation."""

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.pool import StaticPool

from infrastructure.database.engines import create_document_engine, is_in_memory_sqlite
from infrastructure.settings import StorageSettings


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("sqlite+aiosqlite://", True),
        ("sqlite+aiosqlite:///:memory:", True),
        ("sqlite+aiosqlite:///./squadran.db", False),
        ("postgresql+asyncpg://user:pw@localhost/squadran", False),
    ],
)
def test_is_in_memory_sqlite(url, expected):
    assert is_in_memory_sqlite(url) is expected


@pytest.mark.asyncio
async def test_in_memory_sqlite_shares_one_connection():
    """Every session must see the same private database."""
    engine = create_document_engine(
        StorageSettings(backend="sql", database_url="sqlite+aiosqlite://")
    )

    assert isinstance(engine, AsyncEngine)
    assert isinstance(engine.pool, StaticPool)
    await engine.dispose()


@pytest.mark.asyncio
async def test_file_sqlite_uses_standard_pool(tmp_path):
    engine = create_document_engine(
        StorageSettings(
            backend="sql",
            database_url=f"sqlite+aiosqlite:///{tmp_path / 'squadran.db'}",
            echo_sql=True,
        )
    )

    assert not isinstance(engine.pool, StaticPool)
    assert engine.echo is True
    await engine.dispose()
