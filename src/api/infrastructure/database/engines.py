"""Database engine creation for the SQL document store.

Accepts any SQLAlchemy async URL: a SQLite file through aiosqlite for the
local single-process deployment, or PostgreSQL through asyncpg.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from infrastructure.settings import StorageSettings

__all__ = [
    "create_document_engine",
    "is_in_memory_sqlite",
]


def is_in_memory_sqlite(database_url: str) -> bool:
    """Check whether a URL points at a private in-memory SQLite database."""
    url = make_url(database_url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def create_document_engine(settings: StorageSettings) -> AsyncEngine:
    """Create the async engine for the SQL document store.

    In-memory SQLite shares one connection (StaticPool) so every session
    sees the same database; other URLs use standard pooling with pre-ping.

    Args:
        settings: Storage settings carrying the database URL

    Returns:
        Configured async engine
    """
    if is_in_memory_sqlite(settings.database_url):
        return create_async_engine(
            settings.database_url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
            echo=settings.echo_sql,
        )

    return create_async_engine(
        settings.database_url,
        pool_pre_ping=True,
        echo=settings.echo_sql,
    )
