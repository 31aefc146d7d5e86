"""DocumentStore backends.

- ``FirestoreDocumentStore``: remote multi-tenant document database
- ``SqlDocumentStore``: local persistent store (SQLite or PostgreSQL)
- ``InMemoryDocumentStore``: process-local store for development and tests
"""

from infrastructure.documents.memory_store import InMemoryDocumentStore
from infrastructure.documents.sql_store import SqlDocumentStore

__all__ = [
    "InMemoryDocumentStore",
    "SqlDocumentStore",
]
