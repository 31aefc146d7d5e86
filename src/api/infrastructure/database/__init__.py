"""Database infrastructure for the SQL document store."""

from infrastructure.database.engines import create_document_engine
from infrastructure.database.models import Base, DocumentModel

__all__ = [
    "Base",
    "DocumentModel",
    "create_document_engine",
]
