"""Document store port shared by every bounded context.

Services persist entities through the ``DocumentStore`` protocol; concrete
backends live in ``infrastructure.documents``.
"""

from shared_kernel.documents.batching import delete_documents
from shared_kernel.documents.exceptions import (
    DocumentAlreadyExistsError,
    DocumentNotFoundError,
)
from shared_kernel.documents.operations import (
    ArrayRemove,
    ArrayUnion,
    CreateDocument,
    Delete,
    DeleteDocument,
    DocumentWrite,
    FieldFilter,
    FilterOp,
    Increment,
    Mutation,
    Replace,
    SetDocument,
    array_contains,
    eq,
)
from shared_kernel.documents.ports import DocumentStore

__all__ = [
    "ArrayRemove",
    "ArrayUnion",
    "CreateDocument",
    "Delete",
    "DeleteDocument",
    "DocumentAlreadyExistsError",
    "DocumentNotFoundError",
    "DocumentStore",
    "DocumentWrite",
    "FieldFilter",
    "FilterOp",
    "Increment",
    "Mutation",
    "Replace",
    "SetDocument",
    "array_contains",
    "delete_documents",
    "eq",
]
