"""Exceptions raised by DocumentStore implementations."""

from shared_kernel.errors import ConflictError, NotFoundError


class DocumentNotFoundError(NotFoundError):
    """Raised when an update targets a document that does not exist.

    Plain reads never raise this; an absent document is returned as None.
    """

    def __init__(self, collection: str, document_id: str):
        super().__init__(
            reason=f"{collection}_not_found",
            message=f"Document {collection}/{document_id} does not exist",
        )
        self.collection = collection
        self.document_id = document_id


class DocumentAlreadyExistsError(ConflictError):
    """Raised when a batch create targets an existing document."""

    def __init__(self, collection: str, document_id: str | None = None):
        super().__init__(
            reason=f"{collection}_exists",
            message=f"Document {collection}/{document_id or '?'} already exists",
        )
        self.collection = collection
        self.document_id = document_id
