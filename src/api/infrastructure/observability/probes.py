"""Domain probes for infrastructure observability.

Domain probes provide a high-level instrumentation API oriented around
domain semantics, keeping adapter code clean and testable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class DocumentStoreProbe(Protocol):
    """Domain probe for document store adapters.

    Captures backend lifecycle and failure events without exposing
    logging details to the adapters.
    """

    def store_opened(self, backend: str) -> None:
        """Record that a document store became ready."""
        ...

    def store_closed(self, backend: str) -> None:
        """Record that a document store released its resources."""
        ...

    def operation_failed(
        self, backend: str, operation: str, collection: str, error: Exception
    ) -> None:
        """Record that a backend call failed at the transport level."""
        ...

    def batch_committed(self, backend: str, write_count: int) -> None:
        """Record that an atomic batch was applied."""
        ...

    def with_context(self, context: ObservationContext) -> DocumentStoreProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultDocumentStoreProbe:
    """Default implementation of DocumentStoreProbe using structlog.

    Supports observation context for including call-scoped metadata
    with all log events.
    """

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultDocumentStoreProbe:
        """Create a new probe with observation context bound."""
        return DefaultDocumentStoreProbe(logger=self._logger, context=context)

    def store_opened(self, backend: str) -> None:
        """Record that a document store became ready."""
        self._logger.info(
            "document_store_opened",
            backend=backend,
            **self._get_context_kwargs(),
        )

    def store_closed(self, backend: str) -> None:
        """Record that a document store released its resources."""
        self._logger.info(
            "document_store_closed",
            backend=backend,
            **self._get_context_kwargs(),
        )

    def operation_failed(
        self, backend: str, operation: str, collection: str, error: Exception
    ) -> None:
        """Record that a backend call failed at the transport level."""
        self._logger.error(
            "document_store_operation_failed",
            backend=backend,
            operation=operation,
            collection=collection,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def batch_committed(self, backend: str, write_count: int) -> None:
        """Record that an atomic batch was applied."""
        self._logger.debug(
            "document_batch_committed",
            backend=backend,
            write_count=write_count,
            **self._get_context_kwargs(),
        )
