"""Protocol for messaging service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class MessagingServiceProbe(Protocol):
    """Domain probe for messaging service operations."""

    def message_sent(self, message_id: str, sender_id: str, receiver_id: str) -> None:
        """Record that a message was stored."""
        ...

    def recipient_unavailable(self, sender_id: str, receiver_id: str) -> None:
        """Record a send to a user outside the sender's institution."""
        ...

    def with_context(self, context: ObservationContext) -> MessagingServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultMessagingServiceProbe:
    """Default implementation of MessagingServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultMessagingServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultMessagingServiceProbe(logger=self._logger, context=context)

    def message_sent(self, message_id: str, sender_id: str, receiver_id: str) -> None:
        """Record that a message was stored."""
        self._logger.info(
            "message_sent",
            message_id=message_id,
            sender_id=sender_id,
            receiver_id=receiver_id,
            **self._get_context_kwargs(),
        )

    def recipient_unavailable(self, sender_id: str, receiver_id: str) -> None:
        """Record a send to a user outside the sender's institution."""
        self._logger.warning(
            "message_recipient_unavailable",
            sender_id=sender_id,
            receiver_id=receiver_id,
            **self._get_context_kwargs(),
        )
