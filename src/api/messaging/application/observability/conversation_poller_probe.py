"""Protocol for conversation poller observability."""

from __future__ import annotations

from typing import Any, Protocol

import structlog


class ConversationPollerProbe(Protocol):
    """Domain probe for the conversation polling loop."""

    def poller_started(self, user_id: str, other_user_id: str, interval: float) -> None:
        """Record that polling began for a conversation."""
        ...

    def poller_stopped(self, user_id: str, other_user_id: str) -> None:
        """Record that polling was stopped."""
        ...

    def poll_failed(self, user_id: str, other_user_id: str, error: Exception) -> None:
        """Record a failed refresh; polling continues."""
        ...

    def thread_changed(self, user_id: str, other_user_id: str, count: int) -> None:
        """Record that a refresh delivered a changed thread."""
        ...


class DefaultConversationPollerProbe:
    """Default implementation of ConversationPollerProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def _log_kwargs(self, user_id: str, other_user_id: str) -> dict[str, Any]:
        return {"user_id": user_id, "other_user_id": other_user_id}

    def poller_started(self, user_id: str, other_user_id: str, interval: float) -> None:
        """Record that polling began for a conversation."""
        self._logger.debug(
            "conversation_poller_started",
            interval_seconds=interval,
            **self._log_kwargs(user_id, other_user_id),
        )

    def poller_stopped(self, user_id: str, other_user_id: str) -> None:
        """Record that polling was stopped."""
        self._logger.debug(
            "conversation_poller_stopped", **self._log_kwargs(user_id, other_user_id)
        )

    def poll_failed(self, user_id: str, other_user_id: str, error: Exception) -> None:
        """Record a failed refresh; polling continues."""
        self._logger.warning(
            "conversation_poll_failed",
            error=str(error),
            error_type=type(error).__name__,
            **self._log_kwargs(user_id, other_user_id),
        )

    def thread_changed(self, user_id: str, other_user_id: str, count: int) -> None:
        """Record that a refresh delivered a changed thread."""
        self._logger.debug(
            "conversation_thread_changed",
            message_count=count,
            **self._log_kwargs(user_id, other_user_id),
        )
