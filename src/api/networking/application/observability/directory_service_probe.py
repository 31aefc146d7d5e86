"""Protocol for directory service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class DirectoryServiceProbe(Protocol):
    """Domain probe for peer directory and user moderation."""

    def users_listed(self, institution_id: str, count: int, admin_view: bool) -> None:
        """Record that a directory listing was served."""
        ...

    def user_block_toggled(self, uid: str, blocked: bool, by_user_id: str) -> None:
        """Record that an admin blocked or unblocked a member."""
        ...

    def user_deleted(self, uid: str, by_user_id: str) -> None:
        """Record that an admin deleted a member's profile."""
        ...

    def with_context(self, context: ObservationContext) -> DirectoryServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultDirectoryServiceProbe:
    """Default implementation of DirectoryServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultDirectoryServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultDirectoryServiceProbe(logger=self._logger, context=context)

    def users_listed(self, institution_id: str, count: int, admin_view: bool) -> None:
        """Record that a directory listing was served."""
        self._logger.debug(
            "users_listed",
            institution_id=institution_id,
            count=count,
            admin_view=admin_view,
            **self._get_context_kwargs(),
        )

    def user_block_toggled(self, uid: str, blocked: bool, by_user_id: str) -> None:
        """Record that an admin blocked or unblocked a member."""
        self._logger.info(
            "user_block_toggled",
            uid=uid,
            blocked=blocked,
            by_user_id=by_user_id,
            **self._get_context_kwargs(),
        )

    def user_deleted(self, uid: str, by_user_id: str) -> None:
        """Record that an admin deleted a member's profile."""
        self._logger.info(
            "user_deleted",
            uid=uid,
            by_user_id=by_user_id,
            **self._get_context_kwargs(),
        )
