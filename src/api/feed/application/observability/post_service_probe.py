"""Protocol for post service observability.

Defines the interface for domain probes that capture feed events:
creation, moderation, likes and comments.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class PostServiceProbe(Protocol):
    """Domain probe for post service operations."""

    def post_created(self, post_id: str, institution_id: str, post_type: str) -> None:
        """Record that a post entered the moderation queue."""
        ...

    def post_verified(self, post_id: str, institution_id: str) -> None:
        """Record that a moderator verified a post."""
        ...

    def post_rejected(self, post_id: str, institution_id: str) -> None:
        """Record that a moderator deleted a pending post."""
        ...

    def verified_post_delete_refused(self, post_id: str) -> None:
        """Record an attempt to delete a VERIFIED post via moderation."""
        ...

    def like_toggled(self, post_id: str, user_id: str, likes: int) -> None:
        """Record a like or unlike."""
        ...

    def comment_added(self, post_id: str, comment_id: str) -> None:
        """Record that a comment was appended."""
        ...

    def post_not_found(self, post_id: str) -> None:
        """Record that an operation referenced a missing post."""
        ...

    def with_context(self, context: ObservationContext) -> PostServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultPostServiceProbe:
    """Default implementation of PostServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultPostServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultPostServiceProbe(logger=self._logger, context=context)

    def post_created(self, post_id: str, institution_id: str, post_type: str) -> None:
        """Record that a post entered the moderation queue."""
        self._logger.info(
            "post_created",
            post_id=post_id,
            institution_id=institution_id,
            post_type=post_type,
            **self._get_context_kwargs(),
        )

    def post_verified(self, post_id: str, institution_id: str) -> None:
        """Record that a moderator verified a post."""
        self._logger.info(
            "post_verified",
            post_id=post_id,
            institution_id=institution_id,
            **self._get_context_kwargs(),
        )

    def post_rejected(self, post_id: str, institution_id: str) -> None:
        """Record that a moderator deleted a pending post."""
        self._logger.info(
            "post_rejected",
            post_id=post_id,
            institution_id=institution_id,
            **self._get_context_kwargs(),
        )

    def verified_post_delete_refused(self, post_id: str) -> None:
        """Record an attempt to delete a VERIFIED post via moderation."""
        self._logger.warning(
            "verified_post_delete_refused",
            post_id=post_id,
            **self._get_context_kwargs(),
        )

    def like_toggled(self, post_id: str, user_id: str, likes: int) -> None:
        """Record a like or unlike."""
        self._logger.debug(
            "like_toggled",
            post_id=post_id,
            user_id=user_id,
            likes=likes,
            **self._get_context_kwargs(),
        )

    def comment_added(self, post_id: str, comment_id: str) -> None:
        """Record that a comment was appended."""
        self._logger.info(
            "comment_added",
            post_id=post_id,
            comment_id=comment_id,
            **self._get_context_kwargs(),
        )

    def post_not_found(self, post_id: str) -> None:
        """Record that an operation referenced a missing post."""
        self._logger.debug(
            "post_not_found", post_id=post_id, **self._get_context_kwargs()
        )
