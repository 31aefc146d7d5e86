"""Domain probe for access control decisions.

Following Domain-Oriented Observability patterns, this probe captures
denied access checks without exposing logging details to the policy.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AccessPolicyProbe(Protocol):
    """Domain probe for access policy checks."""

    def access_denied(self, user_id: str | None, check: str, reason: str) -> None:
        """Record that an access check rejected a caller."""
        ...

    def with_context(self, context: ObservationContext) -> AccessPolicyProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAccessPolicyProbe:
    """Default implementation of AccessPolicyProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultAccessPolicyProbe:
        """Create a new probe with observation context bound."""
        return DefaultAccessPolicyProbe(logger=self._logger, context=context)

    def access_denied(self, user_id: str | None, check: str, reason: str) -> None:
        """Record that an access check rejected a caller."""
        self._logger.warning(
            "access_denied",
            user_id=user_id,
            check=check,
            reason=reason,
            **self._get_context_kwargs(),
        )
