"""Domain probe for identity provider adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class IdentityProviderProbe(Protocol):
    """Domain probe for calls to the external identity provider."""

    def provider_rejected(self, endpoint: str, error_code: str) -> None:
        """Record that the provider answered with an error code."""
        ...

    def provider_unreachable(self, endpoint: str, error: str) -> None:
        """Record a network-level failure talking to the provider."""
        ...

    def with_context(self, context: ObservationContext) -> IdentityProviderProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultIdentityProviderProbe:
    """Default implementation of IdentityProviderProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultIdentityProviderProbe:
        """Create a new probe with observation context bound."""
        return DefaultIdentityProviderProbe(logger=self._logger, context=context)

    def provider_rejected(self, endpoint: str, error_code: str) -> None:
        """Record that the provider answered with an error code."""
        self._logger.info(
            "identity_provider_rejected",
            endpoint=endpoint,
            error_code=error_code,
            **self._get_context_kwargs(),
        )

    def provider_unreachable(self, endpoint: str, error: str) -> None:
        """Record a network-level failure talking to the provider."""
        self._logger.error(
            "identity_provider_unreachable",
            endpoint=endpoint,
            error=error,
            **self._get_context_kwargs(),
        )
