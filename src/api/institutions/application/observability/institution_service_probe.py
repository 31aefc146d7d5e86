"""Protocol for institution service observability.

Defines the interface for domain probes that capture tenant lifecycle
events: onboarding, approval and de-boarding.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class InstitutionServiceProbe(Protocol):
    """Domain probe for institution service operations."""

    def institution_created(self, institution_id: str, code: str) -> None:
        """Record that an institution was onboarded."""
        ...

    def duplicate_institution_code(self, code: str) -> None:
        """Record that an institution code was already taken."""
        ...

    def institution_deleted(
        self, institution_id: str, users: int, posts: int, messages: int
    ) -> None:
        """Record that an institution and its data were removed."""
        ...

    def onboarding_request_submitted(self, request_id: str, institute_name: str) -> None:
        """Record a new partnership application."""
        ...

    def onboarding_request_approved(self, request_id: str, institution_id: str) -> None:
        """Record that a request was approved into an institution."""
        ...

    def with_context(self, context: ObservationContext) -> InstitutionServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultInstitutionServiceProbe:
    """Default implementation of InstitutionServiceProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultInstitutionServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultInstitutionServiceProbe(logger=self._logger, context=context)

    def institution_created(self, institution_id: str, code: str) -> None:
        """Record that an institution was onboarded."""
        self._logger.info(
            "institution_created",
            institution_id=institution_id,
            code=code,
            **self._get_context_kwargs(),
        )

    def duplicate_institution_code(self, code: str) -> None:
        """Record that an institution code was already taken."""
        self._logger.warning(
            "duplicate_institution_code", code=code, **self._get_context_kwargs()
        )

    def institution_deleted(
        self, institution_id: str, users: int, posts: int, messages: int
    ) -> None:
        """Record that an institution and its data were removed."""
        self._logger.info(
            "institution_deleted",
            institution_id=institution_id,
            users_deleted=users,
            posts_deleted=posts,
            messages_deleted=messages,
            **self._get_context_kwargs(),
        )

    def onboarding_request_submitted(self, request_id: str, institute_name: str) -> None:
        """Record a new partnership application."""
        self._logger.info(
            "onboarding_request_submitted",
            request_id=request_id,
            institute_name=institute_name,
            **self._get_context_kwargs(),
        )

    def onboarding_request_approved(self, request_id: str, institution_id: str) -> None:
        """Record that a request was approved into an institution."""
        self._logger.info(
            "onboarding_request_approved",
            request_id=request_id,
            institution_id=institution_id,
            **self._get_context_kwargs(),
        )
