"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Captures call-scoped and domain-relevant metadata that should be
    included with all instrumentation events.

    Attributes:
        request_id: Unique identifier for the current operation.
        user_id: Identifier of the calling user (if applicable).
        institution_id: Tenant the call is scoped to (if applicable).
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(user_id="01J...", institution_id="01H...")
        probe = DefaultPostServiceProbe().with_context(context)
    """

    request_id: str | None = None
    user_id: str | None = None
    institution_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.user_id is not None:
            result["user_id"] = self.user_id
        if self.institution_id is not None:
            result["institution_id"] = self.institution_id
        result.update(self.extra)
        return result

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        return ObservationContext(
            request_id=self.request_id,
            user_id=self.user_id,
            institution_id=self.institution_id,
            extra={**self.extra, **kwargs},
        )
