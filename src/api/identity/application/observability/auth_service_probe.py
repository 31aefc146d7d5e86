"""Protocol for authentication service observability.

Defines the interface for domain probes that capture sign-up, login and
session lifecycle events. Credentials are never passed to the probe.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AuthServiceProbe(Protocol):
    """Domain probe for authentication service operations."""

    def signed_up(self, uid: str, institution_id: str, role: str) -> None:
        """Record that a new member registered."""
        ...

    def login_succeeded(self, uid: str, institution_id: str, role: str) -> None:
        """Record a successful login."""
        ...

    def login_denied(self, role: str, institution_id: str | None, reason: str) -> None:
        """Record a rejected login attempt."""
        ...

    def admin_bootstrapped(self, uid: str, institution_id: str, role: str) -> None:
        """Record that an admin identity was provisioned on first login."""
        ...

    def logged_out(self, uid: str | None) -> None:
        """Record that a session was ended on request."""
        ...

    def blocked_session_ended(self, uid: str) -> None:
        """Record that a session was ended because the profile is blocked."""
        ...

    def profile_updated(self, uid: str, fields: list[str]) -> None:
        """Record a self-service profile edit."""
        ...

    def with_context(self, context: ObservationContext) -> AuthServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAuthServiceProbe:
    """Default implementation of AuthServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAuthServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultAuthServiceProbe(logger=self._logger, context=context)

    def signed_up(self, uid: str, institution_id: str, role: str) -> None:
        """Record that a new member registered."""
        self._logger.info(
            "member_signed_up",
            uid=uid,
            institution_id=institution_id,
            role=role,
            **self._get_context_kwargs(),
        )

    def login_succeeded(self, uid: str, institution_id: str, role: str) -> None:
        """Record a successful login."""
        self._logger.info(
            "login_succeeded",
            uid=uid,
            institution_id=institution_id,
            role=role,
            **self._get_context_kwargs(),
        )

    def login_denied(self, role: str, institution_id: str | None, reason: str) -> None:
        """Record a rejected login attempt."""
        self._logger.warning(
            "login_denied",
            role=role,
            institution_id=institution_id,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def admin_bootstrapped(self, uid: str, institution_id: str, role: str) -> None:
        """Record that an admin identity was provisioned on first login."""
        self._logger.warning(
            "admin_bootstrapped",
            uid=uid,
            institution_id=institution_id,
            role=role,
            **self._get_context_kwargs(),
        )

    def logged_out(self, uid: str | None) -> None:
        """Record that a session was ended on request."""
        self._logger.info("logged_out", uid=uid, **self._get_context_kwargs())

    def blocked_session_ended(self, uid: str) -> None:
        """Record that a session was ended because the profile is blocked."""
        self._logger.warning(
            "blocked_session_ended", uid=uid, **self._get_context_kwargs()
        )

    def profile_updated(self, uid: str, fields: list[str]) -> None:
        """Record a self-service profile edit."""
        self._logger.info(
            "profile_updated", uid=uid, fields=fields, **self._get_context_kwargs()
        )
