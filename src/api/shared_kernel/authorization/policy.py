"""Access control checks applied at every façade entry point.

All checks are plain equality comparisons on role, institution and the
blocked flag; there is no relationship graph behind them. Each failed check
raises ``AccessDeniedError`` with a reason code and is recorded by the probe.
"""

from __future__ import annotations

from shared_kernel.authorization.observability import (
    AccessPolicyProbe,
    DefaultAccessPolicyProbe,
)
from shared_kernel.authorization.protocols import Caller
from shared_kernel.authorization.types import UserRole
from shared_kernel.errors import AccessDeniedError


class AccessPolicy:
    """Role / institution / block-status guards."""

    def __init__(self, probe: AccessPolicyProbe | None = None):
        self._probe = probe or DefaultAccessPolicyProbe()

    def _deny(self, caller: Caller | None, check: str, reason: str) -> None:
        self._probe.access_denied(
            user_id=caller.uid if caller is not None else None,
            check=check,
            reason=reason,
        )
        raise AccessDeniedError(reason)

    def require_active(self, caller: Caller) -> None:
        """Reject blocked callers."""
        if caller.blocked:
            self._deny(caller, "active", "blocked")

    def require_role(self, caller: Caller, *roles: UserRole) -> None:
        """Reject callers whose role is not one of ``roles``."""
        self.require_active(caller)
        if caller.role not in roles:
            self._deny(caller, "role", "role_not_permitted")

    def require_super_admin(self, caller: Caller) -> None:
        """Allow only the platform owner."""
        self.require_role(caller, UserRole.SUPER_ADMIN)

    def require_institution_access(self, caller: Caller, institution_id: str) -> None:
        """Allow members of ``institution_id`` and the super admin."""
        self.require_active(caller)
        if caller.role == UserRole.SUPER_ADMIN:
            return
        if caller.institution_id != institution_id:
            self._deny(caller, "institution", "institution_mismatch")

    def require_institution_admin(self, caller: Caller, institution_id: str) -> None:
        """Allow the institution's own admin and the super admin."""
        self.require_role(caller, UserRole.SUPER_ADMIN, UserRole.INSTITUTION_ADMIN)
        self.require_institution_access(caller, institution_id)

    def require_self(self, caller: Caller, user_id: str) -> None:
        """Allow a caller to act only on their own records (super admin excepted)."""
        self.require_active(caller)
        if caller.role == UserRole.SUPER_ADMIN:
            return
        if caller.uid != user_id:
            self._deny(caller, "ownership", "not_owner")

    def require_email_domain(self, email: str, email_domain: str | None) -> None:
        """Reject emails outside an institution's restricted domain.

        An institution without ``email_domain`` accepts any address.
        """
        if not email_domain:
            return
        domain = email_domain.strip().lstrip("@").lower()
        if not email.strip().lower().endswith(f"@{domain}"):
            self._deny(None, "email_domain", "email_domain")
