"""Protocols describing who is calling.

Guards only need the caller's identity, tenant, role and block flag, so they
depend on this structural protocol rather than on the identity context's
UserProfile class.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from shared_kernel.authorization.types import UserRole


@runtime_checkable
class Caller(Protocol):
    """The authenticated profile on whose behalf a façade call runs."""

    @property
    def uid(self) -> str: ...

    @property
    def institution_id(self) -> str: ...

    @property
    def role(self) -> UserRole: ...

    @property
    def blocked(self) -> bool: ...
