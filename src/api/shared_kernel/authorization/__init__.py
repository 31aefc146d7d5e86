"""Access control primitives shared across bounded contexts.

Roles, the caller protocol and the equality-based access policy every
application service consults before touching tenant data.
"""

from shared_kernel.authorization.policy import AccessPolicy
from shared_kernel.authorization.protocols import Caller
from shared_kernel.authorization.types import (
    ADMIN_ROLES,
    MEMBER_ROLES,
    PLATFORM_INSTITUTION_ID,
    UserRole,
)

__all__ = [
    "ADMIN_ROLES",
    "AccessPolicy",
    "Caller",
    "MEMBER_ROLES",
    "PLATFORM_INSTITUTION_ID",
    "UserRole",
]
