"""Role definitions shared by every bounded context.

Roles form a closed set. Every stored or submitted role passes through
``UserRole.parse`` so unknown values are rejected at the boundary instead of
leaking into comparisons further in.
"""

from enum import StrEnum

from shared_kernel.errors import ValidationFailedError


class UserRole(StrEnum):
    """Platform roles, ordered from platform-wide to member level."""

    SUPER_ADMIN = "SUPER_ADMIN"
    INSTITUTION_ADMIN = "INSTITUTION_ADMIN"
    STUDENT = "STUDENT"
    ALUMNI = "ALUMNI"

    @classmethod
    def parse(cls, value: str) -> "UserRole":
        """Convert a raw role string, rejecting anything outside the set.

        Raises:
            ValidationFailedError: If the value is not a known role
        """
        try:
            return cls(value)
        except ValueError as e:
            raise ValidationFailedError("unknown_role", f"Unknown role: {value!r}") from e

    @property
    def is_admin(self) -> bool:
        """True for roles that moderate content and users."""
        return self in ADMIN_ROLES

    @property
    def is_member(self) -> bool:
        """True for roles that can self-register."""
        return self in MEMBER_ROLES


ADMIN_ROLES = frozenset({UserRole.SUPER_ADMIN, UserRole.INSTITUTION_ADMIN})
MEMBER_ROLES = frozenset({UserRole.STUDENT, UserRole.ALUMNI})

# Institution id assigned to the platform owner's own profile.
PLATFORM_INSTITUTION_ID = "squadran"
