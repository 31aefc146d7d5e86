"""Repository protocols (ports) for the identity context."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from identity.domain.profile import UserProfile


@runtime_checkable
class IUserProfileRepository(Protocol):
    """Repository for UserProfile persistence."""

    async def save(self, profile: UserProfile) -> None:
        """Create or replace a profile keyed by its uid."""
        ...

    async def get_by_id(self, uid: str) -> UserProfile | None:
        """Retrieve a profile, or None if absent."""
        ...

    async def list_by_institution(self, institution_id: str) -> list[UserProfile]:
        """All profiles of an institution, blocked ones included."""
        ...

    async def update_fields(
        self, uid: str, changes: dict[str, str]
    ) -> UserProfile | None:
        """Atomically apply editable field changes.

        Returns:
            The updated profile, or None if it does not exist
        """
        ...

    async def toggle_blocked(self, uid: str) -> UserProfile | None:
        """Atomically flip the blocked flag.

        Returns:
            The updated profile, or None if it does not exist
        """
        ...

    async def delete(self, uid: str) -> None:
        """Delete a profile; absent profiles are ignored."""
        ...

    async def delete_by_institution(self, institution_id: str) -> int:
        """Delete every profile of an institution.

        Returns:
            Number of deleted profiles
        """
        ...


class TenantRecord(Protocol):
    """The institution attributes identity flows need."""

    @property
    def id(self) -> str: ...

    @property
    def code(self) -> str: ...

    @property
    def email_domain(self) -> str | None: ...


@runtime_checkable
class ITenantLookup(Protocol):
    """Read access to institutions, provided by the institutions context."""

    async def get_by_id(self, institution_id: str) -> TenantRecord | None:
        """Retrieve an institution, or None if absent."""
        ...
