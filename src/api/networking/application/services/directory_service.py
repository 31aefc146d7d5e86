"""Peer directory and member moderation.

Members browse the non-blocked people of their own institution; admins see
everyone except admins, and can block, unblock or delete members. Admin
profiles are never the target of moderation.
"""

from __future__ import annotations

from identity.domain.profile import UserProfile
from identity.ports.repositories import IUserProfileRepository
from networking.application.observability import (
    DefaultDirectoryServiceProbe,
    DirectoryServiceProbe,
)
from shared_kernel.authorization import ADMIN_ROLES, AccessPolicy, Caller, UserRole
from shared_kernel.errors import AccessDeniedError


class DirectoryService:
    """Application service for the peer directory."""

    def __init__(
        self,
        profile_repository: IUserProfileRepository,
        access_policy: AccessPolicy | None = None,
        probe: DirectoryServiceProbe | None = None,
    ):
        self._profiles = profile_repository
        self._policy = access_policy or AccessPolicy()
        self._probe = probe or DefaultDirectoryServiceProbe()

    async def get_all_users(self, caller: Caller, institution_id: str) -> list[UserProfile]:
        """Peers visible to a member: not blocked, not the admin, not the caller."""
        self._policy.require_institution_access(caller, institution_id)
        profiles = await self._profiles.list_by_institution(institution_id)
        peers = [
            p
            for p in profiles
            if not p.blocked
            and p.role != UserRole.INSTITUTION_ADMIN
            and p.uid != caller.uid
        ]
        self._probe.users_listed(
            institution_id=institution_id, count=len(peers), admin_view=False
        )
        return peers

    async def admin_get_all_users(
        self, caller: Caller, institution_id: str
    ) -> list[UserProfile]:
        """Every non-admin member of an institution, blocked ones included."""
        self._policy.require_institution_admin(caller, institution_id)
        profiles = await self._profiles.list_by_institution(institution_id)
        members = [p for p in profiles if p.role not in ADMIN_ROLES]
        self._probe.users_listed(
            institution_id=institution_id, count=len(members), admin_view=True
        )
        return members

    async def admin_toggle_block_user(
        self, caller: Caller, uid: str
    ) -> UserProfile | None:
        """Flip a member's blocked flag.

        Returns:
            The updated profile, or None if it does not exist
        """
        target = await self._moderation_target(caller, uid)
        if target is None:
            return None

        updated = await self._profiles.toggle_blocked(uid)
        if updated is not None:
            self._probe.user_block_toggled(
                uid=uid, blocked=updated.blocked, by_user_id=caller.uid
            )
        return updated

    async def admin_delete_user(self, caller: Caller, uid: str) -> None:
        """Delete a member's profile; absent profiles are ignored.

        The identity-provider account is left in place.
        """
        target = await self._moderation_target(caller, uid)
        if target is None:
            return

        await self._profiles.delete(uid)
        self._probe.user_deleted(uid=uid, by_user_id=caller.uid)

    async def _moderation_target(self, caller: Caller, uid: str) -> UserProfile | None:
        self._policy.require_role(caller, *ADMIN_ROLES)
        target = await self._profiles.get_by_id(uid)
        if target is None:
            return None
        self._policy.require_institution_admin(caller, target.institution_id)
        if target.role in ADMIN_ROLES:
            raise AccessDeniedError("admin_target")
        return target
