"""DocumentStore implementation of IUserProfileRepository.

Profiles live in the ``users`` collection keyed by uid, with camelCase
field names.
"""

from __future__ import annotations

from typing import Any

from identity.domain.profile import EDITABLE_FIELDS, UserProfile
from identity.ports.repositories import IUserProfileRepository
from shared_kernel.authorization import UserRole
from shared_kernel.documents import (
    DocumentStore,
    Mutation,
    Replace,
    delete_documents,
    eq,
)

USERS = "users"


def profile_to_document(profile: UserProfile) -> dict[str, Any]:
    """Serialize a profile; unset optional fields are omitted."""
    document: dict[str, Any] = {
        "uid": profile.uid,
        "institutionId": profile.institution_id,
        "name": profile.name,
        "role": profile.role.value,
        "blocked": profile.blocked,
    }
    optional = {
        "email": profile.email,
        "rollNo": profile.roll_no,
        "avatar": profile.avatar,
        "batch": profile.batch,
        "bio": profile.bio,
    }
    document.update({key: value for key, value in optional.items() if value is not None})
    return document


def profile_from_document(document: dict[str, Any]) -> UserProfile:
    """Rebuild a profile; unknown roles are rejected.

    Raises:
        ValidationFailedError: If the stored role is not a UserRole
    """
    return UserProfile(
        uid=document["uid"],
        institution_id=document["institutionId"],
        name=document.get("name", ""),
        role=UserRole.parse(document.get("role")),
        email=document.get("email"),
        roll_no=document.get("rollNo"),
        avatar=document.get("avatar"),
        batch=document.get("batch"),
        bio=document.get("bio"),
        blocked=bool(document.get("blocked", False)),
    )


class UserProfileRepository(IUserProfileRepository):
    """Repository for user profiles over a DocumentStore."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def save(self, profile: UserProfile) -> None:
        await self._store.set(USERS, profile.uid, profile_to_document(profile))

    async def get_by_id(self, uid: str) -> UserProfile | None:
        document = await self._store.get(USERS, uid)
        return profile_from_document(document) if document is not None else None

    async def list_by_institution(self, institution_id: str) -> list[UserProfile]:
        documents = await self._store.query(USERS, [eq("institutionId", institution_id)])
        return [profile_from_document(document) for document in documents]

    async def update_fields(
        self, uid: str, changes: dict[str, str]
    ) -> UserProfile | None:
        forbidden = set(changes) - EDITABLE_FIELDS
        if forbidden:
            raise ValueError(f"Fields cannot be edited: {sorted(forbidden)}")

        def mutate(current: dict[str, Any] | None) -> Mutation:
            if current is None:
                return None
            return Replace({**current, **changes})

        document = await self._store.transact(USERS, uid, mutate)
        return profile_from_document(document) if document is not None else None

    async def toggle_blocked(self, uid: str) -> UserProfile | None:
        def mutate(current: dict[str, Any] | None) -> Mutation:
            if current is None:
                return None
            return Replace({**current, "blocked": not current.get("blocked", False)})

        document = await self._store.transact(USERS, uid, mutate)
        return profile_from_document(document) if document is not None else None

    async def delete(self, uid: str) -> None:
        await self._store.delete(USERS, uid)

    async def delete_by_institution(self, institution_id: str) -> int:
        documents = await self._store.query(USERS, [eq("institutionId", institution_id)])
        return await delete_documents(
            self._store, USERS, [document["uid"] for document in documents]
        )
