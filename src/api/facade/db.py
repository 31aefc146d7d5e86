"""The ``Db`` façade: one coroutine per use case.

The presentation layer talks only to this class. Every call receives its
session or caller explicitly; the façade keeps no per-user state.

Return conventions:
- login / signup calls and caller-scoped operations return a ``Result``:
  ``Ok(value)`` or ``Failure(kind, reason)`` for access-denied,
  validation and conflict outcomes (and not-found for the auth flows)
- public reads return plain values; absent entities are ``None``
- ``NotFoundError`` on writes that expect an existing document and
  ``TransportError`` are raised
"""

from __future__ import annotations

import random
from collections.abc import Awaitable
from typing import TypeVar

from feed.application import PostService
from feed.domain import Comment, Post, PostDraft, PostType
from feed.infrastructure import PostRepository
from identity.application import AuthCallback, AuthService, AuthSubscription
from identity.domain import AuthSession, ProfileUpdate, UserProfile
from identity.infrastructure import UserProfileRepository
from identity.ports import IdentityProvider
from infrastructure.settings import PlatformSettings, get_platform_settings
from institutions.application import ColorPicker, InstitutionService
from institutions.domain import Institution, OnboardingRequest
from institutions.infrastructure import InstitutionRepository, OnboardingRequestRepository
from messaging.application import ConversationPoller, MessagingService, ThreadCallback
from messaging.domain import Message
from messaging.infrastructure import MessageRepository
from networking.application import DirectoryService
from shared_kernel.authorization import AccessPolicy
from shared_kernel.documents import DocumentStore
from shared_kernel.errors import (
    AccessDeniedError,
    ConflictError,
    Failure,
    NotFoundError,
    Ok,
    Result,
    ValidationFailedError,
)
from shared_kernel.identifiers import Clock, now_millis

T = TypeVar("T")

_EXPECTED_FAILURES = (AccessDeniedError, ValidationFailedError, ConflictError)


async def _as_result(operation: Awaitable[T], *, not_found: bool = False) -> Result[T]:
    """Await ``operation`` and classify expected failures.

    Args:
        operation: The service call
        not_found: Also report NotFoundError as a Failure instead of raising
    """
    try:
        return Ok(await operation)
    except _EXPECTED_FAILURES as e:
        return Failure.from_error(e)
    except NotFoundError as e:
        if not not_found:
            raise
        return Failure.from_error(e)


class Db:
    """Data-access façade over a DocumentStore and an IdentityProvider."""

    def __init__(
        self,
        store: DocumentStore,
        identity_provider: IdentityProvider,
        settings: PlatformSettings | None = None,
        clock: Clock = now_millis,
        pick_color: ColorPicker = random.choice,
    ):
        """Wire repositories and services.

        Args:
            store: Persistence backend
            identity_provider: Authenticates and registers identities
            settings: Platform settings
            clock: Source of epoch-millisecond timestamps
            pick_color: Chooses theme colours for approved requests
        """
        self._store = store
        self._identity_provider = identity_provider
        self._settings = settings or get_platform_settings()

        policy = AccessPolicy()
        profiles = UserProfileRepository(store)
        institutions = InstitutionRepository(store)
        posts = PostRepository(store)
        messages = MessageRepository(store)

        self.auth = AuthService(
            profile_repository=profiles,
            identity_provider=identity_provider,
            tenant_lookup=institutions,
            access_policy=policy,
            settings=self._settings,
        )
        self.institutions = InstitutionService(
            institution_repository=institutions,
            request_repository=OnboardingRequestRepository(store),
            post_repository=posts,
            profile_repository=profiles,
            message_repository=messages,
            store=store,
            access_policy=policy,
            settings=self._settings,
            clock=clock,
            pick_color=pick_color,
        )
        self.posts = PostService(post_repository=posts, access_policy=policy, clock=clock)
        self.directory = DirectoryService(profile_repository=profiles, access_policy=policy)
        self.messaging = MessagingService(
            message_repository=messages,
            profile_repository=profiles,
            access_policy=policy,
            clock=clock,
        )

    async def close(self) -> None:
        """Release the identity provider and the store."""
        await self._identity_provider.close()
        await self._store.close()

    async def __aenter__(self) -> Db:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # --- Identity & session ---

    async def signup_student(
        self,
        session: AuthSession,
        institution_id: str,
        name: str,
        email: str,
        batch: str,
        password: str,
    ) -> Result[UserProfile]:
        return await _as_result(
            self.auth.signup_student(session, institution_id, name, email, batch, password),
            not_found=True,
        )

    async def signup_alumni(
        self,
        session: AuthSession,
        institution_id: str,
        name: str,
        roll_no: str,
        batch: str,
        bio: str | None,
        email: str,
        password: str,
    ) -> Result[UserProfile]:
        return await _as_result(
            self.auth.signup_alumni(
                session, institution_id, name, roll_no, batch, bio, email, password
            ),
            not_found=True,
        )

    async def login_student(
        self, session: AuthSession, email: str, password: str, institution_id: str
    ) -> Result[UserProfile]:
        return await _as_result(
            self.auth.login_student(session, email, password, institution_id),
            not_found=True,
        )

    async def login_alumni(
        self, session: AuthSession, email: str, password: str, institution_id: str
    ) -> Result[UserProfile]:
        return await _as_result(
            self.auth.login_alumni(session, email, password, institution_id),
            not_found=True,
        )

    async def login_inst_admin(
        self, session: AuthSession, email: str, password: str, institution_id: str
    ) -> Result[UserProfile]:
        return await _as_result(
            self.auth.login_inst_admin(session, email, password, institution_id),
            not_found=True,
        )

    async def login_super_admin(
        self, session: AuthSession, password: str
    ) -> Result[UserProfile]:
        return await _as_result(
            self.auth.login_super_admin(session, password), not_found=True
        )

    async def logout(self, session: AuthSession) -> None:
        await self.auth.logout(session)

    async def subscribe_to_auth(
        self, session: AuthSession, callback: AuthCallback
    ) -> AuthSubscription:
        return await self.auth.subscribe_to_auth(session, callback)

    async def revalidate_session(self, session: AuthSession) -> UserProfile | None:
        return await self.auth.revalidate_session(session)

    async def update_user(
        self, caller: UserProfile, uid: str, update: ProfileUpdate
    ) -> Result[UserProfile | None]:
        return await _as_result(self.auth.update_user(caller, uid, update))

    async def get_user_by_id(
        self, caller: UserProfile, uid: str
    ) -> Result[UserProfile | None]:
        return await _as_result(self.auth.get_user_by_id(caller, uid))

    # --- Institutions & onboarding ---

    async def get_institutions(self) -> list[Institution]:
        return await self.institutions.get_institutions()

    async def get_institution_by_code(self, code: str) -> Institution | None:
        return await self.institutions.get_institution_by_code(code)

    async def create_institution(
        self,
        caller: UserProfile,
        name: str,
        code: str,
        logo: str = "",
        description: str = "",
        theme_color: str | None = None,
        email_domain: str | None = None,
    ) -> Result[Institution]:
        return await _as_result(
            self.institutions.create_institution(
                caller, name, code, logo, description, theme_color, email_domain
            )
        )

    async def delete_institution(
        self, caller: UserProfile, institution_id: str
    ) -> Result[None]:
        return await _as_result(
            self.institutions.delete_institution(caller, institution_id)
        )

    async def submit_onboarding_request(
        self,
        institute_name: str,
        email: str,
        contact_name: str,
        email_domain: str | None = None,
    ) -> Result[OnboardingRequest]:
        return await _as_result(
            self.institutions.submit_onboarding_request(
                institute_name, email, contact_name, email_domain
            )
        )

    async def get_onboarding_requests(
        self, caller: UserProfile
    ) -> Result[list[OnboardingRequest]]:
        return await _as_result(self.institutions.get_onboarding_requests(caller))

    async def approve_request(
        self, caller: UserProfile, request_id: str
    ) -> Result[Institution]:
        return await _as_result(self.institutions.approve_request(caller, request_id))

    # --- Feed ---

    async def create_post(self, caller: UserProfile, draft: PostDraft) -> Result[Post]:
        return await _as_result(self.posts.create_post(caller, draft))

    async def get_posts(
        self,
        caller: UserProfile,
        institution_id: str,
        post_type: PostType,
        only_verified: bool = True,
    ) -> Result[list[Post]]:
        return await _as_result(
            self.posts.get_posts(caller, institution_id, post_type, only_verified)
        )

    async def get_pending_posts(
        self, caller: UserProfile, institution_id: str
    ) -> Result[list[Post]]:
        return await _as_result(self.posts.get_pending_posts(caller, institution_id))

    async def get_user_posts(
        self, caller: UserProfile, author_id: str
    ) -> Result[list[Post]]:
        return await _as_result(self.posts.get_user_posts(caller, author_id))

    async def verify_post(self, caller: UserProfile, post_id: str) -> Result[Post]:
        return await _as_result(self.posts.verify_post(caller, post_id))

    async def delete_post(self, caller: UserProfile, post_id: str) -> Result[None]:
        return await _as_result(self.posts.delete_post(caller, post_id))

    async def toggle_like(self, caller: UserProfile, post_id: str) -> Result[Post]:
        return await _as_result(self.posts.toggle_like(caller, post_id))

    async def add_comment(
        self, caller: UserProfile, post_id: str, user_name: str, text: str
    ) -> Result[Comment]:
        return await _as_result(
            self.posts.add_comment(caller, post_id, user_name, text)
        )

    # --- Directory ---

    async def get_all_users(
        self, caller: UserProfile, institution_id: str
    ) -> Result[list[UserProfile]]:
        return await _as_result(self.directory.get_all_users(caller, institution_id))

    async def admin_get_all_users(
        self, caller: UserProfile, institution_id: str
    ) -> Result[list[UserProfile]]:
        return await _as_result(
            self.directory.admin_get_all_users(caller, institution_id)
        )

    async def admin_toggle_block_user(
        self, caller: UserProfile, uid: str
    ) -> Result[UserProfile | None]:
        return await _as_result(self.directory.admin_toggle_block_user(caller, uid))

    async def admin_delete_user(self, caller: UserProfile, uid: str) -> Result[None]:
        return await _as_result(self.directory.admin_delete_user(caller, uid))

    # --- Messaging ---

    async def send_message(
        self, caller: UserProfile, receiver_id: str, text: str
    ) -> Result[Message]:
        return await _as_result(self.messaging.send_message(caller, receiver_id, text))

    async def get_messages(
        self, caller: UserProfile, other_user_id: str
    ) -> Result[list[Message]]:
        return await _as_result(self.messaging.get_messages(caller, other_user_id))

    async def get_conversations(self, caller: UserProfile) -> Result[list[str]]:
        return await _as_result(self.messaging.get_conversations(caller))

    def open_conversation(
        self, caller: UserProfile, other_user_id: str, on_update: ThreadCallback
    ) -> ConversationPoller:
        """Create a poller for an open conversation view.

        The caller must ``start()`` it (or use ``async with``) and stop it
        when the view closes.
        """
        return ConversationPoller(
            self.messaging,
            caller,
            other_user_id,
            on_update,
            interval_seconds=self._settings.message_poll_interval_seconds,
        )
