"""Authentication application service for the identity context.

Handles member sign-up, role-scoped login, the admin logins, session
subscription and self-service profile edits. Session state lives in the
caller-owned ``AuthSession``; this service holds none.
"""

from __future__ import annotations

import secrets
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import NoReturn

from identity.application.observability import AuthServiceProbe, DefaultAuthServiceProbe
from identity.domain.profile import UserProfile, default_avatar_url
from identity.domain.session import AuthSession
from identity.domain.value_objects import Identity, ProfileUpdate, normalize_email
from identity.ports.exceptions import IdentityNotFoundError, InvalidCredentialsError
from identity.ports.identity_provider import IdentityProvider
from identity.ports.repositories import ITenantLookup, IUserProfileRepository
from infrastructure.settings import PlatformSettings, get_platform_settings
from shared_kernel.authorization import PLATFORM_INSTITUTION_ID, AccessPolicy, UserRole
from shared_kernel.errors import AccessDeniedError, NotFoundError, require_fields

AuthCallback = Callable[[UserProfile | None], Awaitable[None]]

SUPER_ADMIN_NAME = "Squadran CEO"


@dataclass(frozen=True)
class AuthSubscription:
    """Handle returned by subscribe_to_auth."""

    _remove: Callable[[], None]

    def unsubscribe(self) -> None:
        """Stop receiving session transitions."""
        self._remove()


class AuthService:
    """Application service for authentication and session lifecycle."""

    def __init__(
        self,
        profile_repository: IUserProfileRepository,
        identity_provider: IdentityProvider,
        tenant_lookup: ITenantLookup,
        access_policy: AccessPolicy | None = None,
        settings: PlatformSettings | None = None,
        probe: AuthServiceProbe | None = None,
    ):
        """Initialize AuthService with dependencies.

        Args:
            profile_repository: Repository for user profiles
            identity_provider: Authenticates and registers identities
            tenant_lookup: Read access to institutions (existence, email domain)
            access_policy: Guards for caller-scoped operations
            settings: Platform settings (admin emails, bootstrap flag)
            probe: Optional domain probe for observability
        """
        self._profiles = profile_repository
        self._identity_provider = identity_provider
        self._tenants = tenant_lookup
        self._policy = access_policy or AccessPolicy()
        self._settings = settings or get_platform_settings()
        self._probe = probe or DefaultAuthServiceProbe()

    # --- Sign-up ---

    async def signup_student(
        self,
        session: AuthSession,
        institution_id: str,
        name: str,
        email: str,
        batch: str,
        password: str,
    ) -> UserProfile:
        """Register a student and sign them in.

        Raises:
            ValidationFailedError: If a required field is blank or the
                password is refused
            NotFoundError: If the institution does not exist
            AccessDeniedError: If the email is outside the institution's domain
            ConflictError: If the email is already registered
        """
        require_fields(
            institution_id=institution_id,
            name=name,
            email=email,
            batch=batch,
            password=password,
        )
        return await self._register(
            session,
            institution_id=institution_id,
            email=email,
            password=password,
            role=UserRole.STUDENT,
            name=name.strip(),
            batch=batch.strip(),
            bio="Student",
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
    ) -> UserProfile:
        """Register an alumnus and sign them in.

        Same failures as signup_student; roll_no is also required.
        """
        require_fields(
            institution_id=institution_id,
            name=name,
            roll_no=roll_no,
            email=email,
            batch=batch,
            password=password,
        )
        return await self._register(
            session,
            institution_id=institution_id,
            email=email,
            password=password,
            role=UserRole.ALUMNI,
            name=name.strip(),
            batch=batch.strip(),
            roll_no=roll_no.strip(),
            bio=(bio or "").strip() or "Alumni",
        )

    async def _register(
        self,
        session: AuthSession,
        *,
        institution_id: str,
        email: str,
        password: str,
        role: UserRole,
        name: str,
        batch: str,
        bio: str,
        roll_no: str | None = None,
    ) -> UserProfile:
        tenant = await self._tenants.get_by_id(institution_id)
        if tenant is None:
            raise NotFoundError("institution_not_found")
        self._policy.require_email_domain(email, tenant.email_domain)

        identity = await self._identity_provider.register(
            normalize_email(email), password
        )
        profile = UserProfile(
            uid=identity.uid,
            institution_id=institution_id,
            name=name,
            role=role,
            email=identity.email,
            roll_no=roll_no,
            avatar=default_avatar_url(name),
            batch=batch,
            bio=bio,
            blocked=False,
        )
        await self._profiles.save(profile)
        await session.establish(identity)

        self._probe.signed_up(uid=profile.uid, institution_id=institution_id, role=role)
        return profile

    # --- Login ---

    async def login_student(
        self, session: AuthSession, email: str, password: str, institution_id: str
    ) -> UserProfile:
        """Log in a student of ``institution_id``.

        Raises:
            ValidationFailedError: If a required field is blank
            AccessDeniedError: On bad credentials, role or institution
                mismatch, or a blocked profile; the session is ended
        """
        return await self._login(
            session, email, password, institution_id, UserRole.STUDENT
        )

    async def login_alumni(
        self, session: AuthSession, email: str, password: str, institution_id: str
    ) -> UserProfile:
        """Log in an alumnus of ``institution_id``; see login_student."""
        return await self._login(
            session, email, password, institution_id, UserRole.ALUMNI
        )

    async def login_inst_admin(
        self, session: AuthSession, email: str, password: str, institution_id: str
    ) -> UserProfile:
        """Log in the institution admin.

        Only the configured admin email is accepted. With bootstrap enabled,
        the first login for an institution provisions the identity and an
        INSTITUTION_ADMIN profile.
        """
        require_fields(email=email, password=password, institution_id=institution_id)
        admin_email = normalize_email(self._settings.institution_admin_email)
        if normalize_email(email) != admin_email:
            await self._deny(
                session, UserRole.INSTITUTION_ADMIN, institution_id, "not_admin_email"
            )

        return await self._login(
            session,
            email,
            password,
            institution_id,
            UserRole.INSTITUTION_ADMIN,
            bootstrap=self._bootstrap_institution_admin,
        )

    async def login_super_admin(
        self, session: AuthSession, password: str
    ) -> UserProfile:
        """Log in the platform owner with the configured credential.

        Ensures a SUPER_ADMIN profile exists for the identity.
        """
        require_fields(password=password)
        email = normalize_email(self._settings.super_admin_email)

        try:
            identity = await self._identity_provider.sign_in(email, password)
        except IdentityNotFoundError:
            configured = self._settings.super_admin_password.get_secret_value()
            matches = secrets.compare_digest(password.encode(), configured.encode())
            if not (self._settings.admin_bootstrap_enabled and matches):
                await self._deny(
                    session, UserRole.SUPER_ADMIN, None, "invalid_credentials"
                )
            identity = await self._identity_provider.register(email, password)
            self._probe.admin_bootstrapped(
                uid=identity.uid,
                institution_id=PLATFORM_INSTITUTION_ID,
                role=UserRole.SUPER_ADMIN,
            )
        except InvalidCredentialsError:
            await self._deny(
                session, UserRole.SUPER_ADMIN, None, "invalid_credentials"
            )

        profile = await self._profiles.get_by_id(identity.uid)
        if profile is None:
            profile = UserProfile(
                uid=identity.uid,
                institution_id=PLATFORM_INSTITUTION_ID,
                name=SUPER_ADMIN_NAME,
                role=UserRole.SUPER_ADMIN,
                email=email,
                avatar=default_avatar_url("CEO"),
            )
            await self._profiles.save(profile)
        elif profile.role != UserRole.SUPER_ADMIN:
            await self._deny(session, UserRole.SUPER_ADMIN, None, "role_mismatch")

        return await self._complete_login(session, identity, profile)

    async def _login(
        self,
        session: AuthSession,
        email: str,
        password: str,
        institution_id: str,
        role: UserRole,
        bootstrap: Callable[[str, str, str], Awaitable[Identity]] | None = None,
    ) -> UserProfile:
        require_fields(email=email, password=password, institution_id=institution_id)

        try:
            identity = await self._identity_provider.sign_in(
                normalize_email(email), password
            )
        except IdentityNotFoundError:
            if bootstrap is None or not self._settings.admin_bootstrap_enabled:
                await self._deny(session, role, institution_id, "invalid_credentials")
            identity = await bootstrap(normalize_email(email), password, institution_id)
        except InvalidCredentialsError:
            await self._deny(session, role, institution_id, "invalid_credentials")

        profile = await self._profiles.get_by_id(identity.uid)
        if (
            profile is None
            or profile.role != role
            or profile.institution_id != institution_id
        ):
            await self._deny(
                session, role, institution_id, "role_or_institution_mismatch"
            )

        return await self._complete_login(session, identity, profile)

    async def _complete_login(
        self, session: AuthSession, identity: Identity, profile: UserProfile
    ) -> UserProfile:
        if profile.blocked:
            await self._deny(session, profile.role, profile.institution_id, "blocked")

        await session.establish(identity)
        self._probe.login_succeeded(
            uid=profile.uid, institution_id=profile.institution_id, role=profile.role
        )
        return profile

    async def _bootstrap_institution_admin(
        self, email: str, password: str, institution_id: str
    ) -> Identity:
        tenant = await self._tenants.get_by_id(institution_id)
        if tenant is None:
            raise NotFoundError("institution_not_found")

        identity = await self._identity_provider.register(email, password)
        name = f"{tenant.code} Admin"
        await self._profiles.save(
            UserProfile(
                uid=identity.uid,
                institution_id=institution_id,
                name=name,
                role=UserRole.INSTITUTION_ADMIN,
                email=identity.email,
                avatar=default_avatar_url(name),
            )
        )
        self._probe.admin_bootstrapped(
            uid=identity.uid,
            institution_id=institution_id,
            role=UserRole.INSTITUTION_ADMIN,
        )
        return identity

    async def _deny(
        self,
        session: AuthSession,
        role: UserRole,
        institution_id: str | None,
        reason: str,
    ) -> NoReturn:
        await session.end()
        self._probe.login_denied(
            role=role, institution_id=institution_id, reason=reason
        )
        raise AccessDeniedError(reason)

    # --- Session ---

    async def logout(self, session: AuthSession) -> None:
        """End the session; safe to call when nobody is signed in."""
        uid = session.identity.uid if session.identity is not None else None
        await session.end()
        self._probe.logged_out(uid=uid)

    async def subscribe_to_auth(
        self, session: AuthSession, callback: AuthCallback
    ) -> AuthSubscription:
        """Observe the signed-in profile.

        ``callback`` runs once immediately and again on every session
        transition, receiving the signed-in profile or None. A blocked
        profile ends the session, so the callback sees None instead.
        """

        async def on_transition(identity: Identity | None) -> None:
            profile = await self._resolve_profile(session, identity)
            if identity is not None and session.identity is None:
                # Ending the session already delivered None to this listener.
                return
            await callback(profile)

        remove = session.add_listener(on_transition)
        await on_transition(session.identity)
        return AuthSubscription(remove)

    async def revalidate_session(self, session: AuthSession) -> UserProfile | None:
        """Re-read the signed-in profile, ending the session if it is blocked."""
        return await self._resolve_profile(session, session.identity)

    async def _resolve_profile(
        self, session: AuthSession, identity: Identity | None
    ) -> UserProfile | None:
        if identity is None:
            return None
        profile = await self._profiles.get_by_id(identity.uid)
        if profile is not None and profile.blocked:
            self._probe.blocked_session_ended(uid=profile.uid)
            await session.end()
            return None
        return profile

    # --- Profiles ---

    async def update_user(
        self, caller: UserProfile, uid: str, update: ProfileUpdate
    ) -> UserProfile | None:
        """Edit the caller's own name, bio, avatar or batch.

        Returns:
            The updated profile, or None if it no longer exists

        Raises:
            AccessDeniedError: If the caller is blocked or edits someone else
        """
        self._policy.require_self(caller, uid)
        changes = update.changes()
        if "name" in changes:
            require_fields(name=changes["name"])
        if not changes:
            return await self._profiles.get_by_id(uid)

        profile = await self._profiles.update_fields(uid, changes)
        if profile is not None:
            self._probe.profile_updated(uid=uid, fields=sorted(changes))
        return profile

    async def get_user_by_id(self, caller: UserProfile, uid: str) -> UserProfile | None:
        """Look up a profile in the caller's institution.

        Profiles of other institutions are reported as absent unless the
        caller is the super admin.
        """
        self._policy.require_active(caller)
        profile = await self._profiles.get_by_id(uid)
        if profile is None:
            return None
        if (
            caller.role != UserRole.SUPER_ADMIN
            and profile.institution_id != caller.institution_id
        ):
            return None
        return profile
