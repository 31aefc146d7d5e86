"""Institution application service.

Handles the public institution directory, super-admin onboarding and
de-boarding, and the partnership request workflow. De-boarding explicitly
cascades to the institution's users, posts and messages.
"""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence

from feed.domain.post import Post
from feed.ports.repositories import IPostRepository
from identity.ports.repositories import IUserProfileRepository
from infrastructure.settings import PlatformSettings, get_platform_settings
from institutions.application.observability import (
    DefaultInstitutionServiceProbe,
    InstitutionServiceProbe,
)
from institutions.domain.institution import (
    DEFAULT_LOGO_URL,
    Institution,
    normalize_code,
    normalize_email_domain,
)
from institutions.domain.onboarding_request import (
    PARTNER_DESCRIPTION,
    OnboardingRequest,
    RequestStatus,
)
from institutions.ports.repositories import (
    IInstitutionRepository,
    IOnboardingRequestRepository,
)
from messaging.ports.repositories import IMessageRepository
from shared_kernel.authorization import AccessPolicy, Caller
from shared_kernel.documents import (
    DocumentAlreadyExistsError,
    DocumentStore,
    DocumentWrite,
)
from shared_kernel.errors import (
    ConflictError,
    NotFoundError,
    ValidationFailedError,
    require_fields,
)
from shared_kernel.identifiers import Clock, generate_id, now_millis

ColorPicker = Callable[[Sequence[str]], str]


class InstitutionService:
    """Application service for institutions and onboarding requests."""

    def __init__(
        self,
        institution_repository: IInstitutionRepository,
        request_repository: IOnboardingRequestRepository,
        post_repository: IPostRepository,
        profile_repository: IUserProfileRepository,
        message_repository: IMessageRepository,
        store: DocumentStore,
        access_policy: AccessPolicy | None = None,
        settings: PlatformSettings | None = None,
        clock: Clock = now_millis,
        pick_color: ColorPicker = random.choice,
        probe: InstitutionServiceProbe | None = None,
    ):
        """Initialize InstitutionService with dependencies.

        Args:
            institution_repository: Repository for institutions
            request_repository: Repository for onboarding requests
            post_repository: Repository for posts (welcome post, cascade delete)
            profile_repository: Repository for profiles (cascade delete)
            message_repository: Repository for messages (cascade delete)
            store: Document store used to commit multi-document batches
            access_policy: Role guards
            settings: Platform settings (default theme, onboarding palette)
            clock: Source of epoch-millisecond timestamps
            pick_color: Chooses a theme colour for approved requests
            probe: Optional domain probe for observability
        """
        self._institutions = institution_repository
        self._requests = request_repository
        self._posts = post_repository
        self._profiles = profile_repository
        self._messages = message_repository
        self._store = store
        self._policy = access_policy or AccessPolicy()
        self._settings = settings or get_platform_settings()
        self._clock = clock
        self._pick_color = pick_color
        self._probe = probe or DefaultInstitutionServiceProbe()

    # --- Directory ---

    async def get_institutions(self) -> list[Institution]:
        """All institutions, ordered by name."""
        institutions = await self._institutions.list_all()
        return sorted(institutions, key=lambda i: i.name.lower())

    async def get_institution_by_code(self, code: str) -> Institution | None:
        """Find an institution by code, ignoring case and surrounding spaces."""
        if not code or not code.strip():
            return None
        return await self._institutions.find_by_code(code)

    # --- Onboarding / de-boarding ---

    async def create_institution(
        self,
        caller: Caller,
        name: str,
        code: str,
        logo: str = "",
        description: str = "",
        theme_color: str | None = None,
        email_domain: str | None = None,
    ) -> Institution:
        """Onboard an institution together with its welcome post.

        Raises:
            AccessDeniedError: If the caller is not the super admin
            ValidationFailedError: If name or code is missing or malformed
            ConflictError: If the code is already taken
        """
        self._policy.require_super_admin(caller)
        institution, writes = await self._prepare_institution(
            name=name,
            code=code,
            logo=logo,
            description=description,
            theme_color=theme_color,
            email_domain=email_domain,
        )
        await self._commit_creation(institution, writes)
        return institution

    async def delete_institution(self, caller: Caller, institution_id: str) -> None:
        """De-board an institution and everything that belongs to it.

        Users, posts and messages go first; the institution and its code
        reservation go last, so an interrupted delete can simply be retried.
        Deleting an absent institution does nothing. Identity-provider
        accounts are left in place.
        """
        self._policy.require_super_admin(caller)
        institution = await self._institutions.get_by_id(institution_id)
        if institution is None:
            return

        posts = await self._posts.delete_by_institution(institution_id)
        users = await self._profiles.delete_by_institution(institution_id)
        messages = await self._messages.delete_by_institution(institution_id)
        await self._store.commit(self._institutions.deletion_writes(institution))

        self._probe.institution_deleted(
            institution_id=institution_id, users=users, posts=posts, messages=messages
        )

    # --- Partnership requests ---

    async def submit_onboarding_request(
        self,
        institute_name: str,
        email: str,
        contact_name: str,
        email_domain: str | None = None,
    ) -> OnboardingRequest:
        """File a PENDING partnership request; no sign-in required.

        Raises:
            ValidationFailedError: If a required field is blank
        """
        require_fields(
            institute_name=institute_name, email=email, contact_name=contact_name
        )
        request = OnboardingRequest(
            id=generate_id(),
            institute_name=institute_name.strip(),
            contact_name=contact_name.strip(),
            email=email.strip(),
            email_domain=normalize_email_domain(email_domain),
        )
        await self._requests.save(request)

        self._probe.onboarding_request_submitted(
            request_id=request.id, institute_name=request.institute_name
        )
        return request

    async def get_onboarding_requests(self, caller: Caller) -> list[OnboardingRequest]:
        """Requests still awaiting a decision."""
        self._policy.require_super_admin(caller)
        return await self._requests.list_by_status(RequestStatus.PENDING)

    async def approve_request(self, caller: Caller, request_id: str) -> Institution:
        """Approve a PENDING request and create its institution.

        The institution, code reservation, welcome post and the request's
        new status are committed in one batch.

        Raises:
            AccessDeniedError: If the caller is not the super admin
            NotFoundError: If the request does not exist
            ConflictError: If the request is not PENDING or the derived code
                is taken
        """
        self._policy.require_super_admin(caller)
        request = await self._requests.get_by_id(request_id)
        if request is None:
            raise NotFoundError("request_not_found")
        if not request.is_pending:
            raise ConflictError("request_not_pending")

        institution, writes = await self._prepare_institution(
            name=request.institute_name,
            code=request.derived_code,
            logo="",
            description=PARTNER_DESCRIPTION,
            theme_color=self._pick_color(self._settings.onboarding_palette),
            email_domain=request.email_domain,
        )
        writes.append(self._requests.replacement_write(request.approve()))
        await self._commit_creation(institution, writes)

        self._probe.onboarding_request_approved(
            request_id=request_id, institution_id=institution.id
        )
        return institution

    # --- Helpers ---

    async def _prepare_institution(
        self,
        *,
        name: str,
        code: str,
        logo: str,
        description: str,
        theme_color: str | None,
        email_domain: str | None,
    ) -> tuple[Institution, list[DocumentWrite]]:
        require_fields(name=name, code=code)
        code = code.strip()
        if "/" in code:
            raise ValidationFailedError("invalid_code")

        if await self._institutions.find_by_code(code) is not None:
            self._probe.duplicate_institution_code(code=normalize_code(code))
            raise ConflictError("duplicate_code")

        institution = Institution(
            id=generate_id(),
            name=name.strip(),
            code=code,
            logo=(logo or "").strip() or DEFAULT_LOGO_URL,
            description=(description or "").strip(),
            theme_color=(theme_color or "").strip() or self._settings.default_theme_color,
            email_domain=normalize_email_domain(email_domain),
        )
        welcome = Post.welcome(
            post_id=generate_id(),
            institution_id=institution.id,
            institution_name=institution.name,
            code=institution.code,
            timestamp=self._clock(),
        )
        writes = [
            *self._institutions.creation_writes(institution),
            self._posts.creation_write(welcome),
        ]
        return institution, writes

    async def _commit_creation(
        self, institution: Institution, writes: list[DocumentWrite]
    ) -> None:
        try:
            await self._store.commit(writes)
        except DocumentAlreadyExistsError as e:
            self._probe.duplicate_institution_code(code=institution.normalized_code)
            raise ConflictError("duplicate_code") from e

        self._probe.institution_created(
            institution_id=institution.id, code=institution.code
        )
