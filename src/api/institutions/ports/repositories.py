"""Repository protocols (ports) for the institutions context.

Creation and deletion are described as batch writes so the service can
commit an institution together with its code reservation, welcome post and
(when approving) the request status in one atomic batch.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from institutions.domain.institution import Institution
from institutions.domain.onboarding_request import OnboardingRequest, RequestStatus
from shared_kernel.documents import DocumentWrite


@runtime_checkable
class IInstitutionRepository(Protocol):
    """Repository for Institution persistence."""

    def creation_writes(self, institution: Institution) -> list[DocumentWrite]:
        """Writes creating the institution and reserving its code.

        Committing them fails with DocumentAlreadyExistsError when the code
        is already taken.
        """
        ...

    def deletion_writes(self, institution: Institution) -> list[DocumentWrite]:
        """Writes removing the institution and releasing its code."""
        ...

    async def get_by_id(self, institution_id: str) -> Institution | None:
        """Retrieve an institution, or None if absent."""
        ...

    async def list_all(self) -> list[Institution]:
        """All institutions; order unspecified."""
        ...

    async def find_by_code(self, code: str) -> Institution | None:
        """Case-insensitive, whitespace-insensitive code lookup."""
        ...


@runtime_checkable
class IOnboardingRequestRepository(Protocol):
    """Repository for OnboardingRequest persistence."""

    async def save(self, request: OnboardingRequest) -> None:
        """Persist a new request."""
        ...

    async def get_by_id(self, request_id: str) -> OnboardingRequest | None:
        """Retrieve a request, or None if absent."""
        ...

    async def list_by_status(self, status: RequestStatus) -> list[OnboardingRequest]:
        """Requests in ``status``; order unspecified."""
        ...

    def replacement_write(self, request: OnboardingRequest) -> DocumentWrite:
        """Write overwriting the stored request with ``request``."""
        ...
