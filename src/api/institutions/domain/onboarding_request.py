"""Onboarding requests submitted by prospective institutions."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum

from shared_kernel.errors import ValidationFailedError

PARTNER_DESCRIPTION = "Partner Institution"


class RequestStatus(StrEnum):
    """Lifecycle of a request. Only PENDING -> APPROVED is performed."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @classmethod
    def parse(cls, value: str | None) -> RequestStatus:
        try:
            return cls(value)
        except ValueError as e:
            raise ValidationFailedError("unknown_request_status") from e


@dataclass(frozen=True)
class OnboardingRequest:
    """A partnership application awaiting super-admin approval."""

    id: str
    institute_name: str
    contact_name: str
    email: str
    status: RequestStatus = RequestStatus.PENDING
    email_domain: str | None = None

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING

    @property
    def derived_code(self) -> str:
        """Institution code for an approved request: first four letters, upper-cased."""
        return self.institute_name.strip()[:4].upper()

    def approve(self) -> OnboardingRequest:
        return replace(self, status=RequestStatus.APPROVED)
