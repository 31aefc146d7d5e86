"""Institutions domain: tenants and onboarding requests."""

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

__all__ = [
    "DEFAULT_LOGO_URL",
    "Institution",
    "OnboardingRequest",
    "PARTNER_DESCRIPTION",
    "RequestStatus",
    "normalize_code",
    "normalize_email_domain",
]
