"""Institutions infrastructure adapters."""

from institutions.infrastructure.institution_repository import InstitutionRepository
from institutions.infrastructure.request_repository import OnboardingRequestRepository

__all__ = [
    "InstitutionRepository",
    "OnboardingRequestRepository",
]
