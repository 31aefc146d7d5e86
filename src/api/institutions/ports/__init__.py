"""Ports for the institutions context."""

from institutions.ports.repositories import (
    IInstitutionRepository,
    IOnboardingRequestRepository,
)

__all__ = [
    "IInstitutionRepository",
    "IOnboardingRequestRepository",
]
