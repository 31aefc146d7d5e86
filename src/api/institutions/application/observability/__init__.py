"""Observability for institutions application services."""

from institutions.application.observability.institution_service_probe import (
    DefaultInstitutionServiceProbe,
    InstitutionServiceProbe,
)

__all__ = [
    "DefaultInstitutionServiceProbe",
    "InstitutionServiceProbe",
]
