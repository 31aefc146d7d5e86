"""Application services for the institutions context."""

from institutions.application.services.institution_service import (
    ColorPicker,
    InstitutionService,
)

__all__ = ["ColorPicker", "InstitutionService"]
