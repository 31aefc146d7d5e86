"""Application layer for the institutions context."""

from institutions.application.services import ColorPicker, InstitutionService

__all__ = ["ColorPicker", "InstitutionService"]
