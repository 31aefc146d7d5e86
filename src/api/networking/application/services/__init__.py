"""Application services for the networking context."""

from networking.application.services.directory_service import DirectoryService

__all__ = ["DirectoryService"]
