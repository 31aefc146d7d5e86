"""Application layer for the networking context."""

from networking.application.services import DirectoryService

__all__ = ["DirectoryService"]
