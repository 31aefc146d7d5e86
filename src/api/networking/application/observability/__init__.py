"""Observability for networking application services."""

from networking.application.observability.directory_service_probe import (
    DefaultDirectoryServiceProbe,
    DirectoryServiceProbe,
)

__all__ = [
    "DefaultDirectoryServiceProbe",
    "DirectoryServiceProbe",
]
