"""Observability for feed application services."""

from feed.application.observability.post_service_probe import (
    DefaultPostServiceProbe,
    PostServiceProbe,
)

__all__ = [
    "DefaultPostServiceProbe",
    "PostServiceProbe",
]
