"""Application layer for the feed context."""

from feed.application.services import PostService

__all__ = ["PostService"]
