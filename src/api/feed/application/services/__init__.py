"""Application services for the feed context."""

from feed.application.services.post_service import PostService

__all__ = ["PostService"]
