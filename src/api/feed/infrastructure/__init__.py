"""Feed infrastructure adapters."""

from feed.infrastructure.post_repository import PostRepository

__all__ = ["PostRepository"]
