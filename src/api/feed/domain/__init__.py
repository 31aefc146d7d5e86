"""Feed domain: posts, comments and moderation state."""

from feed.domain.post import SYSTEM_AUTHOR_ID, Comment, Post, PostDraft
from feed.domain.value_objects import PostStatus, PostType

__all__ = [
    "Comment",
    "Post",
    "PostDraft",
    "PostStatus",
    "PostType",
    "SYSTEM_AUTHOR_ID",
]
