"""Repository protocols (ports) for the feed context."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from feed.domain.post import Comment, Post
from feed.domain.value_objects import PostStatus, PostType
from shared_kernel.documents import DocumentWrite


@runtime_checkable
class IPostRepository(Protocol):
    """Repository for Post persistence.

    Multi-field changes go through single-document transactions so the
    like count and liker set never drift apart.
    """

    def creation_write(self, post: Post) -> DocumentWrite:
        """Describe the creation of ``post`` for inclusion in a batch."""
        ...

    async def save(self, post: Post) -> None:
        """Persist a new post."""
        ...

    async def get_by_id(self, post_id: str) -> Post | None:
        """Retrieve a post, or None if absent."""
        ...

    async def list_by_institution(
        self,
        institution_id: str,
        post_type: PostType | None = None,
        status: PostStatus | None = None,
    ) -> list[Post]:
        """Posts of an institution, optionally narrowed by type and status.

        Order is unspecified.
        """
        ...

    async def list_by_author(self, author_id: str) -> list[Post]:
        """Posts written by ``author_id``; order is unspecified."""
        ...

    async def verify(self, post_id: str) -> Post | None:
        """Atomically mark a post VERIFIED.

        Returns:
            The updated post, or None if it does not exist
        """
        ...

    async def delete_if_pending(self, post_id: str) -> Post | None:
        """Atomically delete a post unless it is VERIFIED.

        Returns:
            None if the post was deleted or did not exist; the unchanged
            post if it is VERIFIED
        """
        ...

    async def toggle_like(self, post_id: str, user_id: str) -> Post | None:
        """Atomically add or remove a like.

        Returns:
            The updated post, or None if it does not exist
        """
        ...

    async def append_comment(self, post_id: str, comment: Comment) -> None:
        """Atomically append a comment.

        Raises:
            DocumentNotFoundError: If the post does not exist
        """
        ...

    async def delete_by_institution(self, institution_id: str) -> int:
        """Delete every post of an institution; returns the count."""
        ...
