"""Post application service for the feed context.

Covers the newsletter, job board and events board of an institution, plus
the moderation queue. State machine per post::

    PENDING --verify--> VERIFIED
    PENDING --reject--> (deleted)
"""

from __future__ import annotations

from dataclasses import replace

from feed.application.observability import DefaultPostServiceProbe, PostServiceProbe
from feed.domain.post import Comment, Post, PostDraft
from feed.domain.value_objects import PostStatus, PostType
from feed.ports.repositories import IPostRepository
from shared_kernel.authorization import AccessPolicy, Caller, UserRole
from shared_kernel.errors import (
    AccessDeniedError,
    ConflictError,
    NotFoundError,
    require_fields,
)
from shared_kernel.identifiers import Clock, generate_id, now_millis


def newest_first(posts: list[Post]) -> list[Post]:
    return sorted(posts, key=lambda post: post.timestamp, reverse=True)


class PostService:
    """Application service for posts, likes, comments and moderation."""

    def __init__(
        self,
        post_repository: IPostRepository,
        access_policy: AccessPolicy | None = None,
        clock: Clock = now_millis,
        probe: PostServiceProbe | None = None,
    ):
        """Initialize PostService with dependencies.

        Args:
            post_repository: Repository for post persistence
            access_policy: Role / institution guards
            clock: Source of epoch-millisecond timestamps
            probe: Optional domain probe for observability
        """
        self._posts = post_repository
        self._policy = access_policy or AccessPolicy()
        self._clock = clock
        self._probe = probe or DefaultPostServiceProbe()

    async def create_post(self, caller: Caller, draft: PostDraft) -> Post:
        """Submit a post to the moderation queue.

        The post is always created PENDING with no likes or comments and a
        server-assigned timestamp.

        Raises:
            ValidationFailedError: If a required field is missing
            AccessDeniedError: If the author snapshot is not the caller or
                the caller belongs to another institution
        """
        require_fields(
            institution_id=draft.institution_id,
            author_id=draft.author_id,
            author_name=draft.author_name,
            content=draft.content,
        )
        post_type = PostType.parse(draft.type)
        author_role = UserRole.parse(draft.author_role)

        self._policy.require_institution_access(caller, draft.institution_id)
        if draft.author_id != caller.uid or author_role != caller.role:
            raise AccessDeniedError("author_mismatch")

        post = Post.from_draft(
            replace(draft, type=post_type, author_role=author_role),
            post_id=generate_id(),
            timestamp=self._clock(),
        )
        await self._posts.save(post)

        self._probe.post_created(
            post_id=post.id, institution_id=post.institution_id, post_type=post_type
        )
        return post

    async def get_posts(
        self,
        caller: Caller,
        institution_id: str,
        post_type: PostType,
        only_verified: bool = True,
    ) -> list[Post]:
        """Posts of one board, newest first.

        With ``only_verified`` (the default) PENDING posts are never returned.
        """
        self._policy.require_institution_access(caller, institution_id)
        status = PostStatus.VERIFIED if only_verified else None
        posts = await self._posts.list_by_institution(
            institution_id, post_type=PostType.parse(post_type), status=status
        )
        return newest_first(posts)

    async def get_pending_posts(self, caller: Caller, institution_id: str) -> list[Post]:
        """The moderation queue of an institution, newest first."""
        self._policy.require_institution_admin(caller, institution_id)
        posts = await self._posts.list_by_institution(
            institution_id, status=PostStatus.PENDING
        )
        return newest_first(posts)

    async def get_user_posts(self, caller: Caller, author_id: str) -> list[Post]:
        """Posts written by ``author_id`` within the caller's institution."""
        self._policy.require_active(caller)
        posts = await self._posts.list_by_author(author_id)
        if caller.role != UserRole.SUPER_ADMIN:
            posts = [p for p in posts if p.institution_id == caller.institution_id]
        return newest_first(posts)

    async def verify_post(self, caller: Caller, post_id: str) -> Post:
        """Approve a pending post.

        Raises:
            NotFoundError: If the post does not exist
            AccessDeniedError: If the caller does not moderate its institution
        """
        post = await self._get_existing(post_id)
        self._policy.require_institution_admin(caller, post.institution_id)

        verified = await self._posts.verify(post_id)
        if verified is None:
            self._probe.post_not_found(post_id=post_id)
            raise NotFoundError("post_not_found")

        self._probe.post_verified(post_id=post_id, institution_id=post.institution_id)
        return verified

    async def delete_post(self, caller: Caller, post_id: str) -> None:
        """Reject (delete) a pending post.

        Raises:
            NotFoundError: If the post does not exist
            AccessDeniedError: If the caller does not moderate its institution
            ConflictError: If the post is already VERIFIED
        """
        post = await self._get_existing(post_id)
        self._policy.require_institution_admin(caller, post.institution_id)

        remaining = await self._posts.delete_if_pending(post_id)
        if remaining is not None:
            self._probe.verified_post_delete_refused(post_id=post_id)
            raise ConflictError("post_verified")

        self._probe.post_rejected(post_id=post_id, institution_id=post.institution_id)

    async def toggle_like(self, caller: Caller, post_id: str) -> Post:
        """Like the post, or unlike it if the caller already liked it.

        Raises:
            NotFoundError: If the post does not exist
        """
        post = await self._get_existing(post_id)
        self._policy.require_institution_access(caller, post.institution_id)

        updated = await self._posts.toggle_like(post_id, caller.uid)
        if updated is None:
            self._probe.post_not_found(post_id=post_id)
            raise NotFoundError("post_not_found")

        self._probe.like_toggled(post_id=post_id, user_id=caller.uid, likes=updated.likes)
        return updated

    async def add_comment(
        self, caller: Caller, post_id: str, user_name: str, text: str
    ) -> Comment:
        """Append a comment authored by the caller.

        Raises:
            ValidationFailedError: If the name or text is blank
            NotFoundError: If the post does not exist
        """
        require_fields(user_name=user_name, text=text)
        post = await self._get_existing(post_id)
        self._policy.require_institution_access(caller, post.institution_id)

        comment = Comment(
            id=generate_id(),
            user_id=caller.uid,
            user_name=user_name.strip(),
            text=text,
            timestamp=self._clock(),
        )
        await self._posts.append_comment(post_id, comment)

        self._probe.comment_added(post_id=post_id, comment_id=comment.id)
        return comment

    async def _get_existing(self, post_id: str) -> Post:
        post = await self._posts.get_by_id(post_id)
        if post is None:
            self._probe.post_not_found(post_id=post_id)
            raise NotFoundError("post_not_found")
        return post
