"""Post aggregate and its comments."""

from __future__ import annotations

from dataclasses import dataclass, replace

from feed.domain.value_objects import PostStatus, PostType
from shared_kernel.authorization import UserRole

# Author id used for posts the platform writes on an institution's behalf.
SYSTEM_AUTHOR_ID = "system"


@dataclass(frozen=True)
class Comment:
    """An append-only reply on a post."""

    id: str
    user_id: str
    user_name: str
    text: str
    timestamp: int
    read: bool = False


@dataclass(frozen=True)
class PostDraft:
    """What a member submits; the service assigns everything else.

    Type-specific fields: title, company and job_link for JOB; title for
    EVENTS and NEWSLETTER.
    """

    institution_id: str
    author_id: str
    author_name: str
    author_role: UserRole
    content: str
    type: PostType
    title: str | None = None
    company: str | None = None
    job_link: str | None = None
    image: str | None = None


@dataclass(frozen=True)
class Post:
    """A newsletter item, job listing or event in one institution.

    Business rules:
    - created PENDING with no likes and no comments
    - likes equals len(liked_by); the count never goes below zero
    - author fields are a snapshot taken at creation time
    """

    id: str
    institution_id: str
    author_id: str
    author_name: str
    author_role: UserRole
    content: str
    type: PostType
    status: PostStatus
    timestamp: int
    likes: int = 0
    liked_by: tuple[str, ...] = ()
    comments: tuple[Comment, ...] = ()
    title: str | None = None
    company: str | None = None
    job_link: str | None = None
    image: str | None = None

    @classmethod
    def from_draft(cls, draft: PostDraft, post_id: str, timestamp: int) -> Post:
        """Create a new PENDING post from a member's draft."""
        return cls(
            id=post_id,
            institution_id=draft.institution_id,
            author_id=draft.author_id,
            author_name=draft.author_name.strip(),
            author_role=draft.author_role,
            content=draft.content,
            type=draft.type,
            status=PostStatus.PENDING,
            timestamp=timestamp,
            title=draft.title,
            company=draft.company,
            job_link=draft.job_link,
            image=draft.image,
        )

    @classmethod
    def welcome(
        cls,
        post_id: str,
        institution_id: str,
        institution_name: str,
        code: str,
        timestamp: int,
    ) -> Post:
        """The verified newsletter every new institution starts with."""
        return cls(
            id=post_id,
            institution_id=institution_id,
            author_id=SYSTEM_AUTHOR_ID,
            author_name=f"{code} Admin",
            author_role=UserRole.INSTITUTION_ADMIN,
            title=f"Welcome to {institution_name}",
            content=(
                f"Welcome to the official {institution_name} social platform "
                "powered by Squadran."
            ),
            type=PostType.NEWSLETTER,
            status=PostStatus.VERIFIED,
            timestamp=timestamp,
        )

    @property
    def is_verified(self) -> bool:
        return self.status == PostStatus.VERIFIED

    def verify(self) -> Post:
        """Move to VERIFIED; verifying twice is a no-op."""
        return replace(self, status=PostStatus.VERIFIED)

    def toggle_like(self, user_id: str) -> Post:
        """Add or remove ``user_id`` from the liker set."""
        if user_id in self.liked_by:
            liked_by = tuple(uid for uid in self.liked_by if uid != user_id)
            return replace(self, liked_by=liked_by, likes=max(0, self.likes - 1))
        return replace(self, liked_by=(*self.liked_by, user_id), likes=self.likes + 1)
