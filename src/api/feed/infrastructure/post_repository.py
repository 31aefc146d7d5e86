"""DocumentStore implementation of IPostRepository.

Posts live in the ``posts`` collection keyed by id. Comments are embedded
as an ordered array of maps.
"""

from __future__ import annotations

from typing import Any

from feed.domain.post import Comment, Post
from feed.domain.value_objects import PostStatus, PostType
from feed.ports.repositories import IPostRepository
from shared_kernel.authorization import UserRole
from shared_kernel.documents import (
    ArrayUnion,
    CreateDocument,
    Delete,
    DocumentStore,
    DocumentWrite,
    Mutation,
    Replace,
    delete_documents,
    eq,
)

POSTS = "posts"


def comment_to_document(comment: Comment) -> dict[str, Any]:
    return {
        "id": comment.id,
        "userId": comment.user_id,
        "userName": comment.user_name,
        "text": comment.text,
        "timestamp": comment.timestamp,
        "read": comment.read,
    }


def comment_from_document(document: dict[str, Any]) -> Comment:
    return Comment(
        id=document["id"],
        user_id=document["userId"],
        user_name=document.get("userName", ""),
        text=document.get("text", ""),
        timestamp=int(document.get("timestamp", 0)),
        read=bool(document.get("read", False)),
    )


def post_to_document(post: Post) -> dict[str, Any]:
    document: dict[str, Any] = {
        "id": post.id,
        "institutionId": post.institution_id,
        "authorId": post.author_id,
        "authorName": post.author_name,
        "authorRole": post.author_role.value,
        "content": post.content,
        "type": post.type.value,
        "status": post.status.value,
        "timestamp": post.timestamp,
        "likes": post.likes,
        "likedBy": list(post.liked_by),
        "comments": [comment_to_document(c) for c in post.comments],
    }
    optional = {
        "title": post.title,
        "company": post.company,
        "jobLink": post.job_link,
        "image": post.image,
    }
    document.update({key: value for key, value in optional.items() if value is not None})
    return document


def post_from_document(document: dict[str, Any]) -> Post:
    """Rebuild a post.

    Documents written before liker sets were tracked have no ``likedBy``.
    """
    return Post(
        id=document["id"],
        institution_id=document["institutionId"],
        author_id=document.get("authorId", ""),
        author_name=document.get("authorName", ""),
        author_role=UserRole.parse(document.get("authorRole")),
        content=document.get("content", ""),
        type=PostType.parse(document.get("type")),
        status=PostStatus.parse(document.get("status")),
        timestamp=int(document.get("timestamp", 0)),
        likes=int(document.get("likes", 0)),
        liked_by=tuple(document.get("likedBy") or ()),
        comments=tuple(comment_from_document(c) for c in document.get("comments") or ()),
        title=document.get("title"),
        company=document.get("company"),
        job_link=document.get("jobLink"),
        image=document.get("image"),
    )


class PostRepository(IPostRepository):
    """Repository for posts over a DocumentStore."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def creation_write(self, post: Post) -> DocumentWrite:
        return CreateDocument(POSTS, post.id, post_to_document(post))

    async def save(self, post: Post) -> None:
        await self._store.commit([self.creation_write(post)])

    async def get_by_id(self, post_id: str) -> Post | None:
        document = await self._store.get(POSTS, post_id)
        return post_from_document(document) if document is not None else None

    async def list_by_institution(
        self,
        institution_id: str,
        post_type: PostType | None = None,
        status: PostStatus | None = None,
    ) -> list[Post]:
        filters = [eq("institutionId", institution_id)]
        if post_type is not None:
            filters.append(eq("type", post_type.value))
        if status is not None:
            filters.append(eq("status", status.value))
        documents = await self._store.query(POSTS, filters)
        return [post_from_document(document) for document in documents]

    async def list_by_author(self, author_id: str) -> list[Post]:
        documents = await self._store.query(POSTS, [eq("authorId", author_id)])
        return [post_from_document(document) for document in documents]

    async def verify(self, post_id: str) -> Post | None:
        def mutate(current: dict[str, Any] | None) -> Mutation:
            if current is None:
                return None
            return Replace({**current, "status": PostStatus.VERIFIED.value})

        document = await self._store.transact(POSTS, post_id, mutate)
        return post_from_document(document) if document is not None else None

    async def delete_if_pending(self, post_id: str) -> Post | None:
        def mutate(current: dict[str, Any] | None) -> Mutation:
            if current is None or current.get("status") == PostStatus.VERIFIED:
                return None
            return Delete()

        document = await self._store.transact(POSTS, post_id, mutate)
        return post_from_document(document) if document is not None else None

    async def toggle_like(self, post_id: str, user_id: str) -> Post | None:
        def mutate(current: dict[str, Any] | None) -> Mutation:
            if current is None:
                return None
            toggled = post_from_document(current).toggle_like(user_id)
            return Replace(
                {**current, "likes": toggled.likes, "likedBy": list(toggled.liked_by)}
            )

        document = await self._store.transact(POSTS, post_id, mutate)
        return post_from_document(document) if document is not None else None

    async def append_comment(self, post_id: str, comment: Comment) -> None:
        await self._store.update(
            POSTS,
            post_id,
            {"comments": ArrayUnion((comment_to_document(comment),))},
        )

    async def delete_by_institution(self, institution_id: str) -> int:
        documents = await self._store.query(POSTS, [eq("institutionId", institution_id)])
        return await delete_documents(
            self._store, POSTS, [document["id"] for document in documents]
        )
