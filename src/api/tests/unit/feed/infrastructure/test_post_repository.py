"""Unit tests for PostRepository."""

import pytest

from feed.domain import Comment, Post, PostDraft, PostStatus, PostType
from feed.infrastructure import PostRepository
from feed.infrastructure.post_repository import POSTS, post_from_document
from shared_kernel.authorization import UserRole
from shared_kernel.documents import DocumentAlreadyExistsError, DocumentNotFoundError


@pytest.fixture
def repository(store):
    return PostRepository(store)


def _post(post_id="p1", institution_id="inst_nfsu", post_type=PostType.JOB, **kw):
    draft = PostDraft(
        institution_id=institution_id,
        author_id=kw.pop("author_id", "u_rohan"),
        author_name="Rohan",
        author_role=UserRole.STUDENT,
        content="content",
        type=post_type,
    )
    return Post.from_draft(draft, post_id=post_id, timestamp=kw.pop("timestamp", 1000))


class TestPostRepository:
    """Tests for post persistence."""

    @pytest.mark.asyncio
    async def test_save_and_get(self, repository):
        post = _post()

        await repository.save(post)

        assert await repository.get_by_id("p1") == post

    @pytest.mark.asyncio
    async def test_save_never_overwrites(self, repository):
        await repository.save(_post())

        with pytest.raises(DocumentAlreadyExistsError):
            await repository.save(_post())

    @pytest.mark.asyncio
    async def test_list_by_institution_filters(self, repository):
        await repository.save(_post("p1"))
        await repository.save(_post("p2", post_type=PostType.EVENTS))
        await repository.save(_post("p3", institution_id="inst_other"))
        await repository.verify("p1")

        jobs = await repository.list_by_institution("inst_nfsu", post_type=PostType.JOB)
        verified = await repository.list_by_institution(
            "inst_nfsu", status=PostStatus.VERIFIED
        )
        everything = await repository.list_by_institution("inst_nfsu")

        assert [p.id for p in jobs] == ["p1"]
        assert [p.id for p in verified] == ["p1"]
        assert sorted(p.id for p in everything) == ["p1", "p2"]

    @pytest.mark.asyncio
    async def test_verify_absent_post(self, repository):
        assert await repository.verify("missing") is None

    @pytest.mark.asyncio
    async def test_delete_if_pending(self, repository):
        await repository.save(_post("p1"))
        await repository.save(_post("p2"))
        await repository.verify("p2")

        assert await repository.delete_if_pending("p1") is None
        assert await repository.get_by_id("p1") is None

        remaining = await repository.delete_if_pending("p2")
        assert remaining.is_verified
        assert await repository.get_by_id("p2") is not None

    @pytest.mark.asyncio
    async def test_toggle_like(self, repository):
        await repository.save(_post())

        liked = await repository.toggle_like("p1", "u_priya")
        unliked = await repository.toggle_like("p1", "u_priya")

        assert (liked.likes, liked.liked_by) == (1, ("u_priya",))
        assert (unliked.likes, unliked.liked_by) == (0, ())
        assert await repository.toggle_like("missing", "u_priya") is None

    @pytest.mark.asyncio
    async def test_toggle_like_on_legacy_post(self, repository, store):
        """Posts stored without a liker set still count likes."""
        await store.set(
            POSTS,
            "legacy",
            {
                "id": "legacy",
                "institutionId": "inst_nfsu",
                "authorRole": "STUDENT",
                "type": "NEWSLETTER",
                "status": "VERIFIED",
                "likes": 4,
            },
        )

        liked = await repository.toggle_like("legacy", "u_priya")

        assert liked.likes == 5
        assert liked.liked_by == ("u_priya",)

    @pytest.mark.asyncio
    async def test_append_comment_keeps_order(self, repository):
        await repository.save(_post())
        first = Comment("c1", "u1", "A", "first", 1)
        second = Comment("c2", "u2", "B", "second", 2)

        await repository.append_comment("p1", first)
        await repository.append_comment("p1", second)

        assert (await repository.get_by_id("p1")).comments == (first, second)

    @pytest.mark.asyncio
    async def test_append_comment_to_absent_post(self, repository):
        with pytest.raises(DocumentNotFoundError):
            await repository.append_comment("missing", Comment("c", "u", "A", "t", 1))

    @pytest.mark.asyncio
    async def test_list_by_author_and_delete_by_institution(self, repository):
        await repository.save(_post("p1"))
        await repository.save(_post("p2", institution_id="inst_other"))

        assert len(await repository.list_by_author("u_rohan")) == 2
        assert await repository.delete_by_institution("inst_nfsu") == 1
        assert [p.id for p in await repository.list_by_author("u_rohan")] == ["p2"]


def test_post_document_uses_stored_field_names():
    post = post_from_document(
        {
            "id": "p1",
            "institutionId": "i",
            "authorId": "u",
            "authorName": "A",
            "authorRole": "ALUMNI",
            "content": "c",
            "type": "JOB",
            "status": "PENDING",
            "timestamp": 5,
            "jobLink": "https://x",
            "comments": [{"id": "c1", "userId": "u2", "userName": "B", "text": "t"}],
        }
    )

    assert post.job_link == "https://x"
    assert post.author_role == UserRole.ALUMNI
    assert post.comments[0].user_id == "u2"
    assert post.comments[0].read is False
