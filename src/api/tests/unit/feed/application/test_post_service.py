"""Unit tests for PostService."""

import asyncio
from unittest.mock import create_autospec

import pytest
import pytest_asyncio

from feed.application import PostService
from feed.application.observability import PostServiceProbe
from feed.domain import PostDraft, PostStatus, PostType
from feed.infrastructure import PostRepository
from infrastructure.database.engines import create_document_engine
from infrastructure.documents import InMemoryDocumentStore, SqlDocumentStore
from infrastructure.observability import DocumentStoreProbe
from infrastructure.settings import StorageSettings
from shared_kernel.authorization import UserRole
from shared_kernel.errors import (
    AccessDeniedError,
    ConflictError,
    NotFoundError,
    ValidationFailedError,
)


@pytest.fixture
def probe():
    return create_autospec(PostServiceProbe, instance=True)


@pytest.fixture
def post_service(store, clock, probe):
    return PostService(PostRepository(store), clock=clock, probe=probe)


@pytest.fixture
def rohan(make_profile):
    return make_profile()


@pytest.fixture
def admin(make_profile):
    return make_profile(uid="u_admin", role=UserRole.INSTITUTION_ADMIN)


def _draft(author, post_type=PostType.NEWSLETTER, **overrides) -> PostDraft:
    fields = dict(
        institution_id=author.institution_id,
        author_id=author.uid,
        author_name=author.name,
        author_role=author.role,
        content="Hackathon this weekend",
        type=post_type,
        title="Hackathon",
    )
    fields.update(overrides)
    return PostDraft(**fields)


class TestCreatePost:
    """Tests for submitting posts."""

    @pytest.mark.asyncio
    async def test_created_pending_with_server_timestamp(
        self, post_service, rohan, clock, probe
    ):
        post = await post_service.create_post(rohan, _draft(rohan))

        assert post.status == PostStatus.PENDING
        assert post.timestamp == clock.now
        assert post.likes == 0
        probe.post_created.assert_called_once_with(
            post_id=post.id, institution_id="inst_nfsu", post_type=PostType.NEWSLETTER
        )

    @pytest.mark.asyncio
    async def test_plain_string_type_and_role_are_parsed(
        self, post_service, rohan, store
    ):
        """Drafts carrying the raw board and role strings are stored as enums."""
        draft = _draft(rohan, post_type="JOB", author_role="STUDENT", company="Acme")

        post = await post_service.create_post(rohan, draft)

        assert post.type is PostType.JOB
        assert post.author_role is UserRole.STUDENT
        stored = await PostRepository(store).get_by_id(post.id)
        assert stored.type is PostType.JOB
        assert stored.author_role is UserRole.STUDENT

    @pytest.mark.asyncio
    async def test_author_must_be_caller(self, post_service, rohan):
        with pytest.raises(AccessDeniedError) as exc_info:
            await post_service.create_post(rohan, _draft(rohan, author_id="u_other"))

        assert exc_info.value.reason == "author_mismatch"

    @pytest.mark.asyncio
    async def test_author_role_must_match(self, post_service, rohan):
        with pytest.raises(AccessDeniedError):
            await post_service.create_post(
                rohan, _draft(rohan, author_role=UserRole.INSTITUTION_ADMIN)
            )

    @pytest.mark.asyncio
    async def test_other_institution_rejected(self, post_service, rohan):
        with pytest.raises(AccessDeniedError):
            await post_service.create_post(
                rohan, _draft(rohan, institution_id="inst_other")
            )

    @pytest.mark.asyncio
    async def test_blank_content_rejected(self, post_service, rohan):
        with pytest.raises(ValidationFailedError) as exc_info:
            await post_service.create_post(rohan, _draft(rohan, content=""))

        assert exc_info.value.reason == "missing_content"

    @pytest.mark.asyncio
    async def test_blocked_author_rejected(self, post_service, make_profile):
        blocked = make_profile(blocked=True)

        with pytest.raises(AccessDeniedError):
            await post_service.create_post(blocked, _draft(blocked))


class TestReadingBoards:
    """Tests for get_posts, get_pending_posts and get_user_posts."""

    @pytest.mark.asyncio
    async def test_only_verified_newest_first(self, post_service, rohan, admin):
        older = await post_service.create_post(rohan, _draft(rohan))
        newer = await post_service.create_post(rohan, _draft(rohan))
        pending = await post_service.create_post(rohan, _draft(rohan))
        await post_service.verify_post(admin, older.id)
        await post_service.verify_post(admin, newer.id)

        posts = await post_service.get_posts(rohan, "inst_nfsu", PostType.NEWSLETTER)

        assert [p.id for p in posts] == [newer.id, older.id]
        everything = await post_service.get_posts(
            rohan, "inst_nfsu", PostType.NEWSLETTER, only_verified=False
        )
        assert pending.id in [p.id for p in everything]

    @pytest.mark.asyncio
    async def test_boards_are_separate(self, post_service, rohan, admin):
        job = await post_service.create_post(
            rohan, _draft(rohan, PostType.JOB, company="Acme")
        )
        await post_service.verify_post(admin, job.id)

        assert await post_service.get_posts(rohan, "inst_nfsu", PostType.EVENTS) == []
        assert len(await post_service.get_posts(rohan, "inst_nfsu", PostType.JOB)) == 1

    @pytest.mark.asyncio
    async def test_other_institution_board_denied(self, post_service, rohan):
        with pytest.raises(AccessDeniedError):
            await post_service.get_posts(rohan, "inst_other", PostType.JOB)

    @pytest.mark.asyncio
    async def test_pending_queue_for_admins_only(self, post_service, rohan, admin):
        post = await post_service.create_post(rohan, _draft(rohan))

        queue = await post_service.get_pending_posts(admin, "inst_nfsu")

        assert [p.id for p in queue] == [post.id]
        with pytest.raises(AccessDeniedError):
            await post_service.get_pending_posts(rohan, "inst_nfsu")

    @pytest.mark.asyncio
    async def test_user_posts_limited_to_caller_institution(
        self, post_service, rohan, make_profile, store
    ):
        await post_service.create_post(rohan, _draft(rohan))
        outsider = make_profile(uid="u_out", institution_id="inst_other")

        assert len(await post_service.get_user_posts(rohan, rohan.uid)) == 1
        assert await post_service.get_user_posts(outsider, rohan.uid) == []

        owner = make_profile(uid="u_ceo", role=UserRole.SUPER_ADMIN)
        assert len(await post_service.get_user_posts(owner, rohan.uid)) == 1


class TestModeration:
    """Tests for verify_post and delete_post."""

    @pytest.mark.asyncio
    async def test_verify_twice_is_noop(self, post_service, rohan, admin):
        post = await post_service.create_post(rohan, _draft(rohan))

        first = await post_service.verify_post(admin, post.id)
        second = await post_service.verify_post(admin, post.id)

        assert first == second
        assert second.status == PostStatus.VERIFIED

    @pytest.mark.asyncio
    async def test_verify_missing_post(self, post_service, admin, probe):
        with pytest.raises(NotFoundError) as exc_info:
            await post_service.verify_post(admin, "missing")

        assert exc_info.value.reason == "post_not_found"
        probe.post_not_found.assert_called_once_with(post_id="missing")

    @pytest.mark.asyncio
    async def test_admin_of_other_institution_denied(
        self, post_service, rohan, make_profile
    ):
        post = await post_service.create_post(rohan, _draft(rohan))
        other_admin = make_profile(
            uid="u_admin2", institution_id="inst_other", role=UserRole.INSTITUTION_ADMIN
        )

        with pytest.raises(AccessDeniedError):
            await post_service.verify_post(other_admin, post.id)

    @pytest.mark.asyncio
    async def test_reject_pending_post(self, post_service, rohan, admin, probe):
        post = await post_service.create_post(rohan, _draft(rohan))

        await post_service.delete_post(admin, post.id)

        assert await post_service.get_pending_posts(admin, "inst_nfsu") == []
        probe.post_rejected.assert_called_once_with(
            post_id=post.id, institution_id="inst_nfsu"
        )

    @pytest.mark.asyncio
    async def test_verified_post_cannot_be_deleted(self, post_service, rohan, admin):
        post = await post_service.create_post(rohan, _draft(rohan))
        await post_service.verify_post(admin, post.id)

        with pytest.raises(ConflictError) as exc_info:
            await post_service.delete_post(admin, post.id)

        assert exc_info.value.reason == "post_verified"

    @pytest.mark.asyncio
    async def test_delete_missing_post(self, post_service, admin):
        with pytest.raises(NotFoundError):
            await post_service.delete_post(admin, "missing")


class TestEngagement:
    """Tests for likes and comments."""

    @pytest.mark.asyncio
    async def test_toggle_like_round_trip(self, post_service, rohan, make_profile):
        post = await post_service.create_post(rohan, _draft(rohan))
        priya = make_profile(uid="u_priya")

        liked = await post_service.toggle_like(priya, post.id)
        also_liked = await post_service.toggle_like(rohan, post.id)
        unliked = await post_service.toggle_like(priya, post.id)

        assert liked.likes == 1
        assert also_liked.likes == 2
        assert unliked.likes == 1
        assert unliked.liked_by == (rohan.uid,)

    @pytest.mark.asyncio
    async def test_like_missing_post(self, post_service, rohan):
        with pytest.raises(NotFoundError):
            await post_service.toggle_like(rohan, "missing")

    @pytest.mark.asyncio
    async def test_add_comment(self, post_service, rohan, clock):
        post = await post_service.create_post(rohan, _draft(rohan))

        comment = await post_service.add_comment(rohan, post.id, " Rohan ", "Count me in")

        assert comment.user_id == rohan.uid
        assert comment.user_name == "Rohan"
        assert comment.timestamp == clock.now
        assert comment.read is False

    @pytest.mark.asyncio
    async def test_blank_comment_rejected(self, post_service, rohan):
        post = await post_service.create_post(rohan, _draft(rohan))

        with pytest.raises(ValidationFailedError):
            await post_service.add_comment(rohan, post.id, "Rohan", "   ")

    @pytest.mark.asyncio
    async def test_comment_from_other_institution_denied(
        self, post_service, rohan, make_profile
    ):
        post = await post_service.create_post(rohan, _draft(rohan))
        outsider = make_profile(uid="u_out", institution_id="inst_other")

        with pytest.raises(AccessDeniedError):
            await post_service.add_comment(outsider, post.id, "Out", "hi")


@pytest_asyncio.fixture(params=["memory", "sql"])
async def shared_store(request):
    """A store shared by concurrent callers, for each local backend."""
    probe = create_autospec(DocumentStoreProbe, instance=True)
    if request.param == "memory":
        store = InMemoryDocumentStore(probe=probe)
    else:
        settings = StorageSettings(backend="sql", database_url="sqlite+aiosqlite://")
        store = SqlDocumentStore(create_document_engine(settings), probe=probe)
        await store.create_schema()

    yield store

    await store.close()


class TestConcurrentEngagement:
    """Tests that likes and comments issued concurrently are never lost."""

    @pytest.mark.asyncio
    async def test_concurrent_likes_keep_count_in_sync(
        self, shared_store, clock, probe, rohan, make_profile
    ):
        service = PostService(PostRepository(shared_store), clock=clock, probe=probe)
        post = await service.create_post(rohan, _draft(rohan))
        members = [make_profile(uid=f"u_{i}") for i in range(20)]

        await asyncio.gather(*(service.toggle_like(m, post.id) for m in members))

        stored = await PostRepository(shared_store).get_by_id(post.id)
        assert stored.likes == 20
        assert sorted(stored.liked_by) == sorted(m.uid for m in members)

    @pytest.mark.asyncio
    async def test_same_user_from_two_sessions(self, shared_store, clock, probe, rohan):
        """Two simultaneous toggles by one user cancel out."""
        service = PostService(PostRepository(shared_store), clock=clock, probe=probe)
        post = await service.create_post(rohan, _draft(rohan))

        await asyncio.gather(
            service.toggle_like(rohan, post.id), service.toggle_like(rohan, post.id)
        )

        stored = await PostRepository(shared_store).get_by_id(post.id)
        assert stored.likes == len(stored.liked_by) == 0

    @pytest.mark.asyncio
    async def test_concurrent_comments_all_kept(self, shared_store, clock, probe, rohan):
        service = PostService(PostRepository(shared_store), clock=clock, probe=probe)
        post = await service.create_post(rohan, _draft(rohan))

        await asyncio.gather(
            *(
                service.add_comment(rohan, post.id, "Rohan", f"comment {i}")
                for i in range(20)
            )
        )

        stored = await PostRepository(shared_store).get_by_id(post.id)
        assert sorted(c.text for c in stored.comments) == sorted(
            f"comment {i}" for i in range(20)
        )
