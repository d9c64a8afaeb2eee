"""Unit tests for VoteService."""

import asyncio

import pytest

from memex.domain.error import BatchCommitFailed, InvalidVoteType, SubjectNotFound
from memex.domain.model import Post, Vote
from memex.domain.repository import CommentRepository, PostRepository, VoteRepository
from memex.domain.repository.document_store import Collection
from memex.domain.service import VoteLedger, VoteService
from memex.domain.value import (
    CommunityId,
    PostId,
    SubjectKind,
    UserId,
    VoteType,
)
from memex.persistence.repository.inmemory import InMemoryDatabase
from tests.conftest import (
    hours_ago,
    put_document,
    seed_comment,
    seed_community,
    seed_post,
    seed_user,
)
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


async def setup_post(env) -> Post:
    await seed_user(env, "alice")
    await seed_user(env, "bob")
    community = await seed_community(env, "alice")
    return await seed_post(env, "alice", community.id)


def counters(subject) -> tuple[int, int, int]:
    return subject.upvotes, subject.downvotes, subject.score


class TestVoteOnPost:
    """Tests for voting on posts."""

    @pytest.mark.asyncio
    async def test_upvote_then_remove_round_trip(self, unit_env):
        """Upvote then remove returns the counters to where they were."""
        # Arrange
        post = await setup_post(unit_env)
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        assert counters(post) == (1, 0, 1)

        # Act - upvote
        result = await vote_service.vote(SubjectKind.POST, post.id, UserId("bob"), "upvote")

        # Assert
        assert (result.upvotes, result.downvotes, result.new_score) == (2, 0, 2)
        assert result.user_vote is VoteType.UPVOTE
        assert counters(await post_repo.find_by_id(post.id)) == (2, 0, 2)

        # Act - remove
        result = await vote_service.vote(SubjectKind.POST, post.id, UserId("bob"), "remove")

        # Assert
        assert (result.upvotes, result.downvotes, result.new_score) == (1, 0, 1)
        assert result.user_vote is None
        assert counters(await post_repo.find_by_id(post.id)) == (1, 0, 1)

    @pytest.mark.asyncio
    async def test_downvote(self, unit_env):
        post = await setup_post(unit_env)
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)

        result = await vote_service.vote(
            SubjectKind.POST, post.id, UserId("bob"), "downvote"
        )

        assert (result.upvotes, result.downvotes, result.new_score) == (1, 1, 0)
        assert counters(await post_repo.find_by_id(post.id)) == (1, 1, 0)

    @pytest.mark.asyncio
    async def test_switching_sides_moves_score_by_two(self, unit_env):
        post = await setup_post(unit_env)
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)

        up = await vote_service.vote(SubjectKind.POST, post.id, UserId("bob"), "upvote")
        down = await vote_service.vote(
            SubjectKind.POST, post.id, UserId("bob"), "downvote"
        )

        assert down.new_score == up.new_score - 2
        assert (down.upvotes, down.downvotes) == (1, 1)
        vote = await vote_repo.find(SubjectKind.POST, post.id, UserId("bob"))
        assert vote is not None
        assert vote.type is VoteType.DOWNVOTE

    @pytest.mark.asyncio
    async def test_one_vote_record_per_user(self, unit_env):
        """Repeated votes by one user keep a single record."""
        post = await setup_post(unit_env)
        vote_service = await unit_env.get(VoteService)
        database = await unit_env.get(InMemoryDatabase)

        for action in ("upvote", "upvote", "downvote", "upvote"):
            await vote_service.vote(SubjectKind.POST, post.id, UserId("bob"), action)

        votes = database.all(Collection.POST_VOTES)
        assert [v["id"] for v in votes] == [f"{post.id}_bob"]
        assert votes[0]["type"] == "upvote"

    @pytest.mark.asyncio
    async def test_repeat_vote_is_a_no_op(self, unit_env):
        """Voting the same way twice writes nothing the second time."""
        post = await setup_post(unit_env)
        vote_service = await unit_env.get(VoteService)
        database = await unit_env.get(InMemoryDatabase)

        await vote_service.vote(SubjectKind.POST, post.id, UserId("bob"), "upvote")
        batches = database.committed_batches
        result = await vote_service.vote(SubjectKind.POST, post.id, UserId("bob"), "upvote")

        assert not result.changed
        assert result.new_score == 2
        assert database.committed_batches == batches

    @pytest.mark.asyncio
    async def test_remove_without_vote_is_idempotent(self, unit_env):
        post = await setup_post(unit_env)
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        database = await unit_env.get(InMemoryDatabase)
        batches = database.committed_batches

        result = await vote_service.vote(SubjectKind.POST, post.id, UserId("bob"), "remove")

        assert not result.changed
        assert (result.upvotes, result.downvotes, result.new_score) == (1, 0, 1)
        assert counters(await post_repo.find_by_id(post.id)) == (1, 0, 1)
        assert database.committed_batches == batches

    @pytest.mark.asyncio
    async def test_hot_score_recomputed(self, unit_env):
        post = await setup_post(unit_env)
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)

        result = await vote_service.vote(SubjectKind.POST, post.id, UserId("bob"), "upvote")

        stored = await post_repo.find_by_id(post.id)
        assert result.hot_score is not None
        assert stored.hot_score == pytest.approx(result.hot_score)
        assert stored.hot_score > post.hot_score

    @pytest.mark.asyncio
    async def test_sequential_voters_add_up(self, unit_env):
        post = await setup_post(unit_env)
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        for uid in ("carol", "dave", "erin"):
            await seed_user(unit_env, uid)

        for uid in ("bob", "carol", "dave"):
            await vote_service.vote(SubjectKind.POST, post.id, UserId(uid), "upvote")
        await vote_service.vote(SubjectKind.POST, post.id, UserId("erin"), "downvote")

        assert counters(await post_repo.find_by_id(post.id)) == (4, 1, 3)

    @pytest.mark.asyncio
    async def test_interleaved_votes_from_same_snapshot_both_count(
        self, unit_env, monkeypatch
    ):
        """Two votes that read the same counters before either commits.

        Each sees (1, 0, 1). With increments both land; a full-value
        overwrite would leave (2, 0, 2).
        """
        # Arrange
        post = await setup_post(unit_env)
        await seed_user(unit_env, "carol")
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)

        original_load = VoteLedger.load_subject
        readers = 0
        both_read = asyncio.Event()

        async def load_then_wait(self, subject_kind, subject_id):
            nonlocal readers
            subject = await original_load(self, subject_kind, subject_id)
            readers += 1
            if readers == 2:
                both_read.set()
            await both_read.wait()
            return subject

        monkeypatch.setattr(VoteLedger, "load_subject", load_then_wait)

        # Act
        first, second = await asyncio.gather(
            vote_service.vote(SubjectKind.POST, post.id, UserId("bob"), "upvote"),
            vote_service.vote(SubjectKind.POST, post.id, UserId("carol"), "upvote"),
        )

        # Assert - each caller computed from the stale snapshot
        assert first.new_score == 2
        assert second.new_score == 2
        stored = await post_repo.find_by_id(post.id)
        assert counters(stored) == (3, 0, 3)


class TestVoteOnComment:
    """Tests for voting on comments."""

    @pytest.mark.asyncio
    async def test_comment_upvote_and_downvote(self, unit_env):
        post = await setup_post(unit_env)
        comment = await seed_comment(unit_env, "alice", post.id)
        vote_service = await unit_env.get(VoteService)
        comment_repo = await unit_env.get(CommentRepository)

        await vote_service.vote(SubjectKind.COMMENT, comment.id, UserId("bob"), "upvote")
        result = await vote_service.vote(
            SubjectKind.COMMENT, comment.id, UserId("bob"), "downvote"
        )

        assert result.hot_score is None
        assert counters(await comment_repo.find_by_id(comment.id)) == (1, 1, 0)

    @pytest.mark.asyncio
    async def test_post_votes_and_comment_votes_are_separate(self, unit_env):
        post = await setup_post(unit_env)
        comment = await seed_comment(unit_env, "alice", post.id)
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)

        await vote_service.vote(SubjectKind.COMMENT, comment.id, UserId("bob"), "upvote")

        assert await vote_repo.find(SubjectKind.POST, post.id, UserId("bob")) is None
        assert await vote_repo.find(SubjectKind.COMMENT, comment.id, UserId("bob"))


class TestVoteErrors:
    """Tests for vote failures."""

    @pytest.mark.asyncio
    async def test_invalid_vote_type(self, unit_env):
        post = await setup_post(unit_env)
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(InvalidVoteType):
            await vote_service.vote(SubjectKind.POST, post.id, UserId("bob"), "sideways")

    @pytest.mark.asyncio
    async def test_missing_post(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(SubjectNotFound):
            await vote_service.vote(SubjectKind.POST, "nope", UserId("bob"), "upvote")

    @pytest.mark.asyncio
    async def test_rejected_batch_changes_nothing(self, unit_env):
        post = await setup_post(unit_env)
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        post_repo = await unit_env.get(PostRepository)
        database = await unit_env.get(InMemoryDatabase)
        database.reject_next_commit = "store unavailable"

        with pytest.raises(BatchCommitFailed):
            await vote_service.vote(SubjectKind.POST, post.id, UserId("bob"), "upvote")

        assert await vote_repo.find(SubjectKind.POST, post.id, UserId("bob")) is None
        assert counters(await post_repo.find_by_id(post.id)) == (1, 0, 1)

    @pytest.mark.asyncio
    async def test_drifted_counters_are_repaired(self, unit_env):
        """A vote record the counters don't reflect is clamped, not negative."""
        database = await unit_env.get(InMemoryDatabase)
        created = hours_ago(1)
        post = Post(
            id=PostId("drifted"),
            title="Drifted",
            community_id=CommunityId("c1"),
            author_id=UserId("alice"),
            upvotes=0,
            downvotes=0,
            score=0,
            created_at=created,
            updated_at=created,
        )
        put_document(database, Collection.POSTS, post)
        put_document(
            database,
            Collection.POST_VOTES,
            Vote.cast(SubjectKind.POST, post.id, UserId("bob"), VoteType.UPVOTE, created),
        )
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)

        result = await vote_service.vote(SubjectKind.POST, post.id, UserId("bob"), "remove")

        assert (result.upvotes, result.downvotes, result.new_score) == (0, 0, 0)
        assert counters(await post_repo.find_by_id(post.id)) == (0, 0, 0)
        assert database.all(Collection.POST_VOTES) == []
