"""Unit tests for VoteLedger."""

import pytest

from memex.domain.error import InvalidVoteType, SubjectNotFound
from memex.domain.service import VoteLedger
from memex.domain.service.vote_ledger import vote_deltas
from memex.domain.value import SubjectKind, UserId, VoteAction, VoteType
from tests.conftest import seed_community, seed_post, seed_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class TestVoteDeltas:
    """Tests for the delta table."""

    @pytest.mark.parametrize(
        ("existing", "action", "expected"),
        [
            (None, VoteAction.UPVOTE, (1, 0)),
            (None, VoteAction.DOWNVOTE, (0, 1)),
            (None, VoteAction.REMOVE, (0, 0)),
            (VoteType.UPVOTE, VoteAction.UPVOTE, (0, 0)),
            (VoteType.UPVOTE, VoteAction.DOWNVOTE, (-1, 1)),
            (VoteType.UPVOTE, VoteAction.REMOVE, (-1, 0)),
            (VoteType.DOWNVOTE, VoteAction.UPVOTE, (1, -1)),
            (VoteType.DOWNVOTE, VoteAction.DOWNVOTE, (0, 0)),
            (VoteType.DOWNVOTE, VoteAction.REMOVE, (0, -1)),
        ],
    )
    def test_deltas(self, existing, action, expected):
        """Existing vote is withdrawn, then the requested one applied."""
        assert vote_deltas(existing, action) == expected

    def test_deltas_are_unit_sized(self):
        """Every delta is -1, 0 or +1."""
        for existing in (None, VoteType.UPVOTE, VoteType.DOWNVOTE):
            for action in VoteAction:
                up, down = vote_deltas(existing, action)
                assert up in (-1, 0, 1)
                assert down in (-1, 0, 1)


class TestParseAction:
    """Tests for action validation."""

    def test_accepts_strings(self):
        assert VoteLedger.parse_action("upvote") is VoteAction.UPVOTE
        assert VoteLedger.parse_action("remove") is VoteAction.REMOVE

    @pytest.mark.parametrize("value", ["", "UPVOTE", "sideways", "none"])
    def test_rejects_unknown_values(self, value):
        with pytest.raises(InvalidVoteType, match="Invalid vote type"):
            VoteLedger.parse_action(value)


class TestCastVote:
    """Tests for cast_vote."""

    @pytest.mark.asyncio
    async def test_first_upvote_creates_record(self, unit_env):
        """A first upvote yields +1 upvote and a new vote record."""
        # Arrange
        await seed_user(unit_env, "alice")
        await seed_user(unit_env, "bob")
        community = await seed_community(unit_env, "alice")
        post = await seed_post(unit_env, "alice", community.id)
        ledger = await unit_env.get(VoteLedger)

        # Act
        outcome = await ledger.cast_vote(
            SubjectKind.POST, post.id, UserId("bob"), "upvote"
        )

        # Assert
        assert (outcome.upvote_delta, outcome.downvote_delta) == (1, 0)
        assert outcome.previous_vote is None
        assert outcome.new_vote is not None
        assert outcome.new_vote.id == f"{post.id}_bob"
        assert outcome.new_vote.type is VoteType.UPVOTE
        assert outcome.subject.id == post.id
        assert outcome.requires_write

    @pytest.mark.asyncio
    async def test_remove_without_vote_needs_no_write(self, unit_env):
        """Removing a vote that doesn't exist nets out to zero."""
        await seed_user(unit_env, "alice")
        community = await seed_community(unit_env, "alice")
        post = await seed_post(unit_env, "alice", community.id)
        ledger = await unit_env.get(VoteLedger)

        outcome = await ledger.cast_vote(
            SubjectKind.POST, post.id, UserId("bob"), VoteAction.REMOVE
        )

        assert (outcome.upvote_delta, outcome.downvote_delta) == (0, 0)
        assert outcome.new_vote is None
        assert not outcome.requires_write

    @pytest.mark.asyncio
    async def test_invalid_action_rejected_before_lookup(self, unit_env):
        """An invalid action fails even when the subject doesn't exist."""
        ledger = await unit_env.get(VoteLedger)

        with pytest.raises(InvalidVoteType):
            await ledger.cast_vote(SubjectKind.POST, "missing", UserId("bob"), "meh")

    @pytest.mark.asyncio
    async def test_missing_subject_raises(self, unit_env):
        ledger = await unit_env.get(VoteLedger)

        with pytest.raises(SubjectNotFound, match="Comment not found"):
            await ledger.cast_vote(
                SubjectKind.COMMENT, "missing", UserId("bob"), "upvote"
            )
