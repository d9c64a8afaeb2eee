"""Score aggregation and hot-score ranking."""

from dataclasses import dataclass
from datetime import datetime, timezone

import logfire

from memex.config import RankingSettings
from memex.domain.model.common import VotableModel, utc_now
from memex.domain.model.post import Post

from .base import Service


@dataclass(frozen=True)
class ScoreUpdate:
    """Counters of a post or comment after a vote delta."""

    upvotes: int
    downvotes: int
    score: int
    hot_score: float | None  # None for comments
    clamped: bool = False


class ScoreAggregator(Service):
    """Applies vote deltas to denormalized counters.

    Hot score is a time-decayed rank for posts:

        hot_score = score / (age_hours + time_offset) ^ gravity

    With the defaults (offset 2, gravity 1.8) a brand-new post ranks at
    `score / 2^1.8`, and for a fixed score the rank strictly falls with age.
    """

    def __init__(self, ranking: RankingSettings) -> None:
        """Initialize score aggregator.

        Args:
            ranking: Ranking settings (gravity and time offset)
        """
        self.gravity = ranking.gravity
        self.time_offset = ranking.time_offset

    def hot_score(
        self, score: int, created_at: datetime, now: datetime | None = None
    ) -> float:
        """Compute the hot score of a post.

        Args:
            score: Net score (upvotes - downvotes)
            created_at: Post creation time
            now: Evaluation time (defaults to the current wall clock)

        Returns:
            Time-decayed ranking score
        """
        now = now or utc_now()
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)

        # Clock skew can put created_at slightly in the future
        age_hours = max(0.0, (now - created_at).total_seconds() / 3600)
        return score / ((age_hours + self.time_offset) ** self.gravity)

    def apply_delta(
        self,
        subject: VotableModel,
        upvote_delta: int,
        downvote_delta: int,
        now: datetime | None = None,
    ) -> ScoreUpdate:
        """Apply vote deltas to a post or comment.

        Negative counters mean the stored counters drifted from the vote
        records. They are logged and clamped to zero.

        Args:
            subject: Post or comment as last read
            upvote_delta: Change to upvotes (-1, 0 or +1)
            downvote_delta: Change to downvotes (-1, 0 or +1)
            now: Time of the vote (defaults to the current wall clock)

        Returns:
            New counters, with hot score for posts
        """
        upvotes = subject.upvotes + upvote_delta
        downvotes = subject.downvotes + downvote_delta
        clamped = False

        if upvotes < 0 or downvotes < 0:
            logfire.error(
                "Negative vote counter clamped to zero",
                subject_kind=subject.kind.value,
                subject_id=str(subject.id),
                upvotes=upvotes,
                downvotes=downvotes,
            )
            upvotes = max(0, upvotes)
            downvotes = max(0, downvotes)
            clamped = True

        score = upvotes - downvotes
        hot_score = None
        if isinstance(subject, Post):
            hot_score = self.hot_score(score, subject.created_at, now)

        return ScoreUpdate(
            upvotes=upvotes,
            downvotes=downvotes,
            score=score,
            hot_score=hot_score,
            clamped=clamped,
        )
