"""Vote domain service."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

import logfire

from memex.domain.batch import BatchedMutation
from memex.domain.model.common import utc_now
from memex.domain.error import AccountBanned
from memex.domain.repository import DocumentStore, UserRepository
from memex.domain.repository.document_store import Collection, DocumentRef, Increment
from memex.domain.value import SubjectKind, UserId, VoteAction, VoteType, vote_key

from .base import Service
from .score_aggregator import ScoreAggregator, ScoreUpdate
from .vote_ledger import VoteLedger, VoteOutcome

SUBJECT_COLLECTIONS = {
    SubjectKind.POST: Collection.POSTS,
    SubjectKind.COMMENT: Collection.COMMENTS,
}

VOTE_COLLECTIONS = {
    SubjectKind.POST: Collection.POST_VOTES,
    SubjectKind.COMMENT: Collection.COMMENT_VOTES,
}


@dataclass(frozen=True)
class VoteResult:
    """Counters after a vote, as seen by the voter."""

    subject_kind: SubjectKind
    subject_id: str
    new_score: int
    upvotes: int
    downvotes: int
    hot_score: float | None
    user_vote: VoteType | None
    changed: bool


class VoteService(Service):
    """Domain service for vote operations.

    A vote is read (ledger), scored (aggregator) and written as one batch:
    the vote record set or delete, plus the counter update on the post or
    comment. Counters are written as increments so concurrent votes on the
    same subject add up; `hot_score` is written from the read snapshot and
    settles on the next vote.
    """

    def __init__(
        self,
        vote_ledger: VoteLedger,
        score_aggregator: ScoreAggregator,
        document_store: DocumentStore,
        user_repository: UserRepository,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_ledger: Vote ledger
            score_aggregator: Score aggregator
            document_store: Store that commits the vote batch
            user_repository: Looks up the voter to enforce bans
        """
        self.vote_ledger = vote_ledger
        self.score_aggregator = score_aggregator
        self.document_store = document_store
        self.user_repository = user_repository

    async def vote(
        self,
        subject_kind: SubjectKind,
        subject_id: str,
        user_id: UserId,
        requested: VoteAction | str,
    ) -> VoteResult:
        """Cast, change or remove a vote on a post or comment.

        Args:
            subject_kind: Post or comment
            subject_id: ID of the post or comment
            user_id: The voter
            requested: upvote, downvote or remove

        Returns:
            New counters and the user's resulting vote

        Raises:
            InvalidVoteType: If `requested` is not a valid action
            SubjectNotFound: If the post or comment doesn't exist
            AccountBanned: If the voter is banned
            BatchCommitFailed: If the store rejected the write
        """
        action = self.vote_ledger.parse_action(requested)

        with logfire.span(
            "vote_service.vote",
            subject_kind=subject_kind.value,
            subject_id=subject_id,
            user_id=str(user_id),
            action=action.value,
        ):
            now = utc_now()
            voter = await self.user_repository.find_by_id(user_id)
            if voter and voter.is_banned_at(now):
                logfire.warn("Banned user tried to vote", user_id=str(user_id))
                raise AccountBanned(user_id)

            outcome = await self.vote_ledger.cast_vote(
                subject_kind, subject_id, user_id, action, now=now
            )
            update = self.score_aggregator.apply_delta(
                outcome.subject, outcome.upvote_delta, outcome.downvote_delta, now
            )

            if not outcome.requires_write and not update.clamped:
                logfire.info(
                    "Vote unchanged, nothing to write",
                    subject_id=subject_id,
                    user_id=str(user_id),
                )
                return self._result(subject_kind, subject_id, outcome, update, False)

            batch = BatchedMutation(self.document_store, f"vote_{subject_kind.value}")
            vote_ref = DocumentRef(
                collection=VOTE_COLLECTIONS[subject_kind],
                id=vote_key(subject_id, user_id),
            )
            if outcome.new_vote is None:
                batch.delete(vote_ref)
            else:
                batch.set(vote_ref, outcome.new_vote.to_document())

            batch.update(
                DocumentRef(collection=SUBJECT_COLLECTIONS[subject_kind], id=subject_id),
                self._counter_payload(outcome, update, now),
            )
            await batch.commit()

            logfire.info(
                "Vote recorded",
                subject_kind=subject_kind.value,
                subject_id=subject_id,
                new_score=update.score,
            )
            return self._result(subject_kind, subject_id, outcome, update, True)

    @staticmethod
    def _counter_payload(
        outcome: VoteOutcome, update: ScoreUpdate, now: datetime
    ) -> dict[str, Any]:
        if update.clamped:
            # Stored counters had drifted; overwrite with the repaired values
            payload: dict[str, Any] = {
                "upvotes": update.upvotes,
                "downvotes": update.downvotes,
                "score": update.score,
            }
        else:
            payload = {
                "upvotes": Increment(amount=outcome.upvote_delta),
                "downvotes": Increment(amount=outcome.downvote_delta),
                "score": Increment(amount=outcome.upvote_delta - outcome.downvote_delta),
            }

        if update.hot_score is not None:
            payload["hot_score"] = update.hot_score
        payload["updated_at"] = now
        return payload

    @staticmethod
    def _result(
        subject_kind: SubjectKind,
        subject_id: str,
        outcome: VoteOutcome,
        update: ScoreUpdate,
        changed: bool,
    ) -> VoteResult:
        return VoteResult(
            subject_kind=subject_kind,
            subject_id=subject_id,
            new_score=update.score,
            upvotes=update.upvotes,
            downvotes=update.downvotes,
            hot_score=update.hot_score,
            user_vote=outcome.new_vote.type if outcome.new_vote else None,
            changed=changed,
        )
