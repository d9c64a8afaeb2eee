"""Vote ledger: one vote per user per post or comment."""

from dataclasses import dataclass
from datetime import datetime

import logfire

from memex.domain.error import InvalidVoteType, SubjectNotFound
from memex.domain.model.common import VotableModel, utc_now
from memex.domain.model.vote import Vote
from memex.domain.repository import CommentRepository, PostRepository, VoteRepository
from memex.domain.value import CommentId, PostId, SubjectKind, UserId, VoteAction, VoteType

from .base import Service


@dataclass(frozen=True)
class VoteOutcome:
    """Result of casting a vote, before anything is written."""

    subject: VotableModel
    upvote_delta: int
    downvote_delta: int
    new_vote: Vote | None  # None means the vote record is deleted
    previous_vote: Vote | None

    @property
    def requires_write(self) -> bool:
        """False when the vote leaves everything as it was.

        Removing a vote that doesn't exist, or re-casting the type already
        recorded, nets out to zero.
        """
        return self.upvote_delta != 0 or self.downvote_delta != 0


def vote_deltas(existing: VoteType | None, action: VoteAction) -> tuple[int, int]:
    """Net (upvote, downvote) deltas for moving from `existing` to `action`.

    The existing vote is withdrawn first, then the requested one added.
    Each delta is -1, 0 or +1.
    """
    upvote_delta = 0
    downvote_delta = 0

    if existing is VoteType.UPVOTE:
        upvote_delta -= 1
    elif existing is VoteType.DOWNVOTE:
        downvote_delta -= 1

    if action is VoteAction.UPVOTE:
        upvote_delta += 1
    elif action is VoteAction.DOWNVOTE:
        downvote_delta += 1

    return upvote_delta, downvote_delta


class VoteLedger(Service):
    """Decides vote deltas and the next vote record.

    The ledger doesn't treat "same type again" specially: toggling an
    arrow off is the caller's job, expressed as a `remove` action.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
    ) -> None:
        """Initialize vote ledger.

        Args:
            vote_repository: Vote repository
            post_repository: Post repository
            comment_repository: Comment repository
        """
        self.vote_repository = vote_repository
        self.post_repository = post_repository
        self.comment_repository = comment_repository

    @staticmethod
    def parse_action(requested: VoteAction | str) -> VoteAction:
        """Validate a requested vote action.

        Raises:
            InvalidVoteType: If not upvote, downvote or remove
        """
        if isinstance(requested, VoteAction):
            return requested
        try:
            return VoteAction(requested)
        except ValueError:
            raise InvalidVoteType(requested)

    async def load_subject(
        self, subject_kind: SubjectKind, subject_id: str
    ) -> VotableModel:
        """Load the post or comment being voted on.

        Raises:
            SubjectNotFound: If it doesn't exist
        """
        subject: VotableModel | None
        if subject_kind is SubjectKind.POST:
            subject = await self.post_repository.find_by_id(PostId(subject_id))
        else:
            subject = await self.comment_repository.find_by_id(CommentId(subject_id))

        if subject is None:
            logfire.warn(
                "Vote on non-existent subject",
                subject_kind=subject_kind.value,
                subject_id=subject_id,
            )
            raise SubjectNotFound(subject_kind.value.capitalize(), subject_id)
        return subject

    async def cast_vote(
        self,
        subject_kind: SubjectKind,
        subject_id: str,
        user_id: UserId,
        requested: VoteAction | str,
        now: datetime | None = None,
    ) -> VoteOutcome:
        """Work out what a vote changes.

        Args:
            subject_kind: Post or comment
            subject_id: ID of the post or comment
            user_id: The voter
            requested: upvote, downvote or remove
            now: Timestamp for a new vote record (defaults to now)

        Returns:
            Deltas, the vote record to write (None to delete) and the
            subject as read

        Raises:
            InvalidVoteType: If `requested` is not a valid action (no reads happen)
            SubjectNotFound: If the post or comment doesn't exist
        """
        action = self.parse_action(requested)

        with logfire.span(
            "vote_ledger.cast_vote",
            subject_kind=subject_kind.value,
            subject_id=subject_id,
            user_id=str(user_id),
            action=action.value,
        ):
            existing = await self.vote_repository.find(subject_kind, subject_id, user_id)
            subject = await self.load_subject(subject_kind, subject_id)

            upvote_delta, downvote_delta = vote_deltas(
                existing.type if existing else None, action
            )

            new_vote = None
            if action.vote_type is not None:
                new_vote = Vote.cast(
                    subject_kind=subject_kind,
                    subject_id=subject_id,
                    user_id=user_id,
                    vote_type=action.vote_type,
                    created_at=now or utc_now(),
                )

            logfire.info(
                "Vote deltas computed",
                previous=existing.type.value if existing else None,
                upvote_delta=upvote_delta,
                downvote_delta=downvote_delta,
            )
            return VoteOutcome(
                subject=subject,
                upvote_delta=upvote_delta,
                downvote_delta=downvote_delta,
                new_vote=new_vote,
                previous_vote=existing,
            )
