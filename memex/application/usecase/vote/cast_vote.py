"""Cast vote use case."""

import logfire
from pydantic import BaseModel

from memex.domain.service import VoteService
from memex.domain.value import SubjectKind, UserId, VoteType


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    subject_kind: SubjectKind
    subject_id: str
    user_id: str  # User ID from authenticated user
    vote_type: str  # Validated by the vote ledger


class CastVoteResponse(BaseModel):
    """Cast vote response."""

    message: str = "Vote recorded successfully"
    new_score: int
    upvotes: int
    downvotes: int
    user_vote: VoteType | None


class CastVoteUseCase:
    """Use case for upvoting, downvoting or clearing a vote."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute vote flow.

        Args:
            request: Cast vote request

        Returns:
            Counters after the vote and the user's current vote

        Raises:
            InvalidVoteType: If vote_type is not upvote, downvote or remove
            SubjectNotFound: If the post or comment doesn't exist
            BatchCommitFailed: If the vote could not be stored
        """
        with logfire.span(
            "cast_vote.execute",
            subject_kind=request.subject_kind.value,
            subject_id=request.subject_id,
        ):
            result = await self.vote_service.vote(
                request.subject_kind,
                request.subject_id,
                UserId(request.user_id),
                request.vote_type,
            )
            return CastVoteResponse(
                new_score=result.new_score,
                upvotes=result.upvotes,
                downvotes=result.downvotes,
                user_vote=result.user_vote,
            )
