"""Vote routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header
from pydantic import BaseModel

from memex.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
)
from memex.domain.error import DomainError
from memex.domain.service import IdentityService
from memex.domain.value import SubjectKind
from memex.interface.api.auth import require_identity
from memex.interface.error import http_error

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class VoteAPIRequest(BaseModel):
    """API request for voting."""

    vote_type: str = ""  # upvote, downvote or remove


async def _cast_vote(
    subject_kind: SubjectKind,
    subject_id: str,
    request: VoteAPIRequest,
    cast_vote_use_case: CastVoteUseCase,
    identity_service: IdentityService,
    authorization: str | None,
) -> CastVoteResponse:
    identity = await require_identity(identity_service, authorization)
    try:
        return await cast_vote_use_case.execute(
            CastVoteRequest(
                subject_kind=subject_kind,
                subject_id=subject_id,
                user_id=identity.uid,
                vote_type=request.vote_type,
            )
        )
    except DomainError as e:
        raise http_error(e) from e


@router.post("/posts/{post_id}/vote", response_model=CastVoteResponse)
async def vote_on_post(
    post_id: str,
    request: VoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    identity_service: FromDishka[IdentityService],
    authorization: str | None = Header(default=None),
) -> CastVoteResponse:
    """Upvote, downvote or clear a vote on a post.

    Requires authentication. Voting the same way twice leaves the vote
    in place; send `remove` to clear it.

    Args:
        post_id: Post ID
        request: Requested vote
        cast_vote_use_case: Cast vote use case from DI
        identity_service: Identity service for token verification (injected)
        authorization: Bearer token header

    Returns:
        New score and counters, and the caller's vote

    Raises:
        HTTPException: 400 invalid vote type, 401 unauthenticated,
            404 post not found, 500 write failed
    """
    return await _cast_vote(
        SubjectKind.POST,
        post_id,
        request,
        cast_vote_use_case,
        identity_service,
        authorization,
    )


@router.post("/comments/{comment_id}/vote", response_model=CastVoteResponse)
async def vote_on_comment(
    comment_id: str,
    request: VoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    identity_service: FromDishka[IdentityService],
    authorization: str | None = Header(default=None),
) -> CastVoteResponse:
    """Upvote, downvote or clear a vote on a comment.

    Requires authentication.

    Raises:
        HTTPException: 400 invalid vote type, 401 unauthenticated,
            404 comment not found, 500 write failed
    """
    return await _cast_vote(
        SubjectKind.COMMENT,
        comment_id,
        request,
        cast_vote_use_case,
        identity_service,
        authorization,
    )
