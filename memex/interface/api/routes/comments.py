"""Comment routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query, status
from pydantic import BaseModel

from memex.application.usecase.common import MAX_PAGE_SIZE
from memex.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)
from memex.domain.error import DomainError
from memex.domain.service import IdentityService
from memex.interface.api.auth import optional_identity, require_identity
from memex.interface.error import http_error

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    post_id: str = ""
    content: str = ""
    parent_id: str | None = None


class UpdateCommentAPIRequest(BaseModel):
    """API request for editing a comment."""

    content: str = ""


@router.get("/post/{post_id}", response_model=GetCommentsResponse)
async def get_comments(
    post_id: str,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    identity_service: FromDishka[IdentityService],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=MAX_PAGE_SIZE),
    authorization: str | None = Header(default=None),
) -> GetCommentsResponse:
    """Get a page of a post's comments as a reply tree.

    Public endpoint.

    Raises:
        HTTPException: 404 if the post doesn't exist
    """
    identity = await optional_identity(identity_service, authorization)
    try:
        return await get_comments_use_case.execute(
            GetCommentsRequest(
                post_id=post_id,
                page=page,
                limit=limit,
                user_id=identity.uid if identity else None,
            )
        )
    except DomainError as e:
        raise http_error(e) from e


@router.post(
    "", response_model=CreateCommentResponse, status_code=status.HTTP_201_CREATED
)
async def create_comment(
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    identity_service: FromDishka[IdentityService],
    authorization: str | None = Header(default=None),
) -> CreateCommentResponse:
    """Comment on a post or reply to a comment.

    Requires authentication.

    Raises:
        HTTPException: 400 empty content, 401 unauthenticated, 403 banned author,
            404 post or parent missing, 500 write failed
    """
    identity = await require_identity(identity_service, authorization)
    try:
        return await create_comment_use_case.execute(
            CreateCommentRequest(
                post_id=request.post_id,
                content=request.content,
                parent_id=request.parent_id,
                author_id=identity.uid,
            )
        )
    except DomainError as e:
        logfire.warn("Comment creation failed", error=str(e))
        raise http_error(e) from e


@router.put("/{comment_id}", response_model=UpdateCommentResponse)
async def update_comment(
    comment_id: str,
    request: UpdateCommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    identity_service: FromDishka[IdentityService],
    authorization: str | None = Header(default=None),
) -> UpdateCommentResponse:
    """Edit a comment's text. Only the author may edit.

    Raises:
        HTTPException: 400 empty content or deleted comment,
            401 unauthenticated, 403 not the author, 404 comment missing
    """
    identity = await require_identity(identity_service, authorization)
    try:
        return await update_comment_use_case.execute(
            UpdateCommentRequest(
                comment_id=comment_id, content=request.content, user_id=identity.uid
            )
        )
    except DomainError as e:
        raise http_error(e) from e


@router.delete("/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    identity_service: FromDishka[IdentityService],
    authorization: str | None = Header(default=None),
) -> DeleteCommentResponse:
    """Soft-delete a comment. Allowed for the author and admins.

    Raises:
        HTTPException: 401 unauthenticated, 403 not author or admin,
            404 comment missing
    """
    identity = await require_identity(identity_service, authorization)
    try:
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(
                comment_id=comment_id, user_id=identity.uid, is_admin=identity.is_admin
            )
        )
    except DomainError as e:
        raise http_error(e) from e
