"""Post routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query, status
from pydantic import BaseModel, Field

from memex.application.usecase.common import MAX_PAGE_SIZE
from memex.application.usecase.post import (
    CreatePostRequest,
    CreatePostResponse,
    CreatePostUseCase,
    DeletePostRequest,
    DeletePostResponse,
    DeletePostUseCase,
    GetPostRequest,
    GetPostResponse,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
)
from memex.domain.error import DomainError
from memex.domain.repository import PostSortOrder
from memex.domain.service import IdentityService
from memex.domain.value import MediaType
from memex.interface.api.auth import optional_identity, require_identity
from memex.interface.error import http_error

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post."""

    title: str = ""
    community_id: str = ""
    content: str = ""
    tags: list[str] = Field(default_factory=list)
    media_url: str | None = None  # From POST /media
    media_type: MediaType | None = None


@router.get("", response_model=ListPostsResponse)
async def list_posts(
    list_posts_use_case: FromDishka[ListPostsUseCase],
    identity_service: FromDishka[IdentityService],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=MAX_PAGE_SIZE),
    sort: PostSortOrder = Query(default=PostSortOrder.HOT),
    community: str | None = Query(default=None),
    authorization: str | None = Header(default=None),
) -> ListPostsResponse:
    """List posts with sorting and pagination.

    Public endpoint. Authenticated callers also get their own vote on
    each post.

    Args:
        list_posts_use_case: List posts use case from DI
        identity_service: Identity service for token verification (injected)
        page: 1-based page number
        limit: Posts per page
        sort: hot, new or top
        community: Optional community ID filter
        authorization: Optional bearer token header

    Returns:
        A page of posts with author summaries
    """
    identity = await optional_identity(identity_service, authorization)
    return await list_posts_use_case.execute(
        ListPostsRequest(
            page=page,
            limit=limit,
            sort=sort,
            community_id=community,
            user_id=identity.uid if identity else None,
        )
    )


@router.get("/{post_id}", response_model=GetPostResponse)
async def get_post(
    post_id: str,
    get_post_use_case: FromDishka[GetPostUseCase],
    identity_service: FromDishka[IdentityService],
    authorization: str | None = Header(default=None),
) -> GetPostResponse:
    """Get a single post.

    Raises:
        HTTPException: 404 if the post doesn't exist
    """
    identity = await optional_identity(identity_service, authorization)
    try:
        return await get_post_use_case.execute(
            GetPostRequest(post_id=post_id, user_id=identity.uid if identity else None)
        )
    except DomainError as e:
        raise http_error(e, detail="Post not found") from e


@router.post("", response_model=CreatePostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    identity_service: FromDishka[IdentityService],
    authorization: str | None = Header(default=None),
) -> CreatePostResponse:
    """Create a new post.

    Requires authentication. The author's implicit upvote, their karma
    and the community's post count are written together with the post.

    Raises:
        HTTPException: 400 missing title or community, 401 unauthenticated,
            403 banned author,
            404 unknown community or unregistered author, 500 write failed
    """
    identity = await require_identity(identity_service, authorization)
    try:
        return await create_post_use_case.execute(
            CreatePostRequest(
                title=request.title,
                community_id=request.community_id,
                content=request.content,
                tags=request.tags,
                media_url=request.media_url,
                media_type=request.media_type,
                author_id=identity.uid,
            )
        )
    except DomainError as e:
        logfire.warn("Post creation failed", error=str(e))
        raise http_error(e) from e


@router.delete("/{post_id}", response_model=DeletePostResponse)
async def delete_post(
    post_id: str,
    delete_post_use_case: FromDishka[DeletePostUseCase],
    identity_service: FromDishka[IdentityService],
    authorization: str | None = Header(default=None),
) -> DeletePostResponse:
    """Soft-delete a post.

    Allowed for the post's author and for admins.

    Raises:
        HTTPException: 401 unauthenticated, 403 not author or admin,
            404 post not found
    """
    identity = await require_identity(identity_service, authorization)
    try:
        return await delete_post_use_case.execute(
            DeletePostRequest(
                post_id=post_id, user_id=identity.uid, is_admin=identity.is_admin
            )
        )
    except DomainError as e:
        raise http_error(e) from e
