"""Public user routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query

from memex.application.usecase.common import MAX_PAGE_SIZE
from memex.application.usecase.user import (
    GetUserCommentsRequest,
    GetUserCommentsResponse,
    GetUserCommentsUseCase,
    GetUserPostsRequest,
    GetUserPostsResponse,
    GetUserPostsUseCase,
    GetUserProfileRequest,
    GetUserProfileResponse,
    GetUserProfileUseCase,
    SearchUsersRequest,
    SearchUsersResponse,
    SearchUsersUseCase,
)
from memex.domain.error import NotFoundError, ValidationError
from memex.interface.error import http_error

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


@router.get("", response_model=SearchUsersResponse)
async def search_users(
    search_users_use_case: FromDishka[SearchUsersUseCase],
    q: str = Query(default=""),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=MAX_PAGE_SIZE),
) -> SearchUsersResponse:
    """Find users by display name prefix. Banned users are not listed.

    Raises:
        HTTPException: 400 if `q` is shorter than two characters
    """
    try:
        return await search_users_use_case.execute(
            SearchUsersRequest(query=q, page=page, limit=limit)
        )
    except ValidationError as e:
        raise http_error(e) from e


@router.get("/{uid}", response_model=GetUserProfileResponse)
async def get_user_profile(
    uid: str,
    get_user_profile_use_case: FromDishka[GetUserProfileUseCase],
) -> GetUserProfileResponse:
    """Get a user's public profile.

    Raises:
        HTTPException: 404 if the user doesn't exist
    """
    try:
        return await get_user_profile_use_case.execute(GetUserProfileRequest(user_id=uid))
    except NotFoundError as e:
        raise http_error(e, detail="User not found") from e


@router.get("/{uid}/posts", response_model=GetUserPostsResponse)
async def get_user_posts(
    uid: str,
    get_user_posts_use_case: FromDishka[GetUserPostsUseCase],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=MAX_PAGE_SIZE),
) -> GetUserPostsResponse:
    """A user's posts, newest first."""
    return await get_user_posts_use_case.execute(
        GetUserPostsRequest(author_id=uid, page=page, limit=limit)
    )


@router.get("/{uid}/comments", response_model=GetUserCommentsResponse)
async def get_user_comments(
    uid: str,
    get_user_comments_use_case: FromDishka[GetUserCommentsUseCase],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=MAX_PAGE_SIZE),
) -> GetUserCommentsResponse:
    """A user's comments, newest first, each with its post's title."""
    return await get_user_comments_use_case.execute(
        GetUserCommentsRequest(author_id=uid, page=page, limit=limit)
    )
