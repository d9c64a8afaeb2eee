"""Admin moderation routes.

Every route requires an admin: either the token's admin claim or the
admin flag on the caller's profile.
"""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query
from pydantic import BaseModel

from memex.application.usecase.admin import (
    BanUserRequest,
    BanUserUseCase,
    FeaturePostRequest,
    FeaturePostResponse,
    FeaturePostUseCase,
    GetStatsResponse,
    GetStatsUseCase,
    ListUsersRequest,
    ListUsersResponse,
    ListUsersUseCase,
    ModerateUserRequest,
    ModerateUserResponse,
    SetAdminRequest,
    SetAdminUseCase,
    UnbanUserUseCase,
)
from memex.application.usecase.common import MAX_PAGE_SIZE
from memex.domain.error import DomainError
from memex.domain.service import IdentityService, ModerationService
from memex.interface.api.auth import require_admin
from memex.interface.error import http_error

router = APIRouter(prefix="/admin", tags=["admin"], route_class=DishkaRoute)


class BanUserAPIRequest(BaseModel):
    """API request for banning a user."""

    reason: str | None = None
    duration_days: int | None = None  # Omit for a permanent ban


@router.get("/stats", response_model=GetStatsResponse)
async def get_stats(
    get_stats_use_case: FromDishka[GetStatsUseCase],
    identity_service: FromDishka[IdentityService],
    moderation_service: FromDishka[ModerationService],
    authorization: str | None = Header(default=None),
) -> GetStatsResponse:
    """Site-wide counts of users, posts, comments and communities."""
    await require_admin(identity_service, moderation_service, authorization)
    return await get_stats_use_case.execute()


@router.get("/users", response_model=ListUsersResponse)
async def list_users(
    list_users_use_case: FromDishka[ListUsersUseCase],
    identity_service: FromDishka[IdentityService],
    moderation_service: FromDishka[ModerationService],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=MAX_PAGE_SIZE),
    search: str | None = Query(default=None),
    banned: str = Query(default="all", pattern="^(all|true|false)$"),
    authorization: str | None = Header(default=None),
) -> ListUsersResponse:
    """Users newest first, filtered by name or email and ban status."""
    await require_admin(identity_service, moderation_service, authorization)
    return await list_users_use_case.execute(
        ListUsersRequest(page=page, limit=limit, search=search, banned=banned)
    )


@router.post("/users/{uid}/ban", response_model=ModerateUserResponse)
async def ban_user(
    uid: str,
    request: BanUserAPIRequest,
    ban_user_use_case: FromDishka[BanUserUseCase],
    identity_service: FromDishka[IdentityService],
    moderation_service: FromDishka[ModerationService],
    authorization: str | None = Header(default=None),
) -> ModerateUserResponse:
    """Ban a user, permanently or for `duration_days`.

    Banned users can still read but cannot post, comment or vote.

    Raises:
        HTTPException: 400 self-ban or bad duration, 403 not admin,
            404 unknown user
    """
    admin_id = await require_admin(identity_service, moderation_service, authorization)
    try:
        return await ban_user_use_case.execute(
            BanUserRequest(
                admin_id=admin_id,
                user_id=uid,
                reason=request.reason,
                duration_days=request.duration_days,
            )
        )
    except DomainError as e:
        logfire.warn("Ban failed", user_id=uid, error=str(e))
        raise http_error(e) from e


@router.post("/users/{uid}/unban", response_model=ModerateUserResponse)
async def unban_user(
    uid: str,
    unban_user_use_case: FromDishka[UnbanUserUseCase],
    identity_service: FromDishka[IdentityService],
    moderation_service: FromDishka[ModerationService],
    authorization: str | None = Header(default=None),
) -> ModerateUserResponse:
    """Lift a user's ban."""
    admin_id = await require_admin(identity_service, moderation_service, authorization)
    try:
        return await unban_user_use_case.execute(
            ModerateUserRequest(admin_id=admin_id, user_id=uid)
        )
    except DomainError as e:
        raise http_error(e) from e


@router.post("/users/{uid}/make-admin", response_model=ModerateUserResponse)
async def make_admin(
    uid: str,
    set_admin_use_case: FromDishka[SetAdminUseCase],
    identity_service: FromDishka[IdentityService],
    moderation_service: FromDishka[ModerationService],
    authorization: str | None = Header(default=None),
) -> ModerateUserResponse:
    """Grant admin rights."""
    admin_id = await require_admin(identity_service, moderation_service, authorization)
    try:
        return await set_admin_use_case.execute(
            SetAdminRequest(admin_id=admin_id, user_id=uid, is_admin=True)
        )
    except DomainError as e:
        raise http_error(e) from e


@router.post("/users/{uid}/remove-admin", response_model=ModerateUserResponse)
async def remove_admin(
    uid: str,
    set_admin_use_case: FromDishka[SetAdminUseCase],
    identity_service: FromDishka[IdentityService],
    moderation_service: FromDishka[ModerationService],
    authorization: str | None = Header(default=None),
) -> ModerateUserResponse:
    """Revoke admin rights. Admins cannot revoke their own."""
    admin_id = await require_admin(identity_service, moderation_service, authorization)
    try:
        return await set_admin_use_case.execute(
            SetAdminRequest(admin_id=admin_id, user_id=uid, is_admin=False)
        )
    except DomainError as e:
        raise http_error(e) from e


@router.post("/posts/{post_id}/feature", response_model=FeaturePostResponse)
async def feature_post(
    post_id: str,
    feature_post_use_case: FromDishka[FeaturePostUseCase],
    identity_service: FromDishka[IdentityService],
    moderation_service: FromDishka[ModerationService],
    authorization: str | None = Header(default=None),
) -> FeaturePostResponse:
    """Mark a post as featured."""
    await require_admin(identity_service, moderation_service, authorization)
    try:
        return await feature_post_use_case.execute(
            FeaturePostRequest(post_id=post_id, featured=True)
        )
    except DomainError as e:
        raise http_error(e) from e


@router.post("/posts/{post_id}/unfeature", response_model=FeaturePostResponse)
async def unfeature_post(
    post_id: str,
    feature_post_use_case: FromDishka[FeaturePostUseCase],
    identity_service: FromDishka[IdentityService],
    moderation_service: FromDishka[ModerationService],
    authorization: str | None = Header(default=None),
) -> FeaturePostResponse:
    """Remove a post's featured mark."""
    await require_admin(identity_service, moderation_service, authorization)
    try:
        return await feature_post_use_case.execute(
            FeaturePostRequest(post_id=post_id, featured=False)
        )
    except DomainError as e:
        raise http_error(e) from e
