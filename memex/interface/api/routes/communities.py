"""Community routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query, status
from pydantic import BaseModel, Field

from memex.application.usecase.common import MAX_PAGE_SIZE
from memex.application.usecase.community import (
    CreateCommunityRequest,
    CreateCommunityResponse,
    CreateCommunityUseCase,
    GetCommunityRequest,
    GetCommunityResponse,
    GetCommunityUseCase,
    GetJoinedCommunitiesRequest,
    GetJoinedCommunitiesResponse,
    GetJoinedCommunitiesUseCase,
    JoinCommunityUseCase,
    LeaveCommunityUseCase,
    ListCommunitiesRequest,
    ListCommunitiesResponse,
    ListCommunitiesUseCase,
    MembershipRequest,
    MembershipResponse,
)
from memex.domain.error import DomainError
from memex.domain.service import IdentityService
from memex.interface.api.auth import require_identity
from memex.interface.error import http_error

router = APIRouter(prefix="/communities", tags=["communities"], route_class=DishkaRoute)


class CreateCommunityAPIRequest(BaseModel):
    """API request for creating a community."""

    name: str = ""
    description: str = ""
    display_name: str | None = None
    rules: list[str] = Field(default_factory=list)
    is_nsfw: bool = False


@router.get("", response_model=ListCommunitiesResponse)
async def list_communities(
    list_communities_use_case: FromDishka[ListCommunitiesUseCase],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=MAX_PAGE_SIZE),
    search: str | None = Query(default=None),
) -> ListCommunitiesResponse:
    """List active communities, largest first.

    Args:
        list_communities_use_case: List communities use case from DI
        page: 1-based page number
        limit: Communities per page
        search: Optional name prefix

    Returns:
        A page of communities
    """
    return await list_communities_use_case.execute(
        ListCommunitiesRequest(page=page, limit=limit, search=search)
    )


@router.get("/user/joined", response_model=GetJoinedCommunitiesResponse)
async def get_joined_communities(
    get_joined_communities_use_case: FromDishka[GetJoinedCommunitiesUseCase],
    identity_service: FromDishka[IdentityService],
    authorization: str | None = Header(default=None),
) -> GetJoinedCommunitiesResponse:
    """Communities the caller belongs to.

    Raises:
        HTTPException: 401 unauthenticated, 404 caller has no profile
    """
    identity = await require_identity(identity_service, authorization)
    try:
        return await get_joined_communities_use_case.execute(
            GetJoinedCommunitiesRequest(user_id=identity.uid)
        )
    except DomainError as e:
        raise http_error(e) from e


@router.get("/{name}", response_model=GetCommunityResponse)
async def get_community(
    name: str,
    get_community_use_case: FromDishka[GetCommunityUseCase],
) -> GetCommunityResponse:
    """Look up a community by name (case-insensitive).

    Raises:
        HTTPException: 404 if no community has that name
    """
    try:
        return await get_community_use_case.execute(GetCommunityRequest(name=name))
    except DomainError as e:
        raise http_error(e, detail="Community not found") from e


@router.post(
    "", response_model=CreateCommunityResponse, status_code=status.HTTP_201_CREATED
)
async def create_community(
    request: CreateCommunityAPIRequest,
    create_community_use_case: FromDishka[CreateCommunityUseCase],
    identity_service: FromDishka[IdentityService],
    authorization: str | None = Header(default=None),
) -> CreateCommunityResponse:
    """Create a community. The creator becomes its first moderator.

    Raises:
        HTTPException: 400 invalid name or missing description,
            401 unauthenticated, 409 name taken, 500 write failed
    """
    identity = await require_identity(identity_service, authorization)
    try:
        return await create_community_use_case.execute(
            CreateCommunityRequest(
                name=request.name,
                description=request.description,
                display_name=request.display_name,
                rules=request.rules,
                is_nsfw=request.is_nsfw,
                creator_id=identity.uid,
            )
        )
    except DomainError as e:
        raise http_error(e) from e


@router.post("/{community_id}/join", response_model=MembershipResponse)
async def join_community(
    community_id: str,
    join_community_use_case: FromDishka[JoinCommunityUseCase],
    identity_service: FromDishka[IdentityService],
    authorization: str | None = Header(default=None),
) -> MembershipResponse:
    """Join a community.

    Raises:
        HTTPException: 401 unauthenticated, 404 community missing,
            409 already a member
    """
    identity = await require_identity(identity_service, authorization)
    try:
        return await join_community_use_case.execute(
            MembershipRequest(community_id=community_id, user_id=identity.uid)
        )
    except DomainError as e:
        raise http_error(e) from e


@router.post("/{community_id}/leave", response_model=MembershipResponse)
async def leave_community(
    community_id: str,
    leave_community_use_case: FromDishka[LeaveCommunityUseCase],
    identity_service: FromDishka[IdentityService],
    authorization: str | None = Header(default=None),
) -> MembershipResponse:
    """Leave a community.

    Raises:
        HTTPException: 401 unauthenticated, 404 not a member
    """
    identity = await require_identity(identity_service, authorization)
    try:
        return await leave_community_use_case.execute(
            MembershipRequest(community_id=community_id, user_id=identity.uid)
        )
    except DomainError as e:
        raise http_error(e, detail="Not a member of this community") from e
