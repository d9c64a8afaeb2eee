"""Authentication and account routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, status
from pydantic import BaseModel

from memex.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
    GetCurrentUserUseCase,
    RegisterUserRequest,
    RegisterUserResponse,
    RegisterUserUseCase,
    UpdateProfileRequest,
    UpdateProfileResponse,
    UpdateProfileUseCase,
)
from memex.domain.error import DomainError, NotFoundError
from memex.domain.service import IdentityService
from memex.interface.api.auth import require_identity
from memex.interface.error import http_error

router = APIRouter(prefix="/auth", tags=["auth"], route_class=DishkaRoute)


class ProfileAPIRequest(BaseModel):
    """API request for registering or editing a profile."""

    display_name: str | None = None
    bio: str | None = None


class TokenUser(BaseModel):
    """Identity carried by a verified token."""

    uid: str
    email: str | None
    name: str | None


class VerifyResponse(BaseModel):
    """Token verification response."""

    valid: bool
    user: TokenUser


@router.post(
    "/register",
    response_model=RegisterUserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    request: ProfileAPIRequest,
    register_use_case: FromDishka[RegisterUserUseCase],
    identity_service: FromDishka[IdentityService],
    authorization: str | None = Header(default=None),
) -> RegisterUserResponse:
    """Create the caller's profile after signing in with Firebase.

    Raises:
        HTTPException: 401 unauthenticated, 409 profile already exists
    """
    identity = await require_identity(identity_service, authorization)
    try:
        return await register_use_case.execute(
            RegisterUserRequest(
                identity=identity,
                display_name=request.display_name,
                bio=request.bio,
            )
        )
    except DomainError as e:
        raise http_error(e) from e


@router.get("/profile", response_model=GetCurrentUserResponse)
async def get_profile(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    identity_service: FromDishka[IdentityService],
    authorization: str | None = Header(default=None),
) -> GetCurrentUserResponse:
    """Get the caller's own profile.

    Raises:
        HTTPException: 401 unauthenticated, 404 not registered yet
    """
    identity = await require_identity(identity_service, authorization)
    try:
        return await get_current_user_use_case.execute(
            GetCurrentUserRequest(user_id=identity.uid)
        )
    except NotFoundError as e:
        raise http_error(e, detail="User profile not found") from e


@router.put("/profile", response_model=UpdateProfileResponse)
async def update_profile(
    request: ProfileAPIRequest,
    update_profile_use_case: FromDishka[UpdateProfileUseCase],
    identity_service: FromDishka[IdentityService],
    authorization: str | None = Header(default=None),
) -> UpdateProfileResponse:
    """Update the caller's display name and/or bio.

    Raises:
        HTTPException: 400 invalid values, 401 unauthenticated,
            404 not registered yet
    """
    identity = await require_identity(identity_service, authorization)
    try:
        return await update_profile_use_case.execute(
            UpdateProfileRequest(
                user_id=identity.uid,
                display_name=request.display_name,
                bio=request.bio,
            )
        )
    except NotFoundError as e:
        raise http_error(e, detail="User profile not found") from e
    except DomainError as e:
        raise http_error(e) from e


@router.post("/verify", response_model=VerifyResponse)
async def verify(
    identity_service: FromDishka[IdentityService],
    authorization: str | None = Header(default=None),
) -> VerifyResponse:
    """Check the caller's token and echo its identity.

    Raises:
        HTTPException: 401 for a missing or invalid token
    """
    identity = await require_identity(identity_service, authorization)
    return VerifyResponse(
        valid=True,
        user=TokenUser(uid=identity.uid, email=identity.email, name=identity.name),
    )
