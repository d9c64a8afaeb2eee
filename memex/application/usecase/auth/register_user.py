"""Register user use case."""

from pydantic import BaseModel

from memex.application.usecase.common import AccountProfile
from memex.domain.service import UserService
from memex.domain.value import VerifiedIdentity


class RegisterUserRequest(BaseModel):
    """Register user request."""

    identity: VerifiedIdentity  # Claims of the caller's verified token
    display_name: str | None = None
    bio: str | None = None


class RegisterUserResponse(BaseModel):
    """Register user response."""

    message: str = "User profile created successfully"
    user: AccountProfile


class RegisterUserUseCase:
    """Use case for creating the caller's profile after sign-in."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize register user use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: RegisterUserRequest) -> RegisterUserResponse:
        """Execute register flow.

        Raises:
            ConflictError: If the profile already exists
            ValidationError: If display name or bio are invalid
        """
        user = await self.user_service.register_user(
            request.identity,
            display_name=request.display_name,
            bio=request.bio,
        )
        return RegisterUserResponse(user=AccountProfile.from_user(user))
