"""Get user profile use case."""

from pydantic import BaseModel

from memex.application.usecase.common import PublicProfile
from memex.domain.service import UserService
from memex.domain.value import UserId


class GetUserProfileRequest(BaseModel):
    """Get user profile request."""

    user_id: str


class GetUserProfileResponse(BaseModel):
    """Get user profile response."""

    user: PublicProfile


class GetUserProfileUseCase:
    """Use case for getting a user's public profile."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize get user profile use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: GetUserProfileRequest) -> GetUserProfileResponse:
        """Execute get user profile flow.

        Email, admin and ban flags are left out of the public profile.

        Raises:
            NotFoundError: If the user doesn't exist
        """
        user = await self.user_service.get_by_id(UserId(request.user_id))
        return GetUserProfileResponse(user=PublicProfile.from_user(user))
