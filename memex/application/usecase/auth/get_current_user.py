"""Get current user use case."""

from pydantic import BaseModel

from memex.application.usecase.common import AccountProfile
from memex.domain.service import UserService
from memex.domain.value import UserId


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    user_id: str  # User ID from authenticated user


class GetCurrentUserResponse(BaseModel):
    """Get current user response."""

    user: AccountProfile


class GetCurrentUserUseCase:
    """Use case for reading the caller's own profile."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize get current user use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Execute get current user flow.

        Raises:
            NotFoundError: If the caller hasn't registered a profile
        """
        user = await self.user_service.get_by_id(UserId(request.user_id))
        return GetCurrentUserResponse(user=AccountProfile.from_user(user))
