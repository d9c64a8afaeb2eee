"""Update profile use case."""

from pydantic import BaseModel

from memex.domain.service import UserService
from memex.domain.value import UserId


class UpdateProfileRequest(BaseModel):
    """Update profile request.

    Fields left as None are not changed.
    """

    user_id: str  # User ID from authenticated user
    display_name: str | None = None
    bio: str | None = None


class UpdateProfileResponse(BaseModel):
    """Update profile response."""

    message: str = "Profile updated successfully"


class UpdateProfileUseCase:
    """Use case for editing the caller's display name and bio."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize update profile use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: UpdateProfileRequest) -> UpdateProfileResponse:
        """Execute update profile flow.

        Raises:
            NotFoundError: If the caller has no profile
            ValidationError: If a value is blank or too long
        """
        await self.user_service.update_profile(
            UserId(request.user_id),
            display_name=request.display_name,
            bio=request.bio,
        )
        return UpdateProfileResponse()
