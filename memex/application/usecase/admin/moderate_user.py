"""Ban, unban and admin-rights use cases."""

from pydantic import BaseModel

from memex.application.usecase.common import ModeratedUserView
from memex.domain.service import ModerationService
from memex.domain.value import UserId


class ModerateUserRequest(BaseModel):
    """Moderation action on one user."""

    admin_id: str  # Already checked by ModerationService.ensure_admin
    user_id: str


class BanUserRequest(ModerateUserRequest):
    """Ban request. Without a duration the ban is permanent."""

    reason: str | None = None
    duration_days: int | None = None


class SetAdminRequest(ModerateUserRequest):
    """Grant (True) or revoke (False) admin rights."""

    is_admin: bool


class ModerateUserResponse(BaseModel):
    """Moderation response."""

    message: str
    user: ModeratedUserView


class BanUserUseCase:
    """Use case for banning a user."""

    def __init__(self, moderation_service: ModerationService) -> None:
        """Initialize ban user use case.

        Args:
            moderation_service: Moderation domain service
        """
        self.moderation_service = moderation_service

    async def execute(self, request: BanUserRequest) -> ModerateUserResponse:
        """Execute ban flow.

        Raises:
            ValidationError: If the admin targets themselves
            NotFoundError: If the user doesn't exist
        """
        user = await self.moderation_service.ban_user(
            UserId(request.admin_id),
            UserId(request.user_id),
            reason=request.reason,
            duration_days=request.duration_days,
        )
        return ModerateUserResponse(
            message="User banned successfully", user=ModeratedUserView.from_user(user)
        )


class UnbanUserUseCase:
    """Use case for lifting a ban."""

    def __init__(self, moderation_service: ModerationService) -> None:
        self.moderation_service = moderation_service

    async def execute(self, request: ModerateUserRequest) -> ModerateUserResponse:
        """Execute unban flow.

        Raises:
            NotFoundError: If the user doesn't exist
        """
        user = await self.moderation_service.unban_user(
            UserId(request.admin_id), UserId(request.user_id)
        )
        return ModerateUserResponse(
            message="User unbanned successfully", user=ModeratedUserView.from_user(user)
        )


class SetAdminUseCase:
    """Use case for granting or revoking admin rights."""

    def __init__(self, moderation_service: ModerationService) -> None:
        self.moderation_service = moderation_service

    async def execute(self, request: SetAdminRequest) -> ModerateUserResponse:
        """Execute grant or revoke flow.

        Raises:
            ValidationError: If an admin revokes their own rights
            NotFoundError: If the user doesn't exist
        """
        user = await self.moderation_service.set_admin(
            UserId(request.admin_id), UserId(request.user_id), request.is_admin
        )
        message = (
            "User promoted to admin successfully"
            if request.is_admin
            else "Admin privileges removed successfully"
        )
        return ModerateUserResponse(message=message, user=ModeratedUserView.from_user(user))
