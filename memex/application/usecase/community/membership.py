"""Join and leave community use cases."""

from pydantic import BaseModel

from memex.domain.service import CommunityService
from memex.domain.value import CommunityId, UserId


class MembershipRequest(BaseModel):
    """Join or leave request."""

    community_id: str
    user_id: str  # User ID from authenticated user


class MembershipResponse(BaseModel):
    """Join or leave response."""

    message: str


class JoinCommunityUseCase:
    """Use case for joining a community."""

    def __init__(self, community_service: CommunityService) -> None:
        """Initialize join community use case.

        Args:
            community_service: Community domain service
        """
        self.community_service = community_service

    async def execute(self, request: MembershipRequest) -> MembershipResponse:
        """Execute join flow.

        Raises:
            NotFoundError: If the community doesn't exist
            ConflictError: If the user is already a member
        """
        await self.community_service.join_community(
            CommunityId(request.community_id), UserId(request.user_id)
        )
        return MembershipResponse(message="Successfully joined community")


class LeaveCommunityUseCase:
    """Use case for leaving a community."""

    def __init__(self, community_service: CommunityService) -> None:
        """Initialize leave community use case.

        Args:
            community_service: Community domain service
        """
        self.community_service = community_service

    async def execute(self, request: MembershipRequest) -> MembershipResponse:
        """Execute leave flow.

        Raises:
            NotFoundError: If the user is not a member
        """
        await self.community_service.leave_community(
            CommunityId(request.community_id), UserId(request.user_id)
        )
        return MembershipResponse(message="Successfully left community")
