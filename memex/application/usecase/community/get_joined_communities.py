"""Get joined communities use case."""

from pydantic import BaseModel

from memex.application.usecase.common import CommunityView
from memex.domain.service import CommunityService
from memex.domain.value import UserId


class GetJoinedCommunitiesRequest(BaseModel):
    """Get joined communities request."""

    user_id: str  # User ID from authenticated user


class GetJoinedCommunitiesResponse(BaseModel):
    """Get joined communities response."""

    communities: list[CommunityView]


class GetJoinedCommunitiesUseCase:
    """Use case for listing the communities a user belongs to."""

    def __init__(self, community_service: CommunityService) -> None:
        """Initialize get joined communities use case.

        Args:
            community_service: Community domain service
        """
        self.community_service = community_service

    async def execute(
        self, request: GetJoinedCommunitiesRequest
    ) -> GetJoinedCommunitiesResponse:
        """Execute get joined communities flow.

        Raises:
            NotFoundError: If the user has no profile
        """
        communities = await self.community_service.get_joined_communities(
            UserId(request.user_id)
        )
        return GetJoinedCommunitiesResponse(
            communities=[CommunityView.from_community(c) for c in communities]
        )
