"""Get community use case."""

from pydantic import BaseModel

from memex.application.usecase.common import CommunityView
from memex.domain.service import CommunityService


class GetCommunityRequest(BaseModel):
    """Get community request."""

    name: str


class GetCommunityResponse(BaseModel):
    """Get community response."""

    community: CommunityView


class GetCommunityUseCase:
    """Use case for looking up a community by name."""

    def __init__(self, community_service: CommunityService) -> None:
        """Initialize get community use case.

        Args:
            community_service: Community domain service
        """
        self.community_service = community_service

    async def execute(self, request: GetCommunityRequest) -> GetCommunityResponse:
        """Execute get community flow.

        Raises:
            NotFoundError: If no community has that name
        """
        community = await self.community_service.get_community_by_name(request.name)
        return GetCommunityResponse(community=CommunityView.from_community(community))
