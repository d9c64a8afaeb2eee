"""List communities use case."""

from pydantic import BaseModel, Field

from memex.application.usecase.common import (
    MAX_PAGE_SIZE,
    CommunityView,
    PageRequest,
    Pagination,
    page_offset,
)
from memex.domain.service import CommunityService


class ListCommunitiesRequest(PageRequest):
    """List communities request."""

    limit: int = Field(default=20, ge=1, le=MAX_PAGE_SIZE)
    search: str | None = None  # Name prefix


class ListCommunitiesResponse(BaseModel):
    """List communities response."""

    communities: list[CommunityView]
    pagination: Pagination


class ListCommunitiesUseCase:
    """Use case for browsing active communities."""

    def __init__(self, community_service: CommunityService) -> None:
        """Initialize list communities use case.

        Args:
            community_service: Community domain service
        """
        self.community_service = community_service

    async def execute(self, request: ListCommunitiesRequest) -> ListCommunitiesResponse:
        """Execute list communities flow."""
        communities = await self.community_service.list_communities(
            search=request.search,
            limit=request.limit,
            offset=page_offset(request.page, request.limit),
        )
        return ListCommunitiesResponse(
            communities=[CommunityView.from_community(c) for c in communities],
            pagination=Pagination.for_page(
                request.page, request.limit, len(communities)
            ),
        )
