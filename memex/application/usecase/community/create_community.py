"""Create community use case."""

from pydantic import BaseModel, Field

from memex.domain.service import CommunityService
from memex.domain.value import UserId


class CreateCommunityRequest(BaseModel):
    """Create community request."""

    name: str = ""
    description: str = ""
    display_name: str | None = None
    rules: list[str] = Field(default_factory=list)
    is_nsfw: bool = False
    creator_id: str  # User ID from authenticated user


class CreateCommunityResponse(BaseModel):
    """Create community response."""

    message: str = "Community created successfully"
    community_id: str
    name: str


class CreateCommunityUseCase:
    """Use case for creating a community."""

    def __init__(self, community_service: CommunityService) -> None:
        """Initialize create community use case.

        Args:
            community_service: Community domain service
        """
        self.community_service = community_service

    async def execute(self, request: CreateCommunityRequest) -> CreateCommunityResponse:
        """Execute create community flow.

        Raises:
            ValidationError: If name or description is missing or the name is malformed
            ConflictError: If the name is already taken
        """
        community = await self.community_service.create_community(
            creator_id=UserId(request.creator_id),
            name=request.name,
            description=request.description,
            display_name=request.display_name,
            rules=request.rules,
            is_nsfw=request.is_nsfw,
        )
        return CreateCommunityResponse(
            community_id=community.id, name=str(community.name)
        )
