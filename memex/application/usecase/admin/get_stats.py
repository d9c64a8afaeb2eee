"""Site statistics use case."""

from datetime import datetime

from pydantic import BaseModel

from memex.domain.service import ModerationService


class StatsView(BaseModel):
    """Site-wide counts."""

    total_users: int
    total_posts: int
    total_comments: int
    total_communities: int
    generated_at: datetime


class GetStatsResponse(BaseModel):
    """Get stats response."""

    stats: StatsView


class GetStatsUseCase:
    """Use case for the admin dashboard counts."""

    def __init__(self, moderation_service: ModerationService) -> None:
        self.moderation_service = moderation_service

    async def execute(self) -> GetStatsResponse:
        """Count users, live posts and comments, and active communities."""
        stats = await self.moderation_service.stats()
        return GetStatsResponse(
            stats=StatsView(
                total_users=stats.total_users,
                total_posts=stats.total_posts,
                total_comments=stats.total_comments,
                total_communities=stats.total_communities,
                generated_at=stats.generated_at,
            )
        )
