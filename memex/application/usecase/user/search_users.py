"""Search users use case."""

import logfire
from pydantic import BaseModel

from memex.application.usecase.common import (
    PageRequest,
    Pagination,
    UserSearchResult,
    page_offset,
)
from memex.domain.service import UserService


class SearchUsersRequest(PageRequest):
    """Search users request."""

    query: str


class SearchUsersResponse(BaseModel):
    """Search users response."""

    users: list[UserSearchResult]
    pagination: Pagination


class SearchUsersUseCase:
    """Use case for finding users by display name prefix."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize search users use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: SearchUsersRequest) -> SearchUsersResponse:
        """Execute search flow.

        Raises:
            ValidationError: If the query is shorter than two characters
        """
        with logfire.span("search_users.execute", page=request.page):
            users = await self.user_service.search_users(
                request.query,
                limit=request.limit,
                offset=page_offset(request.page, request.limit),
            )
            return SearchUsersResponse(
                users=[UserSearchResult.from_user(u) for u in users],
                pagination=Pagination.for_page(request.page, request.limit, len(users)),
            )
