"""Admin user listing use case."""

from typing import Literal

import logfire
from pydantic import BaseModel

from memex.application.usecase.common import (
    ModeratedUserView,
    PageRequest,
    Pagination,
    page_offset,
)
from memex.domain.service import ModerationService

BANNED_FILTERS: dict[str, bool | None] = {"all": None, "true": True, "false": False}


class ListUsersRequest(PageRequest):
    """List users request."""

    search: str | None = None
    banned: Literal["all", "true", "false"] = "all"


class ListUsersResponse(BaseModel):
    """List users response."""

    users: list[ModeratedUserView]
    pagination: Pagination


class ListUsersUseCase:
    """Use case for listing users to moderate, newest first."""

    def __init__(self, moderation_service: ModerationService) -> None:
        """Initialize list users use case.

        Args:
            moderation_service: Moderation domain service
        """
        self.moderation_service = moderation_service

    async def execute(self, request: ListUsersRequest) -> ListUsersResponse:
        """Execute list users flow."""
        with logfire.span(
            "list_users.execute", page=request.page, banned=request.banned
        ):
            users = await self.moderation_service.list_users(
                search=request.search,
                banned=BANNED_FILTERS[request.banned],
                limit=request.limit,
                offset=page_offset(request.page, request.limit),
            )
            return ListUsersResponse(
                users=[ModeratedUserView.from_user(u) for u in users],
                pagination=Pagination.for_page(request.page, request.limit, len(users)),
            )
