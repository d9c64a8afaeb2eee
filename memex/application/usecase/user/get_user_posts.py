"""Get user posts use case."""

import logfire
from pydantic import BaseModel

from memex.application.usecase.common import (
    PageRequest,
    Pagination,
    PostView,
    page_offset,
)
from memex.domain.service import PostService, UserService
from memex.domain.value import UserId


class GetUserPostsRequest(PageRequest):
    """Get user posts request."""

    author_id: str


class GetUserPostsResponse(BaseModel):
    """Get user posts response."""

    posts: list[PostView]
    pagination: Pagination


class GetUserPostsUseCase:
    """Use case for listing a user's posts, newest first."""

    def __init__(self, post_service: PostService, user_service: UserService) -> None:
        """Initialize get user posts use case.

        Args:
            post_service: Post domain service
            user_service: User domain service
        """
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: GetUserPostsRequest) -> GetUserPostsResponse:
        """Execute get user posts flow."""
        with logfire.span(
            "get_user_posts.execute", author_id=request.author_id, page=request.page
        ):
            author_id = UserId(request.author_id)
            posts = await self.post_service.list_posts_by_author(
                author_id,
                limit=request.limit,
                offset=page_offset(request.page, request.limit),
            )
            authors = await self.user_service.find_by_ids([author_id] if posts else [])
            return GetUserPostsResponse(
                posts=[PostView.from_post(p, authors.get(p.author_id)) for p in posts],
                pagination=Pagination.for_page(request.page, request.limit, len(posts)),
            )
