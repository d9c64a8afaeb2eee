"""List posts use case."""

import logfire
from pydantic import BaseModel

from memex.application.usecase.common import (
    PageRequest,
    Pagination,
    PostView,
    page_offset,
)
from memex.domain.repository import PostSortOrder, VoteRepository
from memex.domain.service import PostService, UserService
from memex.domain.value import CommunityId, SubjectKind, UserId


class ListPostsRequest(PageRequest):
    """List posts request."""

    sort: PostSortOrder = PostSortOrder.HOT
    community_id: str | None = None  # Filter by community
    user_id: str | None = None  # Current user ID (if authenticated)


class ListPostsResponse(BaseModel):
    """List posts response."""

    posts: list[PostView]
    pagination: Pagination


class ListPostsUseCase:
    """Use case for listing posts with sorting and pagination."""

    def __init__(
        self,
        post_service: PostService,
        user_service: UserService,
        vote_repository: VoteRepository,
    ) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
            user_service: User domain service
            vote_repository: Vote repository
        """
        self.post_service = post_service
        self.user_service = user_service
        self.vote_repository = vote_repository

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Args:
            request: List posts request with filters and pagination

        Returns:
            A page of posts with their authors
        """
        with logfire.span(
            "list_posts.execute",
            sort=request.sort.value,
            community_id=request.community_id,
            page=request.page,
            limit=request.limit,
        ):
            posts = await self.post_service.list_posts(
                sort=request.sort,
                community_id=CommunityId(request.community_id)
                if request.community_id
                else None,
                limit=request.limit,
                offset=page_offset(request.page, request.limit),
            )

            # Batch lookups to avoid N+1 queries
            authors = await self.user_service.find_by_ids([p.author_id for p in posts])
            user_votes = {}
            if request.user_id and posts:
                votes = await self.vote_repository.find_by_user_and_subjects(
                    SubjectKind.POST, UserId(request.user_id), [p.id for p in posts]
                )
                user_votes = {vote.subject_id: vote.type for vote in votes}

            return ListPostsResponse(
                posts=[
                    PostView.from_post(
                        post, authors.get(post.author_id), user_votes.get(post.id)
                    )
                    for post in posts
                ],
                pagination=Pagination.for_page(request.page, request.limit, len(posts)),
            )
