"""Get comments use case."""

import logfire
from pydantic import BaseModel, Field

from memex.application.usecase.common import (
    MAX_PAGE_SIZE,
    CommentView,
    PageRequest,
    Pagination,
    page_offset,
)
from memex.domain.repository import VoteRepository
from memex.domain.service import CommentService, CommentThreadNode, UserService
from memex.domain.value import PostId, SubjectKind, UserId, VoteType


class GetCommentsRequest(PageRequest):
    """Get comments request."""

    post_id: str
    limit: int = Field(default=20, ge=1, le=MAX_PAGE_SIZE)
    user_id: str | None = None  # Current user ID (if authenticated)


class GetCommentsResponse(BaseModel):
    """Get comments response.

    `comments` holds the top-level comments of the page; replies are nested.
    """

    comments: list[CommentView]
    pagination: Pagination


class GetCommentsUseCase:
    """Use case for getting the comment thread of a post."""

    def __init__(
        self,
        comment_service: CommentService,
        user_service: UserService,
        vote_repository: VoteRepository,
    ) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
            user_service: User domain service
            vote_repository: Vote repository
        """
        self.comment_service = comment_service
        self.user_service = user_service
        self.vote_repository = vote_repository

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Raises:
            NotFoundError: If the post doesn't exist
        """
        with logfire.span(
            "get_comments.execute", post_id=request.post_id, page=request.page
        ):
            comments = await self.comment_service.get_comments_for_post(
                PostId(request.post_id),
                limit=request.limit,
                offset=page_offset(request.page, request.limit),
            )

            authors = await self.user_service.find_by_ids([c.author_id for c in comments])
            user_votes: dict[str, VoteType] = {}
            if request.user_id and comments:
                votes = await self.vote_repository.find_by_user_and_subjects(
                    SubjectKind.COMMENT,
                    UserId(request.user_id),
                    [c.id for c in comments],
                )
                user_votes = {vote.subject_id: vote.type for vote in votes}

            def to_view(node: CommentThreadNode) -> CommentView:
                view = CommentView.from_comment(
                    node.comment,
                    authors.get(node.comment.author_id),
                    user_votes.get(node.comment.id),
                )
                view.replies = [to_view(reply) for reply in node.replies]
                return view

            thread = self.comment_service.build_thread(comments)
            return GetCommentsResponse(
                comments=[to_view(node) for node in thread],
                pagination=Pagination.for_page(
                    request.page, request.limit, len(comments)
                ),
            )
