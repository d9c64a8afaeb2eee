"""Get user comments use case."""

import logfire
from pydantic import BaseModel

from memex.application.usecase.common import (
    CommentView,
    PageRequest,
    Pagination,
    page_offset,
)
from memex.domain.service import CommentService, PostService
from memex.domain.value import UserId

DELETED_POST_TITLE = "Deleted Post"


class GetUserCommentsRequest(PageRequest):
    """Get user comments request."""

    author_id: str


class GetUserCommentsResponse(BaseModel):
    """Get user comments response."""

    comments: list[CommentView]
    pagination: Pagination


class GetUserCommentsUseCase:
    """Use case for listing a user's comments with the title of each post."""

    def __init__(
        self, comment_service: CommentService, post_service: PostService
    ) -> None:
        """Initialize get user comments use case.

        Args:
            comment_service: Comment domain service
            post_service: Post domain service
        """
        self.comment_service = comment_service
        self.post_service = post_service

    async def execute(self, request: GetUserCommentsRequest) -> GetUserCommentsResponse:
        """Execute get user comments flow.

        Comments whose post no longer exists get the title "Deleted Post".
        """
        with logfire.span(
            "get_user_comments.execute", author_id=request.author_id, page=request.page
        ):
            comments = await self.comment_service.get_comments_by_author(
                UserId(request.author_id),
                limit=request.limit,
                offset=page_offset(request.page, request.limit),
            )
            posts = await self.post_service.find_by_ids([c.post_id for c in comments])

            views = []
            for comment in comments:
                view = CommentView.from_comment(comment)
                post = posts.get(comment.post_id)
                view.post_title = post.title if post else DELETED_POST_TITLE
                views.append(view)

            return GetUserCommentsResponse(
                comments=views,
                pagination=Pagination.for_page(
                    request.page, request.limit, len(comments)
                ),
            )
