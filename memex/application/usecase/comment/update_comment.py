"""Update comment use case."""

from pydantic import BaseModel

from memex.domain.service import CommentService
from memex.domain.value import CommentId, UserId


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: str
    content: str = ""
    user_id: str  # User ID from authenticated user


class UpdateCommentResponse(BaseModel):
    """Update comment response."""

    message: str = "Comment updated successfully"


class UpdateCommentUseCase:
    """Use case for editing a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> UpdateCommentResponse:
        """Execute update comment flow.

        Raises:
            ValidationError: If content is blank
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If the user isn't the author
            ContentDeletedException: If the comment was deleted
        """
        await self.comment_service.update_content(
            CommentId(request.comment_id), UserId(request.user_id), request.content
        )
        return UpdateCommentResponse()
