"""Delete comment use case."""

from pydantic import BaseModel

from memex.domain.service import CommentService
from memex.domain.value import CommentId, UserId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str
    user_id: str  # User ID from authenticated user
    is_admin: bool = False


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    message: str = "Comment deleted successfully"


class DeleteCommentUseCase:
    """Use case for soft-deleting a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow."""
        await self.comment_service.delete_comment(
            CommentId(request.comment_id),
            UserId(request.user_id),
            is_admin=request.is_admin,
        )
        return DeleteCommentResponse()
