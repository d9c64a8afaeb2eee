"""Create comment use case."""

from pydantic import BaseModel

from memex.domain.service import CommentService
from memex.domain.value import CommentId, PostId, UserId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str = ""
    content: str = ""
    parent_id: str | None = None  # For replies
    author_id: str  # User ID from authenticated user


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    message: str = "Comment created successfully"
    comment_id: str


class CreateCommentUseCase:
    """Use case for creating a comment or reply."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Raises:
            ValidationError: If post id or content is missing
            NotFoundError: If the post, parent or author profile doesn't exist
            BatchCommitFailed: If the comment could not be stored
        """
        comment = await self.comment_service.create_comment(
            post_id=PostId(request.post_id),
            author_id=UserId(request.author_id),
            content=request.content,
            parent_id=CommentId(request.parent_id) if request.parent_id else None,
        )
        return CreateCommentResponse(comment_id=comment.id)
