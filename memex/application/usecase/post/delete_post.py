"""Delete post use case."""

from pydantic import BaseModel

from memex.domain.service import PostService
from memex.domain.value import PostId, UserId


class DeletePostRequest(BaseModel):
    """Delete post request."""

    post_id: str
    user_id: str  # User ID from authenticated user
    is_admin: bool = False


class DeletePostResponse(BaseModel):
    """Delete post response."""

    message: str = "Post deleted successfully"


class DeletePostUseCase:
    """Use case for soft-deleting a post."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize delete post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: DeletePostRequest) -> DeletePostResponse:
        """Execute delete post flow.

        Raises:
            NotFoundError: If the post doesn't exist
            NotAuthorizedError: If the user is neither author nor admin
        """
        await self.post_service.delete_post(
            PostId(request.post_id), UserId(request.user_id), is_admin=request.is_admin
        )
        return DeletePostResponse()
