"""Feature and unfeature post use case."""

from pydantic import BaseModel

from memex.application.usecase.common import PostView
from memex.domain.service import ModerationService
from memex.domain.value import PostId


class FeaturePostRequest(BaseModel):
    """Feature or unfeature request."""

    post_id: str
    featured: bool


class FeaturePostResponse(BaseModel):
    """Feature or unfeature response."""

    message: str
    post: PostView


class FeaturePostUseCase:
    """Use case for featuring and unfeaturing posts."""

    def __init__(self, moderation_service: ModerationService) -> None:
        """Initialize feature post use case.

        Args:
            moderation_service: Moderation domain service
        """
        self.moderation_service = moderation_service

    async def execute(self, request: FeaturePostRequest) -> FeaturePostResponse:
        """Execute feature flow.

        Raises:
            NotFoundError: If the post doesn't exist
            ContentDeletedException: If the post was deleted
        """
        post = await self.moderation_service.set_featured(
            PostId(request.post_id), request.featured
        )
        message = (
            "Post featured successfully"
            if request.featured
            else "Post unfeatured successfully"
        )
        return FeaturePostResponse(message=message, post=PostView.from_post(post))
