"""Create post use case."""

from pydantic import BaseModel, Field

from memex.domain.error import ValidationError
from memex.domain.service import PostService
from memex.domain.value import CommunityId, MediaType, UploadedMedia, UserId


class CreatePostRequest(BaseModel):
    """Create post request."""

    title: str = ""
    community_id: str = ""
    content: str = ""
    tags: list[str] = Field(default_factory=list)
    media_url: str | None = None  # From a previous media upload
    media_type: MediaType | None = None
    author_id: str  # User ID from authenticated user


class CreatePostResponse(BaseModel):
    """Create post response."""

    message: str = "Post created successfully"
    post_id: str


class CreatePostUseCase:
    """Use case for creating a new post."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: CreatePostRequest) -> CreatePostResponse:
        """Execute create post flow.

        Args:
            request: Create post request

        Returns:
            ID of the created post

        Raises:
            ValidationError: If title or community is missing, or media URL and
                type are not given together
            NotFoundError: If the community or author profile doesn't exist
        """
        if bool(request.media_url) != (request.media_type is not None):
            raise ValidationError("media_url and media_type must be set together")

        media = None
        if request.media_url and request.media_type:
            media = UploadedMedia(url=request.media_url, type=request.media_type)

        post = await self.post_service.create_post(
            author_id=UserId(request.author_id),
            title=request.title,
            community_id=CommunityId(request.community_id),
            content=request.content,
            tags=request.tags,
            media=media,
        )
        return CreatePostResponse(post_id=post.id)
