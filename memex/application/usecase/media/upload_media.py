"""Upload media use case."""

from pydantic import BaseModel

from memex.domain.service import MediaService
from memex.domain.value import MediaType


class UploadMediaRequest(BaseModel):
    """Upload media request."""

    data: bytes
    mimetype: str | None = None


class UploadMediaResponse(BaseModel):
    """Upload media response.

    Both values are passed on to post creation.
    """

    url: str
    type: MediaType


class UploadMediaUseCase:
    """Use case for uploading an image or video for a post."""

    def __init__(self, media_service: MediaService) -> None:
        """Initialize upload media use case.

        Args:
            media_service: Media domain service
        """
        self.media_service = media_service

    async def execute(self, request: UploadMediaRequest) -> UploadMediaResponse:
        """Execute upload flow.

        Raises:
            ValidationError: If the file is empty, too large or not image/video
            UpstreamUnavailable: If the media host fails
        """
        media = await self.media_service.upload(request.data, request.mimetype)
        return UploadMediaResponse(url=media.url, type=media.type)
