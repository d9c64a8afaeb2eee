"""Media domain service."""

import logfire

from memex.domain.error import ValidationError
from memex.domain.value import MediaType, UploadedMedia

from .base import Service


def file_too_large(max_bytes: int) -> ValidationError:
    """Error for an upload over `max_bytes`."""
    return ValidationError(f"File too large (max {max_bytes // (1024 * 1024)}MB)")


class MediaHost:
    """Media hosting interface."""

    async def upload(self, data: bytes, mimetype: str) -> UploadedMedia:
        """Store an image or video.

        Args:
            data: File contents
            mimetype: MIME type of the contents

        Returns:
            Public URL and media type

        Raises:
            UpstreamUnavailable: If the host cannot be reached or rejects the file
        """
        raise NotImplementedError


class MediaService(Service):
    """Validates and uploads post media."""

    def __init__(self, media_host: MediaHost, max_upload_bytes: int) -> None:
        """Initialize media service.

        Args:
            media_host: Media host client
            max_upload_bytes: Largest accepted upload
        """
        self.media_host = media_host
        self.max_upload_bytes = max_upload_bytes

    async def upload(self, data: bytes, mimetype: str | None) -> UploadedMedia:
        """Upload an image or video.

        Raises:
            ValidationError: If the file is empty, too large or not image/video
        """
        if not data:
            raise ValidationError("No file uploaded")
        try:
            MediaType.from_mimetype(mimetype or "")
        except ValueError as e:
            raise ValidationError(str(e)) from e
        if len(data) > self.max_upload_bytes:
            raise file_too_large(self.max_upload_bytes)

        with logfire.span("media_service.upload", mimetype=mimetype, size=len(data)):
            media = await self.media_host.upload(data, mimetype or "")
            logfire.info("Media uploaded", url=media.url, media_type=media.type.value)
            return media
