"""Unit tests for MediaService."""

import pytest

from memex.adapter.media.cloudinary import MockMediaHost
from memex.domain.error import ValidationError
from memex.domain.service import MediaService
from memex.domain.value import MediaType


@pytest.fixture
def media_host():
    return MockMediaHost()


@pytest.fixture
def media_service(media_host):
    return MediaService(media_host, max_upload_bytes=1024)


class TestUpload:
    """Tests for upload validation."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("mimetype", "expected"),
        [("image/png", MediaType.IMAGE), ("video/mp4", MediaType.VIDEO)],
    )
    async def test_images_and_videos_accepted(
        self, media_service, media_host, mimetype, expected
    ):
        media = await media_service.upload(b"\x89PNG....", mimetype)

        assert media.type is expected
        assert media.url.startswith("https://")
        assert media_host.uploads == [(8, mimetype)]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("mimetype", ["application/pdf", "", None])
    async def test_other_types_rejected(self, media_service, media_host, mimetype):
        with pytest.raises(ValidationError):
            await media_service.upload(b"data", mimetype)

        assert media_host.uploads == []

    @pytest.mark.asyncio
    async def test_empty_upload(self, media_service):
        with pytest.raises(ValidationError, match="No file uploaded"):
            await media_service.upload(b"", "image/png")

    @pytest.mark.asyncio
    async def test_too_large(self, media_service, media_host):
        with pytest.raises(ValidationError, match="too large"):
            await media_service.upload(b"x" * 1025, "image/png")

        assert media_host.uploads == []
