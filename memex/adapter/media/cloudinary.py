"""Cloudinary media host client.

Uploads use the signed REST upload endpoint: the signature is the SHA-1
of the sorted upload parameters followed by the API secret.
"""

import hashlib
import time

import httpx
import logfire

from memex.adapter.error import UpstreamUnavailable
from memex.config import MediaSettings
from memex.domain.service.media_service import MediaHost
from memex.domain.value import MediaType, UploadedMedia, new_id


def sign_params(params: dict[str, str], api_secret: str) -> str:
    """Sign upload parameters.

    Args:
        params: Parameters to sign (file, api_key and resource_type excluded)
        api_secret: Cloudinary API secret

    Returns:
        Hex SHA-1 signature
    """
    to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
    return hashlib.sha1(f"{to_sign}{api_secret}".encode("utf-8")).hexdigest()


class CloudinaryMediaHost(MediaHost):
    """Uploads media to Cloudinary."""

    def __init__(self, settings: MediaSettings) -> None:
        """Initialize client.

        Args:
            settings: Media settings (cloud name, credentials, folder)
        """
        self.settings = settings
        # "auto" lets Cloudinary decide between image and video
        self.upload_url = (
            f"https://api.cloudinary.com/v1_1/{settings.cloud_name}/auto/upload"
        )

    async def upload(self, data: bytes, mimetype: str) -> UploadedMedia:
        """Upload a file.

        Raises:
            UpstreamUnavailable: If Cloudinary fails or rejects the upload
        """
        params = {"folder": self.settings.folder, "timestamp": str(int(time.time()))}
        form = {
            **params,
            "api_key": self.settings.api_key,
            "signature": sign_params(params, self.settings.api_secret),
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.upload_url,
                    data=form,
                    files={"file": (new_id(), data, mimetype)},
                    timeout=60.0,
                )
        except httpx.HTTPError as e:
            logfire.error("Cloudinary upload HTTP error", error=str(e))
            raise UpstreamUnavailable("media host", str(e)) from e

        if response.status_code != 200:
            logfire.error(
                "Cloudinary upload failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise UpstreamUnavailable(
                "media host", f"upload returned {response.status_code}"
            )

        result = response.json()
        media_type = (
            MediaType.VIDEO if result.get("resource_type") == "video" else MediaType.IMAGE
        )
        logfire.info(
            "Cloudinary upload completed",
            public_id=result.get("public_id"),
            media_type=media_type.value,
        )
        return UploadedMedia(
            url=result["secure_url"],
            type=media_type,
            public_id=result.get("public_id"),
        )


class MockMediaHost(MediaHost):
    """Mock media host for testing.

    Returns deterministic URLs and remembers what was uploaded.
    """

    def __init__(self) -> None:
        self.uploads: list[tuple[int, str]] = []

    async def upload(self, data: bytes, mimetype: str) -> UploadedMedia:
        """Record the upload and return a fake URL."""
        self.uploads.append((len(data), mimetype))
        public_id = f"memex/mock-{len(self.uploads)}"
        return UploadedMedia(
            url=f"https://media.example.com/{public_id}",
            type=MediaType.from_mimetype(mimetype),
            public_id=public_id,
        )
