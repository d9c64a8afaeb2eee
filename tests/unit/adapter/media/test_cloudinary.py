"""Unit tests for the Cloudinary client."""

import httpx
import pytest

from memex.adapter.error import UpstreamUnavailable
from memex.adapter.media.cloudinary import CloudinaryMediaHost, sign_params
from memex.config import MediaSettings
from memex.domain.value import MediaType


def test_sign_params_documented_example():
    """Signature from Cloudinary's upload signing example."""
    params = {
        "eager": "w_400,h_300,c_pad|w_260,h_200,c_crop",
        "public_id": "sample_image",
        "timestamp": "1315060510",
    }

    assert sign_params(params, "abcd") == "bfd09f95f331f558cbd1320e67aa8d488770583e"


def test_sign_params_sorts_keys():
    assert (
        sign_params({"timestamp": "1700000000", "folder": "memex"}, "secret")
        == "684673cf1752635e23fb1e8b4f3f4020975889ae"
    )


@pytest.fixture
def settings():
    return MediaSettings(cloud_name="demo", api_key="key", api_secret="secret")


class FakeAsyncClient:
    """Stands in for httpx.AsyncClient and returns a canned response."""

    def __init__(self, response: httpx.Response | Exception):
        self.response = response
        self.requests: list[dict] = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    async def post(self, url, **kwargs):
        self.requests.append({"url": url, **kwargs})
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


def patch_client(monkeypatch, response) -> FakeAsyncClient:
    client = FakeAsyncClient(response)
    monkeypatch.setattr(httpx, "AsyncClient", lambda *args, **kwargs: client)
    return client


class TestUpload:
    """Tests for the signed upload request."""

    @pytest.mark.asyncio
    async def test_video_upload(self, monkeypatch, settings):
        client = patch_client(
            monkeypatch,
            httpx.Response(
                200,
                json={
                    "secure_url": "https://res.cloudinary.com/demo/video/upload/v1/memex/x.mp4",
                    "resource_type": "video",
                    "public_id": "memex/x",
                },
            ),
        )
        host = CloudinaryMediaHost(settings)

        media = await host.upload(b"....", "video/mp4")

        assert media.type is MediaType.VIDEO
        assert media.public_id == "memex/x"
        (request,) = client.requests
        assert request["url"] == "https://api.cloudinary.com/v1_1/demo/auto/upload"
        form = request["data"]
        assert form["api_key"] == "key"
        assert form["folder"] == "memex"
        assert form["signature"] == sign_params(
            {"folder": "memex", "timestamp": form["timestamp"]}, "secret"
        )

    @pytest.mark.asyncio
    async def test_rejected_upload(self, monkeypatch, settings):
        patch_client(monkeypatch, httpx.Response(401, text="Invalid Signature"))
        host = CloudinaryMediaHost(settings)

        with pytest.raises(UpstreamUnavailable):
            await host.upload(b"....", "image/png")

    @pytest.mark.asyncio
    async def test_network_error(self, monkeypatch, settings):
        patch_client(monkeypatch, httpx.ConnectError("boom"))
        host = CloudinaryMediaHost(settings)

        with pytest.raises(UpstreamUnavailable) as exc_info:
            await host.upload(b"....", "image/png")

        assert exc_info.value.service == "media host"
