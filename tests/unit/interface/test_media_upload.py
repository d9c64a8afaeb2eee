"""Tests for reading upload bodies with a size cap."""

import pytest
from starlette.requests import Request

from memex.domain.error import ValidationError
from memex.interface.api.routes.media import read_upload


def make_request(chunks: list[bytes], content_length: int | None = None) -> Request:
    headers = []
    if content_length is not None:
        headers.append((b"content-length", str(content_length).encode()))
    messages = [
        {"type": "http.request", "body": chunk, "more_body": i < len(chunks) - 1}
        for i, chunk in enumerate(chunks)
    ]
    pulled: list[int] = []

    async def receive():
        pulled.append(1)
        return messages[len(pulled) - 1]

    request = Request(
        {"type": "http", "method": "POST", "path": "/media", "headers": headers},
        receive,
    )
    request.state.pulled = pulled
    return request


class TestReadUpload:
    @pytest.mark.asyncio
    async def test_reads_body_within_limit(self):
        request = make_request([b"GIF8", b"9a"])

        assert await read_upload(request, max_bytes=6) == b"GIF89a"

    @pytest.mark.asyncio
    async def test_declared_length_refused_before_reading(self):
        request = make_request([b"x" * 8], content_length=8)

        with pytest.raises(ValidationError, match="File too large"):
            await read_upload(request, max_bytes=7)
        assert request.state.pulled == []

    @pytest.mark.asyncio
    async def test_stops_reading_once_over_limit(self):
        request = make_request([b"abcd", b"efgh", b"ijkl"])

        with pytest.raises(ValidationError, match="File too large"):
            await read_upload(request, max_bytes=6)
        assert len(request.state.pulled) == 2
