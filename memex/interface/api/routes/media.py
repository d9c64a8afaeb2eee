"""Media upload routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Request, status

from memex.adapter.error import AdapterError
from memex.application.usecase.media import (
    UploadMediaRequest,
    UploadMediaResponse,
    UploadMediaUseCase,
)
from memex.config import MediaSettings
from memex.domain.error import DomainError, ValidationError
from memex.domain.service import IdentityService
from memex.domain.service.media_service import file_too_large
from memex.interface.api.auth import require_identity
from memex.interface.error import http_error

router = APIRouter(prefix="/media", tags=["media"], route_class=DishkaRoute)


async def read_upload(request: Request, max_bytes: int) -> bytes:
    """Read the raw request body, stopping once it passes `max_bytes`.

    A declared Content-Length over the limit is refused before any of the
    body is read.

    Raises:
        ValidationError: If the body is larger than `max_bytes`
    """
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > max_bytes:
        raise file_too_large(max_bytes)

    received = bytearray()
    async for chunk in request.stream():
        received.extend(chunk)
        if len(received) > max_bytes:
            raise file_too_large(max_bytes)
    return bytes(received)


@router.post(
    "", response_model=UploadMediaResponse, status_code=status.HTTP_201_CREATED
)
async def upload_media(
    request: Request,
    upload_media_use_case: FromDishka[UploadMediaUseCase],
    identity_service: FromDishka[IdentityService],
    media_settings: FromDishka[MediaSettings],
    authorization: str | None = Header(default=None),
    content_type: str | None = Header(default=None),
) -> UploadMediaResponse:
    """Upload an image or video for a post.

    The request body is the raw file; its type comes from the
    Content-Type header. Pass the returned url and type to POST /posts.

    Raises:
        HTTPException: 400 empty, oversized or non-media file,
            401 unauthenticated, 502 media host failure
    """
    await require_identity(identity_service, authorization)
    try:
        data = await read_upload(request, media_settings.max_upload_bytes)
    except ValidationError as e:
        raise http_error(e) from e

    try:
        return await upload_media_use_case.execute(
            UploadMediaRequest(data=data, mimetype=content_type)
        )
    except (DomainError, AdapterError) as e:
        raise http_error(e) from e
