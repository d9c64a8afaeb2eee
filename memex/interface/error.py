"""Interface layer errors and their HTTP translation."""

import logfire
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from memex.adapter.error import UpstreamUnavailable
from memex.domain.error import (
    AccountBanned,
    AdminRequired,
    BatchCommitFailed,
    ConflictError,
    ContentDeletedException,
    NotAuthorizedError,
    NotFoundError,
    Unauthorized,
    ValidationError,
)

# Checked in order, so subclasses must come before their bases
ERROR_STATUS: list[tuple[type[Exception], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ContentDeletedException, status.HTTP_400_BAD_REQUEST),
    (Unauthorized, status.HTTP_401_UNAUTHORIZED),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    (AdminRequired, status.HTTP_403_FORBIDDEN),
    (AccountBanned, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (BatchCommitFailed, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (UpstreamUnavailable, status.HTTP_502_BAD_GATEWAY),
]


def http_error(error: Exception, detail: str | None = None) -> HTTPException:
    """Translate a domain or adapter error into an HTTPException.

    Args:
        error: Error raised by a use case
        detail: Message to send instead of the error's own text

    Returns:
        HTTPException with the matching status code

    Raises:
        The original error, if it has no HTTP mapping
    """
    for error_type, status_code in ERROR_STATUS:
        if isinstance(error, error_type):
            if status_code >= 500:
                logfire.error(
                    "Request failed", error=str(error), error_type=type(error).__name__
                )
                detail = detail or _server_error_detail(error)
            return HTTPException(status_code=status_code, detail=detail or str(error))
    raise error


def _server_error_detail(error: Exception) -> str:
    if isinstance(error, UpstreamUnavailable):
        return f"{error.service} is unavailable"
    return "Failed to save changes"


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render HTTP errors as `{"error": message}`."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation failures as 400 `{"error": message}`."""
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ())[1:])
        message = f"{location}: {first['msg']}" if location else first["msg"]
    logfire.warn("Request validation failed", path=request.url.path, error=message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"error": message}
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render any error without an HTTP mapping as a 500 `{"error": message}`.

    Starlette still re-raises the error after this response is sent, so the
    server log keeps the traceback.
    """
    logfire.error(
        "Unhandled error",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the JSON error handlers on an app."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
