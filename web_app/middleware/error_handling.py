"""
Exception handlers for consistent error responses.

Expected negative outcomes (invalid input, unknown id) are answered with
HTTP 200 and an ``{"error": ...}`` body, which is the contract existing
clients of this service test against. Store failures are HTTP 500.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shorturl.common.logging_config import get_logger
from shorturl.errors import (
    ShortURLError,
    InvalidInputError,
    MappingNotFoundError,
    StoreError,
)

logger = get_logger("web")


async def shorturl_error_handler(request: Request, exc: ShortURLError) -> JSONResponse:
    """
    Convert a ShortURLError into a JSON error response.

    Args:
        request: The incoming HTTP request
        exc: The raised error

    Returns:
        JSON response with a single ``error`` field
    """
    if isinstance(exc, InvalidInputError):
        logger.info(
            f"Invalid input in {request.url.path}: {exc.reason.value} {exc.detail or ''}",
            extra={"path": request.url.path, "reason": exc.reason.value},
        )
        return JSONResponse({"error": exc.message}, status_code=200)

    if isinstance(exc, MappingNotFoundError):
        logger.info(
            f"Not found in {request.url.path}: {exc.short_url}",
            extra={"path": request.url.path, "short_url": exc.short_url},
        )
        return JSONResponse({"error": exc.message}, status_code=200)

    if isinstance(exc, StoreError):
        logger.error(f"Store error in {request.url.path}: {type(exc).__name__} {exc.detail or ''}")
    else:
        logger.error(f"Unhandled shortener error in {request.url.path}: {exc!r}")
    return JSONResponse({"error": StoreError.message}, status_code=500)


def register_error_handlers(app: FastAPI) -> None:
    """Install the shortener exception handlers on ``app``."""
    app.add_exception_handler(ShortURLError, shorturl_error_handler)
