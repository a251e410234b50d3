"""API routes implementation."""

from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import RedirectResponse
from pydantic import ValidationError
from datetime import datetime, timezone

from .schemas import (
    ShortenRequest,
    ShortURLResponse,
    HealthResponse,
    ErrorResponse,
    StatisticsResponse,
)

router = APIRouter()


async def _submitted_url(request: Request) -> Optional[str]:
    """Read the ``url`` field from a JSON or form body.

    Anything unreadable comes back as None, which the validator rejects.
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("application/json"):
        try:
            body = ShortenRequest.model_validate(await request.json())
        except (ValueError, ValidationError):
            return None
        return body.url

    form = await request.form()
    value = form.get("url")
    return value if isinstance(value, str) else None


@router.post(
    "/shorturl",
    response_model=ShortURLResponse,
    responses={
        200: {"model": ShortURLResponse, "description": "Mapping, or {error: 'invalid url'}"},
        500: {"model": ErrorResponse, "description": "Store failure"},
    },
    summary="Create short URL",
    description="Shorten a URL sent as form data or JSON. Resubmitting a URL returns its existing id.",
)
async def create_short_url(request: Request):
    """Create (or return the existing) short URL."""
    service = request.app.state.service

    url = await _submitted_url(request)
    mapping = await service.create_short_url(url)

    return ShortURLResponse(**mapping.to_dict())


@router.get(
    "/shorturl/{short_url}",
    response_class=RedirectResponse,
    status_code=302,
    responses={
        200: {"model": ErrorResponse, "description": "Unknown id or invalid identifier"},
        500: {"model": ErrorResponse, "description": "Store failure"},
    },
    summary="Redirect to original URL",
    description="Redirect (302) to the URL registered under a numeric id.",
)
async def redirect_short_url(request: Request, short_url: str):
    """Redirect to the original URL."""
    service = request.app.state.service

    mapping = await service.get_original_url(short_url)

    return RedirectResponse(url=mapping.original_url, status_code=302)


@router.get(
    "/stats",
    response_model=StatisticsResponse,
    summary="Get statistics",
    description="Get service-wide statistics.",
)
async def get_statistics(request: Request):
    """Get service statistics."""
    service = request.app.state.service

    stats = await service.get_statistics()

    return StatisticsResponse(**stats)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        cache="healthy" if health["cache"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
