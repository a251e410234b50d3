"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ShortenRequest(BaseModel):
    """Request to shorten a URL (JSON body)."""

    url: Optional[str] = Field(None, description="The URL to shorten")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://www.freecodecamp.org"},
            ]
        }
    }


class ShortURLResponse(BaseModel):
    """Response after shortening a URL."""

    original_url: str = Field(..., description="The canonical URL")
    short_url: int = Field(..., description="The numeric short id")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "original_url": "https://www.freecodecamp.org",
                    "short_url": 1,
                }
            ]
        }
    }


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    cache: str = Field(..., description="Cache status")
    timestamp: datetime = Field(..., description="Check timestamp")


class StatisticsResponse(BaseModel):
    """Statistics response."""

    total_urls: int
    max_short_url: Optional[int] = None
    database: str
    cache_enabled: bool
