"""Error classes for the URL shortener.

Callers only ever see three outward outcomes: invalid input, not found, and
server error. The classes below keep the finer-grained reason around for
logging and diagnostics.
"""

from enum import Enum
from typing import Optional


class InvalidReason(str, Enum):
    """Why an input was rejected."""

    EMPTY = "empty"
    TOO_LONG = "too_long"
    MALFORMED = "malformed"
    UNSUPPORTED_SCHEME = "unsupported_scheme"
    UNRESOLVABLE = "unresolvable"
    BAD_IDENTIFIER = "bad_identifier"


class ShortURLError(Exception):
    """
    Base error class.

    Attributes:
        message: Error message rendered to callers
        detail: Optional internal detail (logged, never rendered)
    """
    message: str = "URL shortener error"

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None):
        self.message = message or self.message
        self.detail = detail
        super().__init__(self.message)


class InvalidInputError(ShortURLError):
    """Malformed URL, disallowed scheme, unresolvable host or bad identifier."""
    message = "invalid url"

    def __init__(self, reason: InvalidReason, detail: Optional[str] = None):
        self.reason = reason
        super().__init__(detail=detail)

    def __str__(self) -> str:
        return f"{self.message} ({self.reason.value})"


class MappingNotFoundError(ShortURLError):
    """Well-formed identifier with no mapping."""
    message = "No short URL found for given input"

    def __init__(self, short_url: int):
        self.short_url = short_url
        super().__init__(detail=f"short_url={short_url}")


class StoreError(ShortURLError):
    """Infrastructure-level store failure."""
    message = "Server error"


class StoreUnavailableError(StoreError):
    """The store could not be reached or the query failed."""


class UniqueConstraintViolation(StoreError):
    """An insert collided with an existing short_url or original_url."""


class StoreConflictError(StoreError):
    """Insert kept colliding after the conflict retry."""
