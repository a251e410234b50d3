"""Validation utilities for URL shortener."""

import re
from urllib.parse import urlparse

from ..errors import InvalidInputError, InvalidReason


ALLOWED_SCHEMES = ("http", "https")
DEFAULT_MAX_URL_LENGTH = 2048

# short_url is stored as a signed 64-bit integer
MAX_SHORT_URL = 2**63 - 1

_WHITESPACE = re.compile(r"\s")
_CONTROL = re.compile(r"[\x00-\x1f\x7f]")
_DIGITS = re.compile(r"[0-9]+")


def canonicalize_url(url: str) -> str:
    """Return the canonical form used for storage and dedup.

    Only surrounding whitespace is removed; two URLs that differ in any other
    way (case, trailing slash, default port) are distinct mappings.
    """
    return url.strip()


def extract_hostname(url: str, max_length: int = DEFAULT_MAX_URL_LENGTH) -> str:
    """Check URL syntax and return its hostname.

    Args:
        url: Canonical URL to check
        max_length: Maximum accepted length

    Returns:
        Hostname to resolve

    Raises:
        InvalidInputError: If the URL is empty, too long, malformed or not http(s)
    """
    if not url or not isinstance(url, str):
        raise InvalidInputError(InvalidReason.EMPTY, "URL is required")

    if len(url) > max_length:
        raise InvalidInputError(
            InvalidReason.TOO_LONG, f"URL is too long (max {max_length} characters)"
        )

    if _WHITESPACE.search(url):
        raise InvalidInputError(InvalidReason.MALFORMED, "URL contains whitespace")

    if _CONTROL.search(url):
        raise InvalidInputError(InvalidReason.MALFORMED, "URL contains control characters")

    try:
        result = urlparse(url)
        hostname = result.hostname
        # Accessing .port validates it (non-numeric or out of range raises)
        result.port
    except ValueError as e:
        raise InvalidInputError(InvalidReason.MALFORMED, f"Invalid URL format: {e}") from e

    if not result.scheme or not result.netloc:
        raise InvalidInputError(InvalidReason.MALFORMED, "URL must have a scheme and a domain")

    if result.scheme.lower() not in ALLOWED_SCHEMES:
        raise InvalidInputError(
            InvalidReason.UNSUPPORTED_SCHEME, f"URL must use http or https, got '{result.scheme}'"
        )

    if not hostname:
        raise InvalidInputError(InvalidReason.MALFORMED, "URL must have a valid hostname")

    return hostname


def parse_short_id(raw) -> int:
    """Parse a submitted short id.

    Accepts an int or a string of ASCII digits in ``1 .. MAX_SHORT_URL``.

    Raises:
        InvalidInputError: For anything else
    """
    if isinstance(raw, bool):
        raise InvalidInputError(InvalidReason.BAD_IDENTIFIER, f"not an id: {raw!r}")

    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str) and _DIGITS.fullmatch(raw):
        if len(raw.lstrip("0")) > len(str(MAX_SHORT_URL)):
            raise InvalidInputError(InvalidReason.BAD_IDENTIFIER, "id out of range")
        value = int(raw)
    else:
        raise InvalidInputError(InvalidReason.BAD_IDENTIFIER, f"not an id: {raw!r}")

    if value < 1 or value > MAX_SHORT_URL:
        raise InvalidInputError(InvalidReason.BAD_IDENTIFIER, f"id out of range: {value}")

    return value
