"""Core business logic for URL shortener."""

from .validator import URLValidator, ValidationResult, HostResolver, DNSResolver
from .registry import ShortenerRegistry
from .service import URLShortenerService

__all__ = [
    "URLValidator",
    "ValidationResult",
    "HostResolver",
    "DNSResolver",
    "ShortenerRegistry",
    "URLShortenerService",
]
