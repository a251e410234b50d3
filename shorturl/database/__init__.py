"""Storage layer for URL shortener."""

from .base import URLShortenerDBBase
from .postgres import URLShortenerPostgres
from .memory import InMemoryURLStore
from .models import URLMapping
from .factory import create_store

__all__ = [
    "URLShortenerDBBase",
    "URLShortenerPostgres",
    "InMemoryURLStore",
    "URLMapping",
    "create_store",
]
