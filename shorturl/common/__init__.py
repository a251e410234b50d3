"""Common utilities for URL shortener."""

from .validators import canonicalize_url, extract_hostname, parse_short_id
from .logging_config import setup_logging, get_logger

__all__ = [
    "canonicalize_url",
    "extract_hostname",
    "parse_short_id",
    "setup_logging",
    "get_logger",
]
