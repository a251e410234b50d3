"""Middleware for URL shortener web app."""

from .logging import LoggingMiddleware
from .error_handling import register_error_handlers

__all__ = ["LoggingMiddleware", "register_error_handlers"]
