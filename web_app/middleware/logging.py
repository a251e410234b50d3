"""Request logging middleware."""

import time
import logging
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from shorturl.common.logging_config import get_logger


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request with method, path, status and timing.

    Server errors are logged at warning so they stand out from traffic.
    """

    def __init__(self, app, logger: Optional[logging.Logger] = None):
        super().__init__(app)
        self.logger = logger or get_logger("web")

    async def dispatch(self, request: Request, call_next: Callable):
        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - started) * 1000, 2)

        fields = {
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
            "client_ip": request.client.host if request.client else "unknown",
        }
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        self.logger.log(
            level,
            f"{fields['method']} {fields['path']} -> {fields['status_code']} "
            f"in {duration_ms:.2f}ms from {fields['client_ip']}",
            extra=fields,
        )

        return response
