"""Logging configuration for the shortener.

Everything logs under the ``shorturl`` logger tree. Request lines from the
web layer carry structured fields (``method``, ``path``, ``status_code``,
``duration_ms``, ``client_ip``) which the JSON formatter emits as keys.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional


LOGGER_NAME = "shorturl"

# LogRecord attributes copied into JSON output when a caller passes them via ``extra``
EXTRA_FIELDS = ("method", "path", "status_code", "duration_ms", "client_ip", "short_url", "reason")

PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
PLAIN_DATEFMT = "%Y-%m-%d %H:%M:%S"


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with request fields when present."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                entry[field] = getattr(record, field)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
) -> logging.Logger:
    """Configure the ``shorturl`` logger and return it.

    Safe to call more than once; handlers from a previous call are replaced.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Also append to this file when given
        json_format: Emit JSON lines instead of plain text
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)
    logger.handlers.clear()

    formatter = JSONFormatter() if json_format else logging.Formatter(PLAIN_FORMAT, datefmt=PLAIN_DATEFMT)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Return a logger inside the ``shorturl`` tree."""
    if name != LOGGER_NAME and not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)
