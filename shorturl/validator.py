"""URL validation: syntax check plus hostname resolution."""

import asyncio
import logging
import socket
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from .common.validators import DEFAULT_MAX_URL_LENGTH, canonicalize_url, extract_hostname
from .errors import InvalidInputError, InvalidReason


class HostResolver(ABC):
    """Answers whether a hostname resolves to at least one address."""

    @abstractmethod
    async def resolve(self, hostname: str) -> bool:
        pass


class DNSResolver(HostResolver):
    """Resolver backed by the event loop's getaddrinfo."""

    def __init__(self, timeout_seconds: Optional[float] = 5.0, logger: Optional[logging.Logger] = None):
        """Initialize resolver.

        Args:
            timeout_seconds: Upper bound for one lookup (None waits indefinitely)
            logger: Optional logger instance
        """
        self.timeout_seconds = timeout_seconds
        self.logger = logger or logging.getLogger(__name__)

    async def resolve(self, hostname: str) -> bool:
        loop = asyncio.get_running_loop()
        try:
            infos = await asyncio.wait_for(
                loop.getaddrinfo(hostname, None, type=socket.SOCK_STREAM),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            self.logger.warning(f"DNS lookup timed out for {hostname}")
            return False
        except (OSError, UnicodeError) as e:
            self.logger.debug(f"DNS lookup failed for {hostname}: {e}")
            return False

        return len(infos) > 0


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one submitted URL."""

    url: str
    hostname: Optional[str] = None
    reason: Optional[InvalidReason] = None
    detail: str = ""

    @property
    def is_valid(self) -> bool:
        return self.reason is None

    def raise_for_invalid(self) -> None:
        """Raise InvalidInputError if the URL was rejected."""
        if self.reason is not None:
            raise InvalidInputError(self.reason, self.detail)


class URLValidator:
    """Decides whether a submitted string is an acceptable, resolvable URL.

    Malformed input, a scheme other than http/https and a hostname that does
    not resolve are all reported as invalid; ``ValidationResult.reason`` says
    which. Resolution results are never cached.
    """

    def __init__(
        self,
        resolver: Optional[HostResolver] = None,
        max_url_length: int = DEFAULT_MAX_URL_LENGTH,
        logger: Optional[logging.Logger] = None,
    ):
        self.resolver = resolver or DNSResolver()
        self.max_url_length = max_url_length
        self.logger = logger or logging.getLogger(__name__)

    async def validate(self, raw_url) -> ValidationResult:
        """Validate a submitted URL.

        Args:
            raw_url: The submitted value (anything; non-strings are rejected)

        Returns:
            ValidationResult whose ``url`` is the canonical form
        """
        if not isinstance(raw_url, str):
            return ValidationResult(url="", reason=InvalidReason.EMPTY, detail="URL is required")

        url = canonicalize_url(raw_url)
        try:
            hostname = extract_hostname(url, max_length=self.max_url_length)
        except InvalidInputError as e:
            self.logger.info(f"Rejected URL ({e.reason.value}): {url[:200]!r}", extra={"reason": e.reason.value})
            return ValidationResult(url=url, reason=e.reason, detail=e.detail or "")

        if not await self.resolver.resolve(hostname):
            self.logger.info(
                f"Rejected URL (unresolvable host {hostname}): {url[:200]!r}",
                extra={"reason": InvalidReason.UNRESOLVABLE.value},
            )
            return ValidationResult(
                url=url,
                hostname=hostname,
                reason=InvalidReason.UNRESOLVABLE,
                detail=f"Hostname '{hostname}' does not resolve",
            )

        return ValidationResult(url=url, hostname=hostname)
