"""Business logic service for URL shortener."""

import logging
from typing import Optional, Dict, Any, List, Union

from .database.base import URLShortenerDBBase
from .database.cache import RedisCache
from .database.models import URLMapping
from .common.validators import parse_short_id
from .errors import MappingNotFoundError
from .registry import ShortenerRegistry
from .validator import URLValidator


class URLShortenerService:
    """Service layer composing the validator and the registry."""

    def __init__(
        self,
        db: URLShortenerDBBase,
        cache: Optional[RedisCache] = None,
        validator: Optional[URLValidator] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize URL shortener service.

        Args:
            db: Store instance
            cache: Optional cache instance
            validator: Optional URL validator (defaults to DNS-backed)
            logger: Optional logger
        """
        self.db = db
        self.cache = cache
        self.logger = logger or logging.getLogger(__name__)
        self.validator = validator or URLValidator(logger=self.logger)
        self.registry = ShortenerRegistry(store=db, cache=cache, logger=self.logger)

    async def create_short_url(self, original_url) -> URLMapping:
        """Create (or return the existing) short URL for a submitted URL.

        Args:
            original_url: The submitted URL

        Returns:
            The mapping for the canonical URL

        Raises:
            InvalidInputError: If validation fails
            StoreError: On store failure
        """
        result = await self.validator.validate(original_url)
        result.raise_for_invalid()

        return await self.registry.get_or_create(result.url)

    async def get_original_url(self, short_url: Union[str, int]) -> URLMapping:
        """Resolve a submitted identifier.

        Args:
            short_url: The submitted id (string from the path or int)

        Returns:
            The mapping to redirect to

        Raises:
            InvalidInputError: If the identifier is not a positive integer
            MappingNotFoundError: If no mapping has this id
            StoreError: On store failure
        """
        short_id = parse_short_id(short_url)

        mapping = await self.registry.resolve_by_id(short_id)
        if mapping is None:
            self.logger.warning(f"Short URL not found: {short_id}")
            raise MappingNotFoundError(short_id)

        self.logger.debug(f"Retrieved URL: {short_id} -> {mapping.original_url}")
        return mapping

    async def list_recent_urls(self, limit: int = 100) -> List[URLMapping]:
        """List recently created mappings.

        Args:
            limit: Maximum number to return
        """
        return await self.db.list_recent(limit)

    async def get_statistics(self) -> Dict[str, Any]:
        """Get service statistics."""
        return {
            "total_urls": await self.db.count(),
            "max_short_url": await self.db.find_max_id(),
            "database": self.db.name,
            "cache_enabled": self.cache is not None and self.cache.enabled,
        }

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        db_healthy = await self.db.health_check()

        cache_healthy = True
        if self.cache and self.cache.enabled:
            cache_healthy = await self.cache.ping()

        return {
            "database": db_healthy,
            "cache": cache_healthy,
            "overall": db_healthy and cache_healthy,
        }

    async def close(self) -> None:
        """Close service connections."""
        await self.db.close()
        if self.cache:
            await self.cache.close()
