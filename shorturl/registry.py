"""Shortener registry: owns the canonical URL <-> short id mapping."""

import logging
from typing import Optional

from .database.base import URLShortenerDBBase
from .database.cache import RedisCache
from .database.models import URLMapping
from .errors import StoreConflictError, UniqueConstraintViolation


class ShortenerRegistry:
    """Dedup lookup, id assignment and reverse lookup.

    Ids come from the store's current maximum, never from an in-process
    counter, so assignment stays correct across restarts and workers. The
    check-then-insert sequence is not atomic; the store's uniqueness
    constraint turns a race into a ``UniqueConstraintViolation``, which is
    retried exactly once.
    """

    def __init__(
        self,
        store: URLShortenerDBBase,
        cache: Optional[RedisCache] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize registry.

        Args:
            store: Persistent store
            cache: Optional id -> URL read-through cache
            logger: Optional logger
        """
        self.store = store
        self.cache = cache
        self.logger = logger or logging.getLogger(__name__)

    async def get_or_create(self, canonical_url: str) -> URLMapping:
        """Return the mapping for ``canonical_url``, creating it if absent.

        The URL must already have passed validation.

        Raises:
            StoreConflictError: If the insert collides twice
            StoreUnavailableError: On any other store failure
        """
        existing = await self.store.find_by_url(canonical_url)
        if existing:
            self.logger.debug(f"Existing mapping: {existing.short_url} -> {canonical_url}")
            return existing

        try:
            mapping = await self._insert_next(canonical_url)
        except UniqueConstraintViolation as first:
            self.logger.warning(f"Id conflict creating mapping for {canonical_url}, retrying once")

            # The collision may be the same URL registered by a concurrent request
            existing = await self.store.find_by_url(canonical_url)
            if existing:
                return existing

            try:
                mapping = await self._insert_next(canonical_url)
            except UniqueConstraintViolation as second:
                self.logger.error(f"Id conflict persisted for {canonical_url}: {second.detail}")
                raise StoreConflictError(detail=second.detail) from first

        self.logger.info(
            f"Created short URL: {mapping.short_url} -> {canonical_url}",
            extra={"short_url": mapping.short_url},
        )
        await self._cache_set(mapping)
        return mapping

    async def resolve_by_id(self, short_url: int) -> Optional[URLMapping]:
        """Look up a mapping by id.

        Args:
            short_url: Positive integer id (already parsed)

        Returns:
            The mapping, or None if no mapping has this id
        """
        if self.cache:
            cached_url = await self.cache.get(self.cache.get_cache_key(short_url))
            if cached_url:
                self.logger.debug(f"Cache hit for {short_url}")
                return URLMapping(original_url=cached_url, short_url=short_url)

        mapping = await self.store.find_by_id(short_url)
        if mapping:
            await self._cache_set(mapping)
        return mapping

    async def _insert_next(self, canonical_url: str) -> URLMapping:
        max_id = await self.store.find_max_id()
        next_id = (max_id or 0) + 1
        return await self.store.insert(canonical_url, next_id)

    async def _cache_set(self, mapping: URLMapping) -> None:
        if self.cache:
            await self.cache.set(self.cache.get_cache_key(mapping.short_url), mapping.original_url)
