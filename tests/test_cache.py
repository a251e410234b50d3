"""Tests for the Redis cache wrapper."""

from unittest.mock import AsyncMock

import pytest
import redis.asyncio as redis

from shorturl.database import cache as cache_module
from shorturl.database.cache import RedisCache
from shorturl.service import URLShortenerService


@pytest.fixture
def redis_client():
    client = AsyncMock()
    client.ping.return_value = True
    client.get.return_value = None
    return client


@pytest.fixture
async def cache(monkeypatch, redis_client, logger):
    monkeypatch.setattr(cache_module.redis, "from_url", lambda *args, **kwargs: redis_client)
    cache = RedisCache(redis_url="redis://localhost:6379/0", ttl_seconds=60, logger=logger)
    await cache.connect()
    return cache


class TestRedisCache:
    """Test RedisCache against a mocked client."""

    async def test_disabled_without_url(self, logger):
        cache = RedisCache(redis_url=None, logger=logger)
        await cache.connect()

        assert not cache.enabled
        assert cache.client is None
        assert await cache.get("shorturl:id:1") is None
        assert not await cache.set("shorturl:id:1", "https://example.com")
        assert not await cache.ping()
        await cache.close()

    async def test_connect(self, cache, redis_client):
        assert cache.enabled
        assert cache.client is redis_client
        redis_client.ping.assert_awaited_once()

    async def test_connect_failure_disables(self, monkeypatch, redis_client, logger):
        redis_client.ping.side_effect = redis.ConnectionError("refused")
        monkeypatch.setattr(cache_module.redis, "from_url", lambda *args, **kwargs: redis_client)

        cache = RedisCache(redis_url="redis://localhost:6379/0", logger=logger)
        await cache.connect()

        assert not cache.enabled
        assert await cache.get("shorturl:id:1") is None

    async def test_get(self, cache, redis_client):
        redis_client.get.return_value = "https://example.com"

        assert await cache.get("shorturl:id:1") == "https://example.com"
        redis_client.get.assert_awaited_with("shorturl:id:1")

    async def test_set_uses_default_ttl(self, cache, redis_client):
        assert await cache.set("shorturl:id:1", "https://example.com")

        redis_client.setex.assert_awaited_with("shorturl:id:1", 60, "https://example.com")

    async def test_set_ttl_override(self, cache, redis_client):
        await cache.set("shorturl:id:1", "https://example.com", ttl=5)

        redis_client.setex.assert_awaited_with("shorturl:id:1", 5, "https://example.com")

    async def test_errors_are_misses(self, cache, redis_client):
        redis_client.get.side_effect = redis.ConnectionError("gone")
        redis_client.setex.side_effect = redis.TimeoutError("slow")
        redis_client.ping.side_effect = redis.ConnectionError("gone")

        assert await cache.get("shorturl:id:1") is None
        assert not await cache.set("shorturl:id:1", "https://example.com")
        assert not await cache.ping()

    async def test_close(self, cache, redis_client):
        await cache.close()

        redis_client.aclose.assert_awaited_once()

    def test_cache_key(self, logger):
        assert RedisCache(logger=logger).get_cache_key(42) == "shorturl:id:42"


class TestServiceWithCache:
    """Test the service's view of the cache."""

    async def test_statistics_and_health(self, cache, redis_client, test_db, validator, logger):
        service = URLShortenerService(db=test_db, cache=cache, validator=validator, logger=logger)

        assert (await service.get_statistics())["cache_enabled"]
        assert (await service.health_check())["cache"]

        redis_client.ping.side_effect = redis.ConnectionError("gone")
        health = await service.health_check()
        assert health == {"database": True, "cache": False, "overall": False}

    async def test_redirect_served_from_cache(self, cache, redis_client, test_db, validator, logger):
        service = URLShortenerService(db=test_db, cache=cache, validator=validator, logger=logger)
        redis_client.get.return_value = "https://example.com/cached"

        mapping = await service.get_original_url("7")

        assert mapping.original_url == "https://example.com/cached"
        redis_client.get.assert_awaited_with("shorturl:id:7")

    async def test_close_closes_cache(self, cache, redis_client, test_db, validator, logger):
        service = URLShortenerService(db=test_db, cache=cache, validator=validator, logger=logger)
        await service.close()

        redis_client.aclose.assert_awaited_once()
