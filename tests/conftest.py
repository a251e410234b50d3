"""Pytest configuration and fixtures."""

import pytest
from httpx import AsyncClient, ASGITransport

from config import Config
from shorturl.database.memory import InMemoryURLStore
from shorturl.service import URLShortenerService
from shorturl.validator import HostResolver, URLValidator
from shorturl.common.logging_config import setup_logging
from web_app import create_app


UNRESOLVABLE_HOST = "no-such-host.invalid"


class FakeResolver(HostResolver):
    """Resolves every hostname except the ones listed as unknown."""

    def __init__(self, unknown=(UNRESOLVABLE_HOST,)):
        self.unknown = set(unknown)
        self.calls = []

    async def resolve(self, hostname: str) -> bool:
        self.calls.append(hostname)
        return hostname not in self.unknown


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def resolver():
    return FakeResolver()


@pytest.fixture
def validator(resolver, logger):
    return URLValidator(resolver=resolver, logger=logger)


@pytest.fixture
def test_db(logger):
    """Create test store instance."""
    return InMemoryURLStore(logger=logger)


@pytest.fixture
def service(test_db, validator, logger) -> URLShortenerService:
    """Create service instance."""
    return URLShortenerService(
        db=test_db,
        cache=None,  # No cache for tests
        validator=validator,
        logger=logger,
    )


@pytest.fixture
def config():
    return Config(database_url="memory://")


@pytest.fixture
def app(test_db, service, config):
    """Create test FastAPI app."""
    return create_app(
        db_instance=test_db,
        cache_instance=None,
        service_instance=service,
        config=config,
    )


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
