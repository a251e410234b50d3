"""Store factory keyed on the database URL scheme."""

import logging
from typing import Optional
from urllib.parse import urlparse

from .base import URLShortenerDBBase
from .memory import InMemoryURLStore
from .postgres import URLShortenerPostgres


POSTGRES_SCHEMES = ("postgresql", "postgres")
MEMORY_SCHEMES = ("memory",)


def create_store(
    database_url: str,
    pool_max_size: int = 10,
    connection_timeout_seconds: int = 30,
    create_tables: bool = False,
    logger: Optional[logging.Logger] = None,
) -> URLShortenerDBBase:
    """Create a store for ``database_url``.

    Args:
        database_url: ``postgresql://...`` or ``memory://``
        pool_max_size: asyncpg pool size (PostgreSQL only)
        connection_timeout_seconds: asyncpg timeouts (PostgreSQL only)
        create_tables: Create the table on first use (PostgreSQL only)
        logger: Optional logger

    Raises:
        ValueError: If the scheme is not supported
    """
    scheme = urlparse(database_url).scheme.lower()

    if scheme in MEMORY_SCHEMES:
        return InMemoryURLStore(db_config=database_url, logger=logger)

    if scheme in POSTGRES_SCHEMES:
        return URLShortenerPostgres(
            db_config=database_url,
            pool_max_size=pool_max_size,
            connection_timeout_seconds=connection_timeout_seconds,
            create_tables=create_tables,
            logger=logger,
        )

    raise ValueError(
        f"Unsupported database URL scheme '{scheme}'. "
        f"Supported: {', '.join(POSTGRES_SCHEMES + MEMORY_SCHEMES)}"
    )
