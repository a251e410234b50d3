#!/usr/bin/env python3
"""
Main entry point for URL shortener service.

Concurrency: The server handles multiple connections simultaneously via async I/O
(FastAPI + asyncpg connection pool + redis.asyncio). Set WORKERS > 1 for
multi-process scaling across CPU cores; each worker process builds its own
app through ``build_app`` and so its own DB pool. The in-memory store is per
process and should only be used with one worker.

Usage:
    python app.py

Environment variables:
    DATABASE_URL - Store URL (postgresql://... or memory://)
    DATABASE_CREATE_TABLES - Set to 1/true to create the table on first use
    REDIS_URL - Redis connection URL (optional)
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    DNS_TIMEOUT_SECONDS - Upper bound for hostname checks
    LOG_LEVEL - Logging level
"""

import logging
import signal
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from shorturl.database.factory import create_store
from shorturl.database.cache import RedisCache
from shorturl.service import URLShortenerService
from shorturl.validator import URLValidator, DNSResolver
from shorturl.common.logging_config import setup_logging
from web_app import create_app


async def build_service(config: Config, logger: logging.Logger) -> URLShortenerService:
    """Create the store, optional cache and validator, and compose the service."""
    db = create_store(
        config.database_url,
        pool_max_size=config.database_pool_max_size,
        connection_timeout_seconds=config.database_timeout_seconds,
        create_tables=config.database_create_tables,
        logger=logger,
    )
    logger.info(f"Using {db.name} store")

    cache = None
    if config.redis_url:
        cache = RedisCache(
            redis_url=config.redis_url,
            ttl_seconds=config.cache_ttl_seconds,
            logger=logger,
        )
        await cache.connect()
    else:
        logger.info("Redis caching disabled")

    validator = URLValidator(
        resolver=DNSResolver(timeout_seconds=config.dns_timeout_seconds, logger=logger),
        max_url_length=config.max_url_length,
        logger=logger,
    )

    return URLShortenerService(db=db, cache=cache, validator=validator, logger=logger)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build collaborators at startup and close them at shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting URL shortener service...")
    service = await build_service(config, logger)

    app.state.db = service.db
    app.state.cache = service.cache
    app.state.service = service
    logger.info("Service started successfully")

    try:
        yield
    finally:
        logger.info("Shutting down URL shortener service...")
        await service.close()
        logger.info("Service stopped")


def build_app(config: Optional[Config] = None) -> FastAPI:
    """Create the app with logging configured; collaborators arrive in lifespan."""
    config = config or load_config()
    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    app = create_app(
        db_instance=None,
        cache_instance=None,
        service_instance=None,
        config=config,
    )
    app.state.logger = logger
    app.router.lifespan_context = lifespan
    return app


def main():
    """Main entry point."""
    config = load_config()
    app = build_app(config)
    logger = app.state.logger

    logger.info("URL Shortener Service")
    logger.info(f"Configuration: {config.model_dump(exclude={'database_url', 'redis_url'})}")

    if config.workers > 1:
        # Worker processes import the factory; signals are handled by uvicorn's supervisor
        logger.info(f"Starting {config.workers} workers on {config.host}:{config.port}")
        uvicorn.run(
            "app:build_app",
            factory=True,
            host=config.host,
            port=config.port,
            workers=config.workers,
            log_level=config.log_level.lower(),
        )
        return

    server = uvicorn.Server(
        uvicorn.Config(
            app,
            host=config.host,
            port=config.port,
            log_level=config.log_level.lower(),
            access_log=True,
        )
    )

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
