"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import api_router
from .web import web_router
from .middleware import LoggingMiddleware, register_error_handlers


def create_app(
    db_instance,
    cache_instance,
    service_instance,
    config,
) -> FastAPI:
    """Create and configure FastAPI application.

    Collaborators may be None here and filled in by a lifespan handler
    before the first request.

    Args:
        db_instance: Store instance
        cache_instance: Cache instance or None
        service_instance: URLShortenerService instance
        config: Config instance

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="URL Shortener Microservice",
        description="Maps URLs to numeric short ids and redirects back",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.state.db = db_instance
    app.state.cache = cache_instance
    app.state.service = service_instance
    app.state.config = config

    # Starlette runs the last-added middleware first, so logging sees CORS responses too
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_allow_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    register_error_handlers(app)

    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Web"])

    return app
