"""FastAPI application factory."""

import logging
from typing import Optional

from fastapi import FastAPI

from .api import api_router
from .web import web_router
from .middleware.logging import LoggingMiddleware


def create_app(
    service_instance,
    config,
    logger: Optional[logging.Logger] = None,
    lifespan=None,
) -> FastAPI:
    """Create and configure FastAPI application.

    The service (and the store behind it) is injected rather than looked up
    globally; when ``service_instance`` is None the ``lifespan`` handler is
    expected to build one and put it on ``app.state.service``.

    Args:
        service_instance: URLShortenerService instance, or None
        config: Configuration instance
        logger: Logger for routes and middleware
        lifespan: Optional lifespan context manager

    Returns:
        Configured FastAPI app
    """
    logger = logger or logging.getLogger("snaplink")

    app = FastAPI(
        title="snaplink",
        description="URL shortening service with click tracking",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )

    # Store instances in app state for access in routes
    app.state.service = service_instance
    app.state.config = config
    app.state.logger = logger

    app.add_middleware(LoggingMiddleware, logger=logger.getChild("web"))

    # API first: the catch-all /{short_code} route must not shadow it
    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Web"])

    return app
