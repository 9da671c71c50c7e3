#!/usr/bin/env python3
"""
Main entry point for the snaplink URL shortener.

Concurrency: a single uvicorn process serves requests with async I/O. The
SQLite mapping store is the only shared state and is created once per
process in the lifespan handler, then injected into the service.

Usage:
    python -m snaplink.app
    snaplink

Environment variables:
    PORT - Port to listen on (default 3000)
    HOST - Address to bind
    BASE_URL - Externally visible base URL for short links (optional)
    DATABASE_PATH - SQLite database file
    LOG_LEVEL - Logging level
"""

import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from .config import load_config
from .lib.database.sqlite import SQLiteMappingStore
from .lib.service import URLShortenerService
from .lib.shortcode import ShortCodeGenerator
from .lib.common.logging_config import setup_logging
from .web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the store on startup, drain clicks and close it on shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting URL shortener service...")

    store = SQLiteMappingStore(
        db_config=config.database_path,
        timeout_seconds=config.database_timeout_seconds,
        logger=logger.getChild("db"),
    )
    await store.connect()

    service = URLShortenerService(
        db=store,
        short_code_generator=ShortCodeGenerator(default_length=config.short_code_length),
        logger=logger.getChild("service"),
        max_collision_retries=config.max_collision_retries,
    )
    app.state.service = service

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down URL shortener service...")
    await service.close()
    app.state.service = None
    logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("URL Shortener Service")
    logger.info(f"Configuration: {config.model_dump()}")

    app = create_app(
        service_instance=None,  # Built in lifespan
        config=config,
        logger=logger,
        lifespan=lifespan,
    )

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=False,  # LoggingMiddleware logs every request
    )
    server = uvicorn.Server(uvicorn_config)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
