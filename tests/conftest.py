"""Pytest configuration and fixtures."""

from typing import AsyncGenerator, Iterable

import pytest
from httpx import ASGITransport, AsyncClient

from snaplink.config import Config
from snaplink.lib.database.sqlite import SQLiteMappingStore
from snaplink.lib.service import URLShortenerService
from snaplink.lib.shortcode import ShortCodeGenerator
from snaplink.lib.common.logging_config import setup_logging
from snaplink.web_app import create_app


class ScriptedGenerator(ShortCodeGenerator):
    """Generator that hands out a fixed sequence of codes."""

    def __init__(self, codes: Iterable[str]):
        super().__init__()
        self._codes = iter(codes)

    def generate(self) -> str:
        return next(self._codes)


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
async def store(logger) -> AsyncGenerator[SQLiteMappingStore, None]:
    """Create an isolated in-memory store."""
    db = SQLiteMappingStore(db_config=":memory:", logger=logger)
    await db.connect()

    yield db

    await db.close()


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=8)


@pytest.fixture
def scripted_generator():
    """Factory for generators that return predetermined codes."""
    return ScriptedGenerator


@pytest.fixture
async def service(store, short_code_generator, logger) -> AsyncGenerator[URLShortenerService, None]:
    """Create service instance."""
    svc = URLShortenerService(
        db=store,
        short_code_generator=short_code_generator,
        logger=logger,
    )

    yield svc

    await svc.wait_for_pending_clicks()


@pytest.fixture
def config():
    """Configuration that ignores any .env file and derives the base URL from requests."""
    return Config(_env_file=None, base_url=None, path_prefix="", database_path=":memory:")


@pytest.fixture
def app(service, config, logger):
    """Create test FastAPI app."""
    return create_app(service_instance=service, config=config, logger=logger)


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
