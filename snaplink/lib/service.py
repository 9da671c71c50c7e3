"""Business logic service for URL shortener."""

import asyncio
import logging
from functools import partial
from typing import Callable, Optional, Set, Tuple

from .shortcode import ShortCodeGenerator
from .database.base import MappingStoreBase
from .database.models import URLMapping
from .common.validators import validate_url
from .errors import CodeGenerationError, DuplicateCodeError, URLValidationError


ClickErrorHook = Callable[[str, BaseException], None]


class URLShortenerService:
    """Service layer for URL shortening business logic."""

    def __init__(
        self,
        db: MappingStoreBase,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_collision_retries: int = 5,
        on_click_error: Optional[ClickErrorHook] = None,
    ):
        """Initialize URL shortener service.

        Args:
            db: Mapping store instance
            short_code_generator: Optional short code generator
            logger: Optional logger
            max_collision_retries: Extra insert attempts after a duplicate code
            on_click_error: Called with (short_code, exception) when a
                background click increment fails; defaults to logging it
        """
        self.db = db
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.max_collision_retries = max_collision_retries
        self.on_click_error = on_click_error or self._log_click_error

        self._pending_clicks: Set[asyncio.Task] = set()

    async def create_short_url(self, original_url: str) -> Tuple[URLMapping, bool]:
        """Create a short URL, reusing an existing mapping for the same URL.

        Args:
            original_url: The original long URL

        Returns:
            Tuple of (mapping, created). ``created`` is False when an
            existing mapping was returned; its click count is the live one.

        Raises:
            URLValidationError: If the URL is rejected
            CodeGenerationError: If every generated code collided
            StorageError: If the store fails
        """
        result = validate_url(original_url)
        if not result.ok:
            self.logger.debug(f"Rejected URL ({result.reason.value}): {original_url!r}")
            raise URLValidationError(result.message, result.reason)

        url = original_url.strip()

        existing = await self.db.find_by_original_url(url)
        if existing:
            self.logger.debug(f"Reusing short code {existing.short_code} for {url}")
            return existing, False

        mapping = await self._insert_with_fresh_code(url)
        self.logger.info(f"Created short URL: {mapping.short_code} -> {url}")
        return mapping, True

    async def _insert_with_fresh_code(self, url: str) -> URLMapping:
        attempts = self.max_collision_retries + 1
        for attempt in range(1, attempts + 1):
            code = self.generator.generate()
            try:
                return await self.db.insert(code, url)
            except DuplicateCodeError:
                self.logger.warning(f"Short code collision on {code} (attempt {attempt}/{attempts})")

        raise CodeGenerationError(f"Unable to generate unique short code after {attempts} attempts")

    async def get_url_info(self, short_code: str) -> Optional[URLMapping]:
        """Get the mapping for a short code without counting a click.

        Args:
            short_code: The short code to lookup

        Returns:
            The mapping or None
        """
        return await self.db.find_by_short_code(short_code)

    async def resolve(self, short_code: str) -> Optional[URLMapping]:
        """Resolve a short code for a redirect and count the click.

        The increment runs as a detached task; the caller gets the mapping
        as soon as the lookup finishes and never waits for or sees the
        increment's outcome.

        Args:
            short_code: The short code to resolve

        Returns:
            The mapping or None if the code is unknown
        """
        mapping = await self.db.find_by_short_code(short_code)
        if mapping is None:
            self.logger.info(f"Short code not found: {short_code}")
            return None

        self._schedule_click(short_code)
        return mapping

    def _schedule_click(self, short_code: str) -> None:
        task = asyncio.create_task(self.db.increment_clicks(short_code))
        self._pending_clicks.add(task)
        task.add_done_callback(partial(self._on_click_done, short_code))

    def _on_click_done(self, short_code: str, task: asyncio.Task) -> None:
        self._pending_clicks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            try:
                self.on_click_error(short_code, exc)
            except Exception:
                self.logger.exception("Click error hook raised")

    def _log_click_error(self, short_code: str, exc: BaseException) -> None:
        self.logger.error(f"Failed to increment click count for {short_code}: {exc}")

    async def wait_for_pending_clicks(self) -> None:
        """Wait until every scheduled click increment has finished."""
        while self._pending_clicks:
            await asyncio.gather(*list(self._pending_clicks), return_exceptions=True)

    async def health_check(self) -> dict:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        db_healthy = await self.db.health_check()
        return {
            "database": db_healthy,
            "overall": db_healthy,
        }

    async def close(self) -> None:
        """Drain background work and close the store."""
        await self.wait_for_pending_clicks()
        await self.db.close()
