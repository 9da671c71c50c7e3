"""SQLite implementation of the mapping store."""

import asyncio
import logging
from typing import Any, Optional, Sequence

import aiosqlite

from ..errors import DuplicateCodeError, StorageError
from .base import MappingStoreBase
from .models import URLMapping


class SQLiteMappingStore(MappingStoreBase):
    """Single-file SQLite store for URL mappings.

    One aiosqlite connection is shared by all requests. aiosqlite runs every
    statement on a single worker thread, and writes additionally hold
    ``_write_lock`` so a statement and its commit are never split by another
    coroutine's write.
    """

    CREATE_TABLE_SQL = """
    CREATE TABLE IF NOT EXISTS urls (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        short_code TEXT UNIQUE NOT NULL,
        original_url TEXT NOT NULL,
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
        click_count INTEGER DEFAULT 0
    );
    CREATE INDEX IF NOT EXISTS idx_short_code ON urls(short_code);
    """

    SELECT_COLUMNS = "SELECT id, short_code, original_url, created_at, click_count FROM urls"

    def __init__(
        self,
        db_config: str = "urls.db",
        timeout_seconds: float = 5.0,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize SQLite store.

        Args:
            db_config: Path to the database file, or ``:memory:``
            timeout_seconds: How long SQLite waits on a locked database file
            logger: Optional logger instance
        """
        super().__init__(db_config)

        self.logger = logger or logging.getLogger(__name__)
        self.timeout_seconds = timeout_seconds

        self._conn: Optional[aiosqlite.Connection] = None
        self._write_lock = asyncio.Lock()

    async def connect(self) -> None:
        if self._conn is not None:
            return
        self.logger.info(f"Opening SQLite database at {self.db_config}")
        try:
            conn = await aiosqlite.connect(self.db_config, timeout=self.timeout_seconds)
            conn.row_factory = aiosqlite.Row
            await conn.executescript(self.CREATE_TABLE_SQL)
            await conn.commit()
        except aiosqlite.Error as e:
            raise StorageError(f"Failed to open database: {e}") from e
        self._conn = conn

    def _connection(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise StorageError("Store is not connected")
        return self._conn

    async def _fetch_one(self, query: str, params: Sequence[Any]) -> Optional[URLMapping]:
        conn = self._connection()
        try:
            async with conn.execute(query, params) as cursor:
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            self.logger.error(f"Query failed: {e}")
            raise StorageError(str(e)) from e
        return URLMapping.from_row(row) if row else None

    async def find_by_original_url(self, original_url: str) -> Optional[URLMapping]:
        return await self._fetch_one(
            f"{self.SELECT_COLUMNS} WHERE original_url = ? ORDER BY id LIMIT 1",
            (original_url,),
        )

    async def find_by_short_code(self, short_code: str) -> Optional[URLMapping]:
        return await self._fetch_one(
            f"{self.SELECT_COLUMNS} WHERE short_code = ? LIMIT 1",
            (short_code,),
        )

    async def insert(self, short_code: str, original_url: str) -> URLMapping:
        conn = self._connection()
        async with self._write_lock:
            try:
                cursor = await conn.execute(
                    "INSERT INTO urls (short_code, original_url) VALUES (?, ?)",
                    (short_code, original_url),
                )
                row_id = cursor.lastrowid
                await cursor.close()
                await conn.commit()
            except aiosqlite.IntegrityError as e:
                await conn.rollback()
                if "UNIQUE" in str(e).upper():
                    raise DuplicateCodeError(short_code) from e
                raise StorageError(str(e)) from e
            except aiosqlite.Error as e:
                await conn.rollback()
                self.logger.error(f"Error inserting short code {short_code}: {e}")
                raise StorageError(str(e)) from e

        mapping = await self._fetch_one(f"{self.SELECT_COLUMNS} WHERE id = ?", (row_id,))
        if mapping is None:
            raise StorageError(f"Inserted row {row_id} could not be read back")

        self.logger.debug(f"Inserted mapping {mapping.id}: {short_code} -> {original_url}")
        return mapping

    async def increment_clicks(self, short_code: str) -> None:
        conn = self._connection()
        async with self._write_lock:
            try:
                cursor = await conn.execute(
                    "UPDATE urls SET click_count = click_count + 1 WHERE short_code = ?",
                    (short_code,),
                )
                updated = cursor.rowcount
                await cursor.close()
                await conn.commit()
            except aiosqlite.Error as e:
                await conn.rollback()
                raise StorageError(f"Failed to increment clicks for {short_code}: {e}") from e

        if not updated:
            self.logger.warning(f"Cannot increment clicks - short code not found: {short_code}")

    async def health_check(self) -> bool:
        try:
            async with self._connection().execute("SELECT 1") as cursor:
                await cursor.fetchone()
            return True
        except (aiosqlite.Error, StorageError) as e:
            self.logger.error(f"Health check failed: {e}")
            return False

    async def close(self) -> None:
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        await conn.close()
        self.logger.debug("Closed SQLite connection")
