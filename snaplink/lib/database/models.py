"""Data models for URL shortener."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Union


def parse_timestamp(value: Union[str, datetime, None]) -> datetime:
    """Parse a stored timestamp into an aware UTC datetime.

    SQLite's CURRENT_TIMESTAMP yields ``YYYY-MM-DD HH:MM:SS`` in UTC.
    """
    if value is None:
        return datetime.now(timezone.utc)
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


@dataclass(frozen=True)
class URLMapping:
    """Represents a URL mapping in the database."""

    id: int
    short_code: str
    original_url: str
    created_at: datetime
    click_count: int = 0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "URLMapping":
        """Create from a database row."""
        return cls(
            id=row["id"],
            short_code=row["short_code"],
            original_url=row["original_url"],
            created_at=parse_timestamp(row["created_at"]),
            click_count=row["click_count"] or 0,
        )
