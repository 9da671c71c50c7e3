"""Abstract base class for mapping store implementations."""

from abc import ABC, abstractmethod
from typing import Optional

from .models import URLMapping


class MappingStoreBase(ABC):
    """Durable table of short code to original URL mappings.

    Lookups return ``None`` when nothing matches. Any other failure is
    raised as :class:`~snaplink.lib.errors.StorageError` so callers can
    tell "not found" apart from "store broken".
    """

    def __init__(self, db_config: str):
        """Initialize store.

        Args:
            db_config: Database location (connection string or file path)
        """
        self.db_config = db_config

    @abstractmethod
    async def connect(self) -> None:
        """Open the store and create the schema if needed."""
        pass

    @abstractmethod
    async def find_by_original_url(self, original_url: str) -> Optional[URLMapping]:
        """Find a mapping by exact original URL.

        Args:
            original_url: The long URL

        Returns:
            The oldest mapping for that URL, or None
        """
        pass

    @abstractmethod
    async def find_by_short_code(self, short_code: str) -> Optional[URLMapping]:
        """Find a mapping by exact short code.

        Args:
            short_code: The short code to lookup

        Returns:
            The mapping if found, None otherwise
        """
        pass

    @abstractmethod
    async def insert(self, short_code: str, original_url: str) -> URLMapping:
        """Create a new mapping with a zero click count.

        Args:
            short_code: The short code to use
            original_url: The original long URL

        Returns:
            The stored mapping

        Raises:
            DuplicateCodeError: If short_code already exists
        """
        pass

    @abstractmethod
    async def increment_clicks(self, short_code: str) -> None:
        """Atomically add one to the click count of a mapping.

        Args:
            short_code: The short code to update
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close database connections."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if database is healthy.

        Returns:
            True if healthy, False otherwise
        """
        pass
