"""Database layer for URL shortener."""

from .base import MappingStoreBase
from .sqlite import SQLiteMappingStore
from .models import URLMapping

__all__ = ["MappingStoreBase", "SQLiteMappingStore", "URLMapping"]
