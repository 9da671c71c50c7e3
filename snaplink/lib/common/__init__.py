"""Common utilities for URL shortener."""

from .validators import ValidationResult, validate_url
from .headers import build_base_url
from .url_builder import build_short_url, short_url_for_request
from .logging_config import setup_logging

__all__ = [
    "ValidationResult",
    "validate_url",
    "build_base_url",
    "build_short_url",
    "short_url_for_request",
    "setup_logging",
]
