"""Exception types for the URL shortener."""

from enum import Enum


class RejectionReason(str, Enum):
    """Why a candidate URL was rejected by the validator."""

    EMPTY_INPUT = "empty_input"
    MALFORMED_URL = "malformed_url"
    DISALLOWED_SCHEME = "disallowed_scheme"
    LENGTH_OUT_OF_RANGE = "length_out_of_range"
    SUSPICIOUS_TARGET = "suspicious_target"
    ALREADY_SHORTENED = "already_shortened"


class URLShortenerError(Exception):
    """Base class for all service errors."""


class URLValidationError(URLShortenerError, ValueError):
    """Client supplied input that cannot be shortened."""

    def __init__(self, message: str, reason: RejectionReason = None):
        super().__init__(message)
        self.message = message
        self.reason = reason


class DuplicateCodeError(URLShortenerError):
    """Short code already exists in the store."""

    def __init__(self, short_code: str):
        super().__init__(f"Short code '{short_code}' already exists")
        self.short_code = short_code


class StorageError(URLShortenerError):
    """The mapping store failed for a reason other than a missing row."""


class CodeGenerationError(URLShortenerError):
    """No free short code was found within the retry budget."""
