"""Validation utilities for URL shortener."""

import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import ParseResult, urlparse

from ..errors import RejectionReason


MIN_URL_LENGTH = 10
MAX_URL_LENGTH = 2048

ALLOWED_SCHEMES = {"http", "https"}

LOOPBACK_HOSTS = {"localhost", "127.0.0.1", "0.0.0.0", "::1"}

SUSPICIOUS_SCHEME_PATTERN = re.compile(r"^\s*(file|ftp|javascript|data|vbscript):", re.IGNORECASE)

# Other link shortening services; re-shortening their links hides the real target.
SHORTENER_DOMAINS = {
    "bit.ly",
    "tinyurl.com",
    "goo.gl",
    "t.co",
    "ow.ly",
    "is.gd",
    "buff.ly",
    "rebrand.ly",
    "cutt.ly",
    "tiny.cc",
    "shorturl.at",
}

MESSAGES = {
    RejectionReason.EMPTY_INPUT: "URL cannot be empty",
    RejectionReason.MALFORMED_URL: "Invalid URL format",
    RejectionReason.DISALLOWED_SCHEME: "URL must use http or https protocol",
    RejectionReason.LENGTH_OUT_OF_RANGE: (
        f"URL must be between {MIN_URL_LENGTH} and {MAX_URL_LENGTH} characters"
    ),
    RejectionReason.SUSPICIOUS_TARGET: "URL points to a suspicious or local target",
    RejectionReason.ALREADY_SHORTENED: "URL is already shortened",
}


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a candidate URL."""

    ok: bool
    reason: Optional[RejectionReason] = None
    message: str = ""

    @classmethod
    def accept(cls) -> "ValidationResult":
        return cls(ok=True)

    @classmethod
    def reject(cls, reason: RejectionReason) -> "ValidationResult":
        return cls(ok=False, reason=reason, message=MESSAGES[reason])


def _parse(candidate: str) -> Optional[ParseResult]:
    """Parse an absolute URL; None when there is no scheme or the parse fails."""
    try:
        parsed = urlparse(candidate)
        # Accessing .port validates it
        parsed.port
    except ValueError:
        return None
    if not parsed.scheme:
        return None
    return parsed


def _network_host(parsed: ParseResult) -> Optional[str]:
    """Lowercased host without the DNS root dot, or None if the URL has no usable host."""
    if not parsed.netloc or any(ch.isspace() for ch in parsed.netloc):
        return None
    host = (parsed.hostname or "").rstrip(".")
    return host or None


def _is_shortener_host(host: str) -> bool:
    return any(host == domain or host.endswith("." + domain) for domain in SHORTENER_DOMAINS)


def validate_url(candidate: str) -> ValidationResult:
    """Validate a candidate URL.

    Checks run in a fixed order and the first failure wins: empty input,
    absolute URL syntax, scheme allow-list, length bounds, suspicious
    targets, then known shortener domains. Pure function, no I/O.

    Args:
        candidate: The URL submitted by the client

    Returns:
        ValidationResult describing acceptance or the rejection reason
    """
    trimmed = (candidate or "").strip()
    if not trimmed:
        return ValidationResult.reject(RejectionReason.EMPTY_INPUT)

    parsed = _parse(trimmed)
    if parsed is None:
        return ValidationResult.reject(RejectionReason.MALFORMED_URL)

    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        return ValidationResult.reject(RejectionReason.DISALLOWED_SCHEME)

    # http(s) URLs are only meaningful with a host
    host = _network_host(parsed)
    if host is None:
        return ValidationResult.reject(RejectionReason.MALFORMED_URL)

    if not MIN_URL_LENGTH <= len(trimmed) <= MAX_URL_LENGTH:
        return ValidationResult.reject(RejectionReason.LENGTH_OUT_OF_RANGE)

    if host in LOOPBACK_HOSTS or SUSPICIOUS_SCHEME_PATTERN.match(trimmed):
        return ValidationResult.reject(RejectionReason.SUSPICIOUS_TARGET)

    if _is_shortener_host(host):
        return ValidationResult.reject(RejectionReason.ALREADY_SHORTENED)

    return ValidationResult.accept()
