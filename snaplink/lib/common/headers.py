"""Header parsing utilities for URL shortener."""

from typing import Mapping, Optional


DEFAULT_BASE_URL = "http://localhost"


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Case-insensitive header lookup; first value of a comma separated list."""
    for key, value in headers.items():
        if key.lower() == name and value:
            return value.split(",")[0].strip()
    return None


def build_base_url(
    headers: Mapping[str, str],
    override_base_url: Optional[str] = None,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Build the externally visible base URL for short links.

    Priority:
    1. Configured override (BASE_URL)
    2. X-Forwarded-Proto + X-Forwarded-Host
    3. Request scheme + host
    4. http://localhost

    Args:
        headers: Request headers
        override_base_url: Base URL from configuration, if any
        request_scheme: Request scheme (http/https)
        request_host: Request Host header

    Returns:
        Base URL without trailing slash (e.g., https://example.com)
    """
    if override_base_url:
        return override_base_url.rstrip("/")

    proto = _header(headers, "x-forwarded-proto")
    host = _header(headers, "x-forwarded-host")
    if proto and host:
        return f"{proto}://{host}"

    if request_scheme and request_host:
        return f"{request_scheme}://{request_host}"

    return DEFAULT_BASE_URL
