"""URL building utilities for URL shortener."""

from typing import Mapping, Optional
from urllib.parse import quote

from .headers import build_base_url


def build_short_url(short_code: str, base_url: str, path_prefix: str = "") -> str:
    """Join base URL, optional path prefix and short code.

    >>> build_short_url("abc123", "https://sn.ap/", "/s")
    'https://sn.ap/s/abc123'
    """
    segments = [base_url.rstrip("/")]
    prefix = path_prefix.strip("/")
    if prefix:
        segments.append(prefix)
    segments.append(quote(short_code, safe="-_"))
    return "/".join(segments)


def short_url_for_request(
    short_code: str,
    headers: Mapping[str, str],
    override_base_url: Optional[str] = None,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
    path_prefix: str = "",
) -> str:
    """Build the public short URL for a code as seen by the caller of a request."""
    base_url = build_base_url(
        headers=headers,
        override_base_url=override_base_url,
        request_scheme=request_scheme,
        request_host=request_host,
    )
    return build_short_url(short_code, base_url, path_prefix)
