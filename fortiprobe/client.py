#!/usr/bin/env python3
"""
FortiProbe HTTP Client

Thin client for the FortiOS REST API. Every failure on the way from
request to decoded JSON body is reported as a FetchError subclass so
probes have a single error type to handle.

No retries are performed here; a failed request fails the poll and the
scrape scheduler decides when to try again.
"""

import logging
from typing import Any, Optional
from urllib.parse import urlsplit

import requests

from .core.constants import DEFAULT_TIMEOUT, USER_AGENT
from .core.exceptions import (
    ConfigValidationError,
    DecodeError,
    HTTPStatusError,
    TransportError,
)
from .__version__ import __version__

logger = logging.getLogger("fortiprobe")


def normalize_target(url: str) -> str:
    """
    Validate a target base URL and strip trailing slashes.

    Args:
        url: Base URL such as "https://fw1.example.net"

    Returns:
        Normalized URL

    Raises:
        ConfigValidationError: If the URL is not http(s) or has no host
    """
    if not isinstance(url, str):
        raise ConfigValidationError("target", url, "must be a string")
    parts = urlsplit(url.strip())
    if parts.scheme not in ("http", "https"):
        raise ConfigValidationError("target", url, "scheme must be http or https")
    if not parts.netloc:
        raise ConfigValidationError("target", url, "missing host")
    return url.strip().rstrip("/")


class FortiHTTP:
    """
    HTTP client bound to one FortiGate target.

    Attributes:
        base_url: Normalized target URL
        timeout: Request timeout in seconds
        verify: Whether TLS certificates are verified
    """

    def __init__(self, base_url: str, token: Optional[str] = None,
                 verify: bool = True, timeout: float = DEFAULT_TIMEOUT,
                 session: Optional[requests.Session] = None):
        self.base_url = normalize_target(base_url)
        self.timeout = timeout
        self.verify = verify

        self._session = session or requests.Session()
        self._session.headers["User-Agent"] = f"{USER_AGENT}/{__version__}"
        self._session.headers["Accept"] = "application/json"
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"

    def build_url(self, path: str, query: str = "") -> str:
        url = f"{self.base_url}/{path.lstrip('/')}"
        if query:
            url = f"{url}?{query}"
        return url

    def get(self, path: str, query: str = "") -> Any:
        """
        Fetch a REST endpoint and return its decoded JSON body.

        Args:
            path: API path, e.g. "api/v2/monitor/system/ha-checksums"
            query: Raw query string without the leading '?'

        Returns:
            Decoded JSON value

        Raises:
            TransportError: Connection, TLS or timeout failure
            HTTPStatusError: Non-200 response
            DecodeError: Body is not valid JSON
        """
        url = self.build_url(path, query)
        logger.debug(f"GET {url}")

        try:
            response = self._session.get(url, timeout=self.timeout, verify=self.verify)
        except requests.RequestException as e:
            raise TransportError("Request failed", details=str(e), target=self.base_url) from e

        if response.status_code != 200:
            raise HTTPStatusError(response.status_code, url, target=self.base_url)

        try:
            return response.json()
        except ValueError as e:
            raise DecodeError("Response is not valid JSON", details=str(e), target=self.base_url) from e

    def close(self):
        """Release the underlying connection pool."""
        self._session.close()

    def __enter__(self) -> 'FortiHTTP':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        return f"FortiHTTP(base_url={self.base_url!r}, verify={self.verify}, timeout={self.timeout})"
