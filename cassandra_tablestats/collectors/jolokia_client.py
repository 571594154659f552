"""Jolokia HTTP client for reading Cassandra metric beans."""

import logging
from typing import Optional, Tuple

import httpx

from .errors import ConfigurationError, ProtocolError, TransportError


TABLE_METRICS_PATTERN = (
    "org.apache.cassandra.metrics:type=ColumnFamily,keyspace=*,scope=*,name=*"
)


def build_read_url(base_url: str, pattern: str = TABLE_METRICS_PATTERN) -> str:
    """
    Build the Jolokia read URL for an MBean pattern.

    Args:
        base_url: Agent base URL (e.g. http://localhost:1778/jolokia)
        pattern: Object name pattern to read

    Returns:
        str: `<base_url>/read/<pattern>`

    Raises:
        ConfigurationError: If the result is not an absolute http(s) URL
    """
    url = f"{base_url}/read/{pattern}"
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid Jolokia URL {url!r}: {e}") from e

    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise ConfigurationError(f"Invalid Jolokia URL {url!r}: not an absolute http(s) URL")
    return url


class JolokiaClient:
    """Single-shot reader against a Jolokia agent."""

    def __init__(self, timeout: Optional[float] = None, logger: logging.Logger = None):
        """
        Initialize Jolokia client.

        Args:
            timeout: Request timeout in seconds, None waits indefinitely
            logger: Logger instance
        """
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)

    async def read(self, url: str) -> Tuple[bytes, int]:
        """
        Perform one GET request.

        Args:
            url: Fully built read URL

        Returns:
            Tuple[bytes, int]: Response body and HTTP status code

        Raises:
            TransportError: On connection, DNS, read errors or timeout
            ProtocolError: On any status other than 200
        """
        self.logger.debug(f"Reading {url}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url)
        except httpx.TimeoutException as e:
            raise TransportError(f"Request to {url} timed out: {e}") from e
        except httpx.RequestError as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

        if response.status_code != 200:
            raise ProtocolError(url, response.status_code, response.reason_phrase)

        return response.content, response.status_code
