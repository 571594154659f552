"""Cassandra per-table metrics collector."""

import logging
import socket
from typing import List, Optional

from ..config.models import CollectorConfig
from ..utils.metrics import OutputLine
from .base import BaseCollector
from .decoder import decode_response
from .errors import ConfigurationError, RemoteError
from .jolokia_client import JolokiaClient, build_read_url
from .line_protocol import LineProtocolTransformer


def resolve_hostname() -> str:
    """
    Local host name used for the `host` tag.

    Raises:
        ConfigurationError: If the host name cannot be determined
    """
    try:
        hostname = socket.gethostname()
    except OSError as e:
        raise ConfigurationError(f"Failed to resolve hostname: {e}") from e
    if not hostname:
        raise ConfigurationError("Failed to resolve hostname: empty host name")
    return hostname


def build_common_key(check_name: str, hostname: str) -> str:
    """Series prefix shared by every line of a run."""
    return f"{check_name},host={hostname}"


class CassandraTableCollector(BaseCollector):
    """Collector for ColumnFamily metrics exposed through Jolokia."""

    def __init__(
        self,
        config: CollectorConfig,
        logger: logging.Logger,
        hostname: Optional[str] = None
    ):
        """
        Initialize Cassandra collector.

        Args:
            config: Resolved collector configuration
            logger: Logger instance
            hostname: Host tag value, looked up when omitted
        """
        super().__init__(config, logger)
        self.hostname = hostname

    async def collect(self) -> List[OutputLine]:
        """
        Run one fetch, decode and transform cycle.

        Returns:
            List[OutputLine]: One line per reportable bean

        Raises:
            CollectorError: On any configuration, transport or payload failure
        """
        url = build_read_url(self.config.jolokia)
        hostname = self.hostname or resolve_hostname()

        client = JolokiaClient(timeout=self.config.timeout, logger=self.logger)
        body, _ = await client.read(url)

        try:
            document = decode_response(body)
        except RemoteError as e:
            if e.stacktrace:
                self.logger.debug(f"Remote stacktrace: {e.stacktrace}")
            raise

        self.logger.debug(f"Decoded {len(document.value)} beans sampled at {document.timestamp}")

        transformer = LineProtocolTransformer(
            common_key=build_common_key(self.config.name, hostname),
            skip_metrics=self.config.skip,
            skip_zeros=self.config.skip_zeros,
            logger=self.logger,
        )
        return list(transformer.transform(document))
