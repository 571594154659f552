"""Collector error taxonomy.

Every error raised here is fatal for the run: the entry point logs the
message and exits non-zero before any metric line is written.

 - ConfigurationError: invalid agent URL, config file or hostname
 - TransportError: connection, DNS, read failures and timeouts
 - ProtocolError: HTTP status other than 200
 - PayloadError: body is not a JSON object
 - RemoteError: agent reported a failure inside the document
"""


class CollectorError(Exception):
    """Base collector error (do not raise directly)."""


class ConfigurationError(CollectorError):
    """Invalid configuration detected before any network activity."""


class TransportError(CollectorError):
    """Request could not be completed."""


class ProtocolError(CollectorError):
    """Agent answered with a non-200 HTTP status."""

    def __init__(self, url: str, status_code: int, reason: str = ""):
        self.url = url
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"{url} {status_code} {reason}".rstrip())


class PayloadError(CollectorError):
    """Response body could not be decoded."""


class RemoteError(CollectorError):
    """Agent reported an error status or error message."""

    def __init__(self, message: str, status: int, error_type: str = None, stacktrace: str = None):
        self.status = status
        self.error_type = error_type
        self.stacktrace = stacktrace
        super().__init__(message)


__all__ = [
    "CollectorError",
    "ConfigurationError",
    "TransportError",
    "ProtocolError",
    "PayloadError",
    "RemoteError",
]
