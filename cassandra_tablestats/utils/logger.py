"""Structured JSON logging configuration."""

import logging
import logging.handlers
import os
import sys
from pythonjsonlogger import jsonlogger


SYSLOG_SOCKET = "/dev/log"


def _syslog_handler(ident: str) -> logging.Handler:
    """Create a daemon-facility syslog handler, falling back to UDP localhost."""
    address = SYSLOG_SOCKET if os.path.exists(SYSLOG_SOCKET) else ("localhost", 514)
    handler = logging.handlers.SysLogHandler(
        address=address,
        facility=logging.handlers.SysLogHandler.LOG_DAEMON
    )
    handler.ident = f"{ident}: "
    return handler


def setup_logger(
    name: str = "cassandra_tablestats",
    debug: bool = False,
    use_stderr: bool = False
) -> logging.Logger:
    """
    Configure structured JSON logging.

    Standard output carries the metric lines, so records go either to
    stderr or to syslog.

    Args:
        name: Logger name, also the syslog ident
        debug: Enable DEBUG level and source locations
        use_stderr: Log to stderr instead of syslog

    Returns:
        logging.Logger: Configured logger instance

    Raises:
        OSError: If the syslog socket cannot be opened
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    # Remove existing handlers to avoid duplicates
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()

    if use_stderr:
        handler = logging.StreamHandler(sys.stderr)
    else:
        handler = _syslog_handler(name)

    fmt = '%(asctime)s %(name)s %(levelname)s %(message)s'
    if debug:
        fmt = '%(asctime)s %(name)s %(levelname)s %(filename)s %(lineno)d %(message)s'
    formatter = jsonlogger.JsonFormatter(fmt, timestamp=True)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # Don't propagate to root logger
    logger.propagate = False

    return logger
