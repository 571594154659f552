"""Command line entry point for the Cassandra table metrics collector.

Reads every ColumnFamily metric bean from the Jolokia agent running in the
Cassandra JVM and prints them as line protocol for the Telegraf exec input.
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional

from .collectors.cassandra_collector import CassandraTableCollector
from .collectors.errors import CollectorError
from .config.loader import ConfigLoader
from .config.models import CollectorConfig, DEFAULT_JOLOKIA_URL
from .services.line_writer import LineWriter
from .utils.logger import setup_logger


__version__ = "1.0.0"


class TableStatsApp:
    """
    One-shot collection run.

    Collects all table metrics, then writes them, so a fatal error never
    leaves partial output behind.
    """

    def __init__(
        self,
        config: CollectorConfig,
        logger: logging.Logger,
        writer: Optional[LineWriter] = None
    ):
        """
        Initialize application.

        Args:
            config: Resolved configuration
            logger: Logger instance
            writer: Output writer, stdout by default
        """
        self.config = config
        self.logger = logger
        self.writer = writer or LineWriter()
        self.collector = CassandraTableCollector(config, logger)

    async def run_once(self) -> int:
        """
        Execute one collection cycle.

        Returns:
            int: Number of lines written

        Raises:
            CollectorError: On any fatal collection error
        """
        lines = await self.collector.collect()
        count = self.writer.write(lines)
        self.logger.debug(f"Wrote {count} lines")
        return count


def build_parser(prog: str) -> argparse.ArgumentParser:
    """Command line parser; unset flags stay None so other sources apply."""
    parser = argparse.ArgumentParser(
        prog=prog,
        description='A telegraf input plugin that gathers metrics for every keyspace and table',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Read from the local agent, log to stderr
  cassandra-tablestats --stderr

  # Drop beans that only report zeros and skip two more metrics
  cassandra-tablestats --skip-zeros --skip CompressionRatio,RowCacheMiss

  # Use a config file, environment variables fill in ${VARS}
  cassandra-tablestats --config /etc/telegraf/tablestats.yaml
        """
    )

    parser.add_argument(
        '--name',
        help=f'Check name (default: {prog})'
    )

    parser.add_argument(
        '--jolokia',
        help=f'The base URL of the jolokia agent running on Cassandra JVM (default: {DEFAULT_JOLOKIA_URL})'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        default=None,
        help='If set, enables debug logs'
    )

    parser.add_argument(
        '--stderr',
        action='store_true',
        default=None,
        help='If set, enables logging to stderr instead of syslog'
    )

    parser.add_argument(
        '--skip-zeros',
        dest='skip_zeros',
        action='store_true',
        default=None,
        help='If set, it will not output metrics that only have zeros'
    )

    parser.add_argument(
        '--skip',
        action='append',
        help='CSV with metric names to skip collection (repeatable)'
    )

    parser.add_argument(
        '--timeout',
        type=float,
        help='HTTP timeout in seconds (default: wait indefinitely)'
    )

    parser.add_argument(
        '--config',
        help='Optional YAML configuration file'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser


def main(argv: Optional[List[str]] = None):
    """
    CLI entry point.

    Exit codes: 0 on success (also when nothing is printed), 1 on any
    fatal error, 2 on invalid arguments.
    """
    prog = os.path.basename(sys.argv[0]) or "cassandra-tablestats"
    args = build_parser(prog).parse_args(argv)

    overrides = {
        "name": args.name,
        "jolokia": args.jolokia,
        "debug": args.debug,
        "stderr": args.stderr,
        "skip_zeros": args.skip_zeros,
        "skip": args.skip,
        "timeout": args.timeout,
    }

    try:
        config = ConfigLoader.resolve(prog, config_path=args.config, overrides=overrides)
    except CollectorError as e:
        setup_logger(prog, use_stderr=True).error(str(e), extra={"error_type": type(e).__name__})
        sys.exit(1)

    try:
        logger = setup_logger(prog, debug=config.debug, use_stderr=config.stderr)
    except OSError as e:
        setup_logger(prog, use_stderr=True).error(f"Failed to set up syslog logging: {e}")
        sys.exit(1)

    logger.debug(
        f"Collecting from {config.jolokia} as {config.name} "
        f"(skip_zeros={config.skip_zeros}, skip={','.join(config.skip)})"
    )

    app = TableStatsApp(config, logger)
    try:
        asyncio.run(app.run_once())
    except CollectorError as e:
        logger.error(str(e), extra={"error_type": type(e).__name__})
        sys.exit(1)


if __name__ == '__main__':
    main()
