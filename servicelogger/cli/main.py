"""servicelogger: manage OCM service logs from the terminal."""

from __future__ import annotations

import argparse
import sys

from dotenv import find_dotenv, load_dotenv

from servicelogger import __version__
from servicelogger.cli.send import add_send_parser
from servicelogger.config.loader import load_file_config
from servicelogger.errors import ServiceLoggerError
from servicelogger.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="servicelogger", description="Send OCM service logs to clusters.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", help="log level override (falls back to $SERVICELOGGER_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_send_parser(subparsers)
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the servicelogger CLI."""
    load_dotenv(find_dotenv(usecwd=True))
    args = build_parser().parse_args(argv)

    try:
        args.file_config = load_file_config()
        setup_logging(args.log_level, default=args.file_config.log_level)
        code = args.handler(args)
    except ServiceLoggerError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print(file=sys.stderr)
        sys.exit(130)

    sys.exit(code)
