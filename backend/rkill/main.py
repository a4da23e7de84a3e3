"""Command line entry point.

Usage:
    rkill 1234 7777 nc      # kill processes by PID or name
    rkill :1234 :7777       # kill processes by port number
"""
import argparse
import asyncio
import logging
import sys
from typing import List, Optional
from rkill import __version__
from rkill.config import settings
from rkill.services.target_resolver import kill_targets
from rkill.utils.helpers import format_outcome, exit_code, normalize_signal

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=settings.APP_NAME,
        description="Kill processes by PID, name or the port they hold.",
        epilog=(
            "examples:\n"
            "  rkill 1234 7777 nc    # to kill processes by PID or name\n"
            "  rkill :1234 :7777     # to kill processes by port number"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("targets", nargs="*", help="PID, process name or :PORT")
    parser.add_argument(
        "-s",
        "--signal",
        default=None,
        help=f"signal to send (default: {settings.KILL_SIGNAL})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.LOG_LEVEL),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not args.targets:
        parser.print_help()
        return 0

    kill_signal = None
    if args.signal:
        try:
            kill_signal = normalize_signal(args.signal)
        except ValueError as e:
            parser.error(str(e))

    logger.debug(f"Targets: {args.targets} (signal {kill_signal or settings.KILL_SIGNAL})")
    outcomes = asyncio.run(kill_targets(args.targets, kill_signal=kill_signal))
    for outcome in outcomes:
        print(format_outcome(outcome))

    return exit_code(outcomes)


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
