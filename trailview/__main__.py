#!/usr/bin/env python3
"""
Paper Trail TUI - A terminal user interface for browsing Papertrail log events
"""
import argparse
import curses
import logging
import sys
from pathlib import Path

from trailview.fetcher import BackgroundFetcher
from trailview.formatter import PayloadFormatter
from trailview.input_controller import CursesInputController
from trailview.output_controller import CursesOutputController
from trailview.settings import TOKEN_ENV_VAR, Settings
from trailview.source import (
    DEFAULT_TIMEOUT,
    LOG_LIMIT,
    PAPERTRAIL_URL,
    PapertrailSource,
)
from trailview.views.app import App

LOG_FILE = Path(__file__).parent / "trailview.log"

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s[%(process)d]: %(levelname)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.FileHandler(LOG_FILE, mode="a", encoding="utf-8"),
        ],
    )


def _init_app(stdscr: curses.window, settings: Settings) -> None:
    source = PapertrailSource(
        settings.token,
        url=settings.url,
        limit=settings.limit,
        timeout=settings.timeout,
    )
    logger.info("Starting viewer")
    try:
        with BackgroundFetcher(source) as fetcher:
            viewer = App(
                CursesOutputController(stdscr),
                CursesInputController(stdscr),
                fetcher,
                PayloadFormatter(colorize=settings.colorize),
                initial_query=settings.initial_query,
            )
            viewer.run()
    except KeyboardInterrupt:
        logger.info("KeyboardInterrupt")
    except BaseException as e:
        logger.exception("An error occurred")
        raise e
    finally:
        source.close()
        logger.info("Exiting viewer")


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser"""
    parser = argparse.ArgumentParser(
        prog="trailview",
        description="Paper Trail TUI - Browse Papertrail log events",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
    Examples:
      %(prog)s
      %(prog)s -q "severity:error"
      %(prog)s --limit 500 --no-color

    The access token is read from the {TOKEN_ENV_VAR} environment variable.

    Key Features:
      - Browse events with ↑/↓, PgUp/PgDn, Home/End
      - Pretty-printed JSON payload of the current event (scroll with j/k)
      - Resize the payload pane with +/-
      - Search Papertrail (press '/')
    """,
    )

    parser.add_argument(
        "-q", "--query", default="", help="Search query to start with"
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=LOG_LIMIT,
        help="Maximum number of events fetched per search",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="Seconds to wait for the search API",
    )
    parser.add_argument("--url", default=PAPERTRAIL_URL, help="Search API endpoint")
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Do not color the payload",
    )
    return parser


def main() -> None:
    """Main entry point"""
    parser = build_parser()
    args = parser.parse_args()

    try:
        settings = Settings.from_args(args)
    except ValueError as e:
        parser.error(str(e))

    _configure_logging()
    try:
        curses.wrapper(_init_app, settings)
    except curses.error as e:
        print(f"Error: terminal failure: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
