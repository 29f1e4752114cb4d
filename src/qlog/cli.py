"""CLI entry point for the game log parser.

Provides ``main()`` as the entry point for the ``qlog`` console script and
``run(args)`` which sets up logging, parses the log and prints the report.

Usage::

    qlog                                  # parse resources/qgames.log.txt
    qlog games.log                        # parse another log
    qlog games.log.gz --json              # JSON instead of text
    qlog games.log --log-dir data/logs -v # debug log file + verbose console
"""

import argparse
import logging
import sys

from qlog.config import DEFAULT_LOG_PATH, ParserConfig
from qlog.exceptions import LogSourceError
from qlog.logging_config import setup_logging
from qlog.pipeline import parse_file
from qlog.report import render_json, render_text, summarize_match, summarize_totals

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the qlog CLI."""
    parser = argparse.ArgumentParser(
        prog="qlog",
        description="Summarize matches from a Quake III Arena server log",
    )
    parser.add_argument(
        "log_file",
        nargs="?",
        default=DEFAULT_LOG_PATH,
        help=f"Path to the server log, plain or .gz (default: {DEFAULT_LOG_PATH})",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the summaries as JSON instead of a text report",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=None,
        help="Write a DEBUG log file to this directory (default: console only)",
    )
    parser.add_argument(
        "--drop-unterminated",
        action="store_true",
        help="Drop a match still open at end of input instead of reporting it",
    )
    parser.add_argument(
        "--no-trailing-scores",
        action="store_true",
        help="Ignore score: lines printed after Exit:",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show DEBUG messages on the console",
    )
    return parser


def run(args: argparse.Namespace) -> int:
    """Parse the log named in ``args`` and print the report.

    Returns:
        Process exit code: 0 on success, 1 if the log cannot be read.
    """
    log_file = setup_logging(
        log_dir=args.log_dir,
        console_level=logging.DEBUG if args.verbose else logging.WARNING,
    )
    config = ParserConfig(
        log_path=args.log_file,
        keep_unterminated=not args.drop_unterminated,
        attach_trailing_scoreboard=not args.no_trailing_scores,
    )
    logger.info("Parsing %s (log file: %s)", config.log_path, log_file)

    try:
        matches = parse_file(config.log_path, config)
    except LogSourceError as e:
        logger.error("%s", e)
        print(f"qlog: error: {e}", file=sys.stderr)
        return 1

    summaries = [summarize_match(m) for m in matches]
    totals = summarize_totals(matches)
    if args.json:
        print(render_json(summaries, totals))
    else:
        print(render_text(summaries, totals))
    return 0


def main(argv: list[str] | None = None) -> None:
    """Entry point for the qlog console script."""
    args = build_parser().parse_args(argv)
    try:
        code = run(args)
    finally:
        logging.shutdown()
    sys.exit(code)


if __name__ == "__main__":
    main()
