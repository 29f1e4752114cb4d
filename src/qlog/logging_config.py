"""Logging configuration for the log parser CLI.

Console shows WARNING+ (DEBUG+ when verbose) with concise timestamps.  When
a log directory is given, a timestamped file captures DEBUG+ with full
timestamps and logger names.
"""

import logging
from datetime import datetime
from pathlib import Path

CONSOLE_FORMAT = "%(asctime)s %(levelname)-5s %(message)s"
CONSOLE_DATEFMT = "%H:%M:%S"
FILE_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"


def _make_handler(
    handler: logging.Handler, level: int, fmt: str, datefmt: str | None = None
) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def setup_logging(
    log_dir: str | None = None, console_level: int = logging.WARNING
) -> Path | None:
    """Install the CLI's handlers on the root logger.

    Any handlers already on the root logger are removed, so repeated calls
    (one per ``qlog`` run in tests) never duplicate output.

    Args:
        log_dir: Directory for ``run-{timestamp}.log``.  Created if missing.
            None disables file logging.
        console_level: Minimum level for console output.

    Returns:
        Path to the newly created log file, or None without ``log_dir``.
    """
    root = logging.getLogger()
    root.handlers.clear()
    # Level filtering happens per handler
    root.setLevel(logging.DEBUG)
    root.addHandler(
        _make_handler(logging.StreamHandler(), console_level, CONSOLE_FORMAT, CONSOLE_DATEFMT)
    )

    if log_dir is None:
        return None

    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    log_file = directory / f"run-{datetime.now():%Y-%m-%d-%H%M%S}.log"
    root.addHandler(
        _make_handler(
            logging.FileHandler(log_file, encoding="utf-8"), logging.DEBUG, FILE_FORMAT
        )
    )
    return log_file
