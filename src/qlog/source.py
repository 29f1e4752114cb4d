"""Filesystem line source for server logs.

Reads a log as text lines in file order.  Plain ``games.log`` files and
gzip-compressed archives (``*.gz``) are both accepted::

    lines = read_log_lines("resources/qgames.log.txt")
    lines = read_log_lines("archive/games-2024-05-01.log.gz")
"""

import gzip
import logging
from pathlib import Path

from qlog.exceptions import LogSourceError

logger = logging.getLogger(__name__)


def read_log_lines(path: str | Path) -> list[str]:
    """Read every line of a log file.

    Undecodable bytes are replaced rather than rejected; the classifier
    skips any line they make unrecognizable.

    Args:
        path: Path to a text log, or a gzip-compressed one ending in ``.gz``.

    Returns:
        List of lines without line terminators.

    Raises:
        LogSourceError: If the file is missing, is a directory, or cannot
            be read or decompressed.
    """
    path = Path(path)
    if not path.is_file():
        raise LogSourceError(f"Log file not found: {path}", path=path)

    try:
        if path.suffix == ".gz":
            raw = gzip.decompress(path.read_bytes())
        else:
            raw = path.read_bytes()
    except (OSError, EOFError) as e:
        raise LogSourceError(f"Cannot read log file {path}: {e}", path=path) from e

    lines = raw.decode("utf-8", errors="replace").splitlines()
    logger.debug("Read %d lines from %s", len(lines), path)
    return lines
