"""Custom exception hierarchy for the game log parser.

Exception tree:
    QLogError
    +-- LogSourceError  (log file missing or unreadable; fatal)
    +-- ConfigError     (invalid ParserConfig value)

Malformed lines and orphan events are not errors at this level: the
classifier and accumulator absorb them and carry on with the next line.
"""

from pathlib import Path
from typing import Optional


class QLogError(Exception):
    """Base exception for all log parser errors."""

    def __init__(self, message: str, *, path: Optional[Path] = None):
        self.path = path
        super().__init__(message)


class LogSourceError(QLogError):
    """The log source could not be opened or read.

    Fatal -- nothing downstream runs when this is raised.
    """

    pass


class ConfigError(QLogError):
    """A ParserConfig field holds a value the parser cannot use."""

    pass
