"""Driver wiring the line source, classifier and accumulator together.

Provides:

* **MatchLogParser** -- single-pass driver that classifies each line, folds
  the resulting event and collects completed matches, keeping per-run
  counters for the end-of-run log line.
* **parse_lines** / **parse_file** -- convenience wrappers.
* **overall_totals** -- kill sums across all parsed matches.

Stock servers print the final ``score:`` lines *after* ``Exit:`` has closed
the match and before ``ShutdownGame:``.  With
``ParserConfig.attach_trailing_scoreboard`` enabled those lines are applied
to the match that ``Exit:`` just emitted, until the next ``InitGame:`` or
``ShutdownGame:``.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from qlog.accumulator import apply_scoreboard, finish, fold
from qlog.classifier import classify
from qlog.config import ParserConfig
from qlog.events import MatchEnd, MatchStart, Scoreboard
from qlog.source import read_log_lines
from qlog.state import Match

logger = logging.getLogger(__name__)


@dataclass
class ParseStats:
    """Counters for one parse run."""

    lines_read: int = 0
    events: int = 0
    skipped_lines: int = 0
    orphan_events: int = 0
    discarded_matches: int = 0
    trailing_scores: int = 0
    completed_matches: int = 0


class MatchLogParser:
    """Fold a stream of log lines into completed matches.

    Usage::

        parser = MatchLogParser(ParserConfig())
        matches = parser.parse(lines)
        print(parser.stats.skipped_lines)

    Each call to ``parse`` starts from a clean state.
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        self.config = config or ParserConfig()
        self.stats = ParseStats()

    def parse(self, lines: Iterable[str]) -> list[Match]:
        """Parse lines in order and return completed matches in close order."""
        self.stats = ParseStats()
        completed: list[Match] = []
        current: Match | None = None
        # Last emitted match still accepting trailing score: lines
        scoreboard_target: Match | None = None

        for line in lines:
            self.stats.lines_read += 1
            event = classify(line, self.config)
            if event is None:
                if line.strip():
                    self.stats.skipped_lines += 1
                continue
            self.stats.events += 1

            if isinstance(event, MatchStart):
                scoreboard_target = None
                if current is not None:
                    self.stats.discarded_matches += 1

            if current is None and not isinstance(event, MatchStart):
                if (
                    isinstance(event, Scoreboard)
                    and scoreboard_target is not None
                    and self.config.attach_trailing_scoreboard
                ):
                    apply_scoreboard(scoreboard_target, event)
                    self.stats.trailing_scores += 1
                    continue
                if isinstance(event, MatchEnd):
                    scoreboard_target = None
                self.stats.orphan_events += 1

            current, done = fold(current, event, self.config)
            if done is not None:
                self._emit(done, completed)
                scoreboard_target = done

        leftover = finish(current, self.config)
        if leftover is not None:
            self._emit(leftover, completed)
        elif current is not None:
            self.stats.discarded_matches += 1

        logger.info(
            "Parsed %d lines: %d events, %d skipped, %d orphan, "
            "%d matches completed, %d discarded",
            self.stats.lines_read,
            self.stats.events,
            self.stats.skipped_lines,
            self.stats.orphan_events,
            self.stats.completed_matches,
            self.stats.discarded_matches,
        )
        return completed

    def _emit(self, match: Match, completed: list[Match]) -> None:
        match.ordinal = len(completed) + 1
        completed.append(match)
        self.stats.completed_matches += 1
        logger.debug(
            "Match %d closed (%s): %d players, %d kills",
            match.ordinal,
            match.end_reason.value if match.end_reason else None,
            len(match.players),
            match.total_kills,
        )


def parse_lines(
    lines: Iterable[str], config: ParserConfig | None = None
) -> list[Match]:
    """Parse an iterable of log lines into completed matches."""
    return MatchLogParser(config).parse(lines)


def parse_file(
    path: str | Path, config: ParserConfig | None = None
) -> list[Match]:
    """Read and parse a log file.

    Raises:
        LogSourceError: If the file cannot be read.
    """
    return parse_lines(read_log_lines(path), config)


def overall_totals(matches: Iterable[Match]) -> dict[str, dict[str, int]]:
    """Sum kills across matches.

    Returns:
        Dict with ``kills_by_cause`` (cause name -> kills) and
        ``kills_by_player`` (player name -> kills; players without a name
        are keyed ``client <id>``), each sorted by count descending then key.
    """
    by_cause: Counter[str] = Counter()
    by_player: Counter[str] = Counter()

    for match in matches:
        by_cause.update(kill.cause.name for kill in match.kills)
        for player in match.players.values():
            if player.kills:
                by_player[player.name or f"client {player.client_id}"] += player.kills

    def _ordered(counter: Counter) -> dict[str, int]:
        return dict(sorted(counter.items(), key=lambda kv: (-kv[1], kv[0])))

    return {
        "kills_by_cause": _ordered(by_cause),
        "kills_by_player": _ordered(by_player),
    }
