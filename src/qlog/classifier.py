"""Line classifier for Quake III Arena server logs.

Provides:
- classify: pure function turning one raw log line into an Event or None
- parse_info_string: ``\\key\\value`` segment parser used by InitGame and
  ClientUserinfoChanged lines

A line is an optional ``M:SS`` timestamp followed by a body.  The body is
matched against a fixed, ordered table of (marker, extractor) rules; the
first marker found at the start of the body decides the event type.

Extractors raise ``ValueError`` on missing or non-numeric fields.
``classify`` turns that into ``None`` so a bad line only costs that line.
"""

import logging
import re
from typing import Callable

from qlog.config import ParserConfig
from qlog.events import (
    ClientBegin,
    ClientConnect,
    ClientDisconnect,
    Event,
    ItemPickup,
    Kill,
    MatchEnd,
    MatchStart,
    Scoreboard,
    UserInfo,
)
from qlog.means_of_death import MeansOfDeath
from qlog.state import EndReason

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = ParserConfig()

# "  0:00 InitGame: ..." / "981:27 Kill: ..." / "Kill: ..." (no timestamp)
_LINE_RE = re.compile(r"^\s*(?:(?P<timestamp>\d{1,4}:\d{2})\s+)?(?P<body>.*?)\s*$")

_SCORE_RE = re.compile(
    r"^(?P<score>\S+)\s+ping:\s*(?P<ping>\S+)\s+client:\s*(?P<client>\S+)\s+(?P<name>.*\S)$"
)
_NAME_RE = re.compile(r"(?:^|\\)n\\([^\\]+)")
_TEAM_RE = re.compile(r"(?:^|\\)t\\([^\\]*)")

Extractor = Callable[[str, "str | None", ParserConfig], "Event"]


def parse_info_string(info: str) -> dict[str, str]:
    """Parse a ``\\key\\value\\key\\value`` segment into a dict.

    Leading backslash is optional.  A trailing key without a value is
    ignored.

    Examples:
        >>> parse_info_string(r"\\mapname\\q3dm17\\fraglimit\\20")
        {'mapname': 'q3dm17', 'fraglimit': '20'}
    """
    parts = info.strip().lstrip("\\").split("\\")
    return {parts[i]: parts[i + 1] for i in range(0, len(parts) - 1, 2) if parts[i]}


def _client_id(token: str) -> int:
    value = int(token)
    if value < 0:
        raise ValueError(f"negative client id: {value}")
    return value


def _first_token(rest: str, what: str) -> str:
    tokens = rest.split()
    if not tokens:
        raise ValueError(f"missing {what}")
    return tokens[0]


# ---------------------------------------------------------------------------
# Extractors: (rest of body after marker, timestamp, config) -> Event
# ---------------------------------------------------------------------------

def _init_game(rest: str, timestamp: str | None, config: ParserConfig) -> Event:
    settings = parse_info_string(rest) if rest.startswith("\\") else {}
    return MatchStart(settings=settings, timestamp=timestamp)


def _shutdown_game(rest: str, timestamp: str | None, config: ParserConfig) -> Event:
    return MatchEnd(reason=EndReason.SHUTDOWN, timestamp=timestamp)


def _userinfo_changed(rest: str, timestamp: str | None, config: ParserConfig) -> Event:
    client_token, _, info = rest.partition(" ")
    client_id = _client_id(client_token)

    name_match = _NAME_RE.search(info)
    if name_match is None:
        raise ValueError("userinfo has no n\\ key")

    team = None
    team_match = _TEAM_RE.search(info)
    if team_match is not None and team_match.group(1).isdigit():
        team = int(team_match.group(1))

    return UserInfo(
        client_id=client_id, name=name_match.group(1), team=team, timestamp=timestamp
    )


def _client_connect(rest: str, timestamp: str | None, config: ParserConfig) -> Event:
    return ClientConnect(client_id=_client_id(_first_token(rest, "client id")), timestamp=timestamp)


def _client_begin(rest: str, timestamp: str | None, config: ParserConfig) -> Event:
    return ClientBegin(client_id=_client_id(_first_token(rest, "client id")), timestamp=timestamp)


def _client_disconnect(rest: str, timestamp: str | None, config: ParserConfig) -> Event:
    return ClientDisconnect(
        client_id=_client_id(_first_token(rest, "client id")), timestamp=timestamp
    )


def _item(rest: str, timestamp: str | None, config: ParserConfig) -> Event:
    tokens = rest.split()
    if len(tokens) < 2:
        raise ValueError("Item line needs a client id and an item code")
    return ItemPickup(client_id=_client_id(tokens[0]), item_code=tokens[1], timestamp=timestamp)


def _kill(rest: str, timestamp: str | None, config: ParserConfig) -> Event:
    # "1022 2 22: <world> killed Isgalamido by MOD_TRIGGER_HURT"
    numbers = rest.split(":", 1)[0].split()
    if len(numbers) < 3:
        raise ValueError(f"Kill line needs 3 numbers, got {len(numbers)}")
    return Kill(
        killer_id=_client_id(numbers[0]),
        victim_id=_client_id(numbers[1]),
        cause=MeansOfDeath.from_code(numbers[2]),
        timestamp=timestamp,
    )


def _exit(rest: str, timestamp: str | None, config: ParserConfig) -> Event:
    return MatchEnd(reason=config.exit_reason_for(rest), timestamp=timestamp)


def _score(rest: str, timestamp: str | None, config: ParserConfig) -> Event:
    match = _SCORE_RE.match(rest)
    if match is None:
        raise ValueError("score line missing ping:/client:/name fields")
    ping = int(match.group("ping"))
    if ping < 0:
        raise ValueError(f"negative ping: {ping}")
    return Scoreboard(
        client_id=_client_id(match.group("client")),
        score=int(match.group("score")),
        ping=ping,
        name=match.group("name"),
        timestamp=timestamp,
    )


# Order matters: first marker matching the start of the body wins.
_RULES: tuple[tuple[str, re.Pattern, Extractor], ...] = (
    ("InitGame", re.compile(r"InitGame\b"), _init_game),
    ("ShutdownGame", re.compile(r"ShutdownGame\b"), _shutdown_game),
    ("ClientUserinfoChanged", re.compile(r"ClientUserinfoChanged\b"), _userinfo_changed),
    ("ClientConnect", re.compile(r"ClientConnect\b"), _client_connect),
    ("ClientBegin", re.compile(r"ClientBegin\b"), _client_begin),
    ("ClientDisconnect", re.compile(r"ClientDisconnect\b"), _client_disconnect),
    ("Item", re.compile(r"Item\b"), _item),
    ("Kill", re.compile(r"Kill\b"), _kill),
    ("Exit", re.compile(r"Exit\b"), _exit),
    ("score", re.compile(r"score\b"), _score),
)


def split_line(line: str) -> tuple[str | None, str]:
    """Split a raw line into ``(timestamp, body)``; timestamp may be None."""
    match = _LINE_RE.match(line)
    # _LINE_RE matches any string without newlines; guard the rest
    if match is None:
        return None, line.strip()
    return match.group("timestamp"), match.group("body")


def classify(line: str, config: ParserConfig | None = None) -> Event | None:
    """Classify one raw log line.

    Pure function: the same line and config always give an equal result.
    Never raises for line content.

    Args:
        line: Raw log line, with or without trailing newline.
        config: Parser configuration (exit-reason policy).  Defaults to
            ``ParserConfig()``.

    Returns:
        The Event for the line, or None if the line is unrecognized or a
        recognized marker is missing a field.
    """
    config = config or _DEFAULT_CONFIG
    timestamp, body = split_line(line)
    if not body:
        return None

    for marker, pattern, extractor in _RULES:
        match = pattern.match(body)
        if match is None:
            continue
        rest = body[match.end():].lstrip()
        rest = rest[1:].lstrip() if rest.startswith(":") else rest
        try:
            return extractor(rest, timestamp, config)
        except ValueError as e:
            logger.debug("Skipping malformed %s line %r: %s", marker, line, e)
            return None

    return None
