"""Match accumulator: folds classified events into per-match state.

Provides:
- fold: ``(current match, event) -> (current match, completed match)``
- finish: end-of-input handling for a match that never saw Exit/Shutdown
- apply_scoreboard: scoreboard update shared with the pipeline driver

The current match is threaded through explicitly; there is no module-level
state.  A match returned as completed is no longer referenced by the
returned current slot.
"""

import logging

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
from qlog.state import EndReason, ItemPickupRecord, KillEvent, Match

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = ParserConfig()


def apply_scoreboard(match: Match, event: Scoreboard) -> None:
    """Record a scoreboard line's final score, ping and name on ``match``."""
    player = match.ensure_player(event.client_id)
    player.final_score = event.score
    player.ping = event.ping
    if player.name != event.name:
        player.rename(event.name)


def _apply_kill(match: Match, event: Kill, world_id: int) -> None:
    if event.killer_id != world_id:
        match.ensure_player(event.killer_id)

    match.kills.append(
        KillEvent(
            killer_id=event.killer_id,
            victim_id=event.victim_id,
            cause=event.cause,
            timestamp=event.timestamp,
        )
    )
    if event.victim_id != world_id:
        match.ensure_player(event.victim_id).deaths += 1

    # World kills and suicides only count against the victim
    if event.killer_id != world_id and event.killer_id != event.victim_id:
        match.players[event.killer_id].kills += 1


def fold(
    current: Match | None,
    event: Event,
    config: ParserConfig | None = None,
) -> tuple[Match | None, Match | None]:
    """Fold one event into the in-progress match.

    Args:
        current: The open match, or None if no match is open.
        event: One event from ``classify``.
        config: Parser configuration (world sentinel id).  Defaults to
            ``ParserConfig()``.

    Returns:
        Tuple of (open match after the event, completed match or None).
        Only a MatchEnd on an open match returns a completed match.
    """
    config = config or _DEFAULT_CONFIG

    if isinstance(event, MatchStart):
        if current is not None:
            logger.warning(
                "InitGame at %s while a match is open (started %s, %d kills); "
                "discarding the unfinished match",
                event.timestamp, current.started_at, current.total_kills,
            )
        return Match(settings=dict(event.settings), started_at=event.timestamp), None

    if current is None:
        logger.debug("No open match, dropping %s", type(event).__name__)
        return None, None

    if isinstance(event, MatchEnd):
        current.close(event.reason, event.timestamp)
        return None, current

    if isinstance(event, ClientConnect):
        current.ensure_player(event.client_id).connected = True
    elif isinstance(event, ClientBegin):
        current.ensure_player(event.client_id)
    elif isinstance(event, ClientDisconnect):
        current.ensure_player(event.client_id).connected = False
    elif isinstance(event, UserInfo):
        player = current.ensure_player(event.client_id)
        player.rename(event.name)
        if event.team is not None:
            player.team = event.team
    elif isinstance(event, ItemPickup):
        player = current.ensure_player(event.client_id)
        player.items_collected[event.item_code] = (
            player.items_collected.get(event.item_code, 0) + 1
        )
        current.item_log.append(
            ItemPickupRecord(
                client_id=event.client_id,
                item_code=event.item_code,
                timestamp=event.timestamp,
            )
        )
    elif isinstance(event, Kill):
        _apply_kill(current, event, config.world_id)
    elif isinstance(event, Scoreboard):
        apply_scoreboard(current, event)
    else:
        raise TypeError(f"Unknown event type: {type(event).__name__}")

    return current, None


def finish(current: Match | None, config: ParserConfig | None = None) -> Match | None:
    """Resolve a match still open when the input ends.

    Returns the match closed as ``EndReason.UNTERMINATED`` when
    ``config.keep_unterminated`` is set, otherwise None (the match is
    dropped).
    """
    config = config or _DEFAULT_CONFIG
    if current is None:
        return None
    if not config.keep_unterminated:
        logger.info(
            "Dropping unterminated match started at %s (%d kills)",
            current.started_at, current.total_kills,
        )
        return None
    current.close(EndReason.UNTERMINATED)
    return current
