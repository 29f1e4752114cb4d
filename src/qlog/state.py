"""Per-match state rebuilt from the log.

Provides:
- Player: per-client counters for one match
- KillEvent, ItemPickupRecord: immutable log entries
- Match: the single mutable target the accumulator folds events into
- EndReason: why a match closed

Client ids are scoped to one Match; the server reuses them across matches.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum

from qlog.means_of_death import MeansOfDeath


class EndReason(str, Enum):
    """How a match was closed."""

    TIMELIMIT = "timelimit"
    FRAGLIMIT = "fraglimit"
    CAPTURELIMIT = "capturelimit"
    SHUTDOWN = "shutdown"
    UNSPECIFIED = "unspecified"  # Exit line matched no known reason
    UNTERMINATED = "unterminated"  # input ended while the match was open


@dataclass
class Player:
    """One client's identity and counters within a single match."""

    client_id: int
    name: str | None = None
    kills: int = 0
    deaths: int = 0
    items_collected: dict[str, int] = field(default_factory=dict)
    final_score: int | None = None
    ping: int | None = None
    team: int | None = None
    connected: bool = True
    old_names: list[str] = field(default_factory=list)

    def rename(self, name: str) -> None:
        """Set the display name, remembering the previous one."""
        if self.name is not None and name != self.name and self.name not in self.old_names:
            self.old_names.append(self.name)
        self.name = name


@dataclass(frozen=True)
class KillEvent:
    killer_id: int
    victim_id: int
    cause: MeansOfDeath
    timestamp: str | None = None


@dataclass(frozen=True)
class ItemPickupRecord:
    client_id: int
    item_code: str
    timestamp: str | None = None


@dataclass
class Match:
    """Aggregates for one match, from ``InitGame`` to ``Exit``/``ShutdownGame``."""

    players: dict[int, Player] = field(default_factory=dict)
    kills: list[KillEvent] = field(default_factory=list)
    item_log: list[ItemPickupRecord] = field(default_factory=list)
    end_reason: EndReason | None = None
    started: bool = True
    settings: dict[str, str] = field(default_factory=dict)
    started_at: str | None = None
    ended_at: str | None = None
    ordinal: int | None = None  # 1-based position among emitted matches

    def ensure_player(self, client_id: int) -> Player:
        """Return the Player for ``client_id``, creating it on first sight."""
        player = self.players.get(client_id)
        if player is None:
            player = Player(client_id=client_id)
            self.players[client_id] = player
        return player

    def close(self, reason: EndReason, timestamp: str | None = None) -> None:
        if self.end_reason is not None:
            raise ValueError(f"Match already closed ({self.end_reason.value})")
        self.end_reason = reason
        self.ended_at = timestamp
        self.started = False

    @property
    def map_name(self) -> str | None:
        return self.settings.get("mapname")

    @property
    def total_kills(self) -> int:
        return len(self.kills)

    def kills_by_cause(self) -> dict[str, int]:
        """Kill counts per cause name, most frequent first (ties by name)."""
        counts = Counter(kill.cause.name for kill in self.kills)
        return dict(sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])))

    def scoreboard(self) -> list[Player]:
        """Players that reported a final score, highest score first."""
        scored = [p for p in self.players.values() if p.final_score is not None]
        return sorted(scored, key=lambda p: (-p.final_score, p.client_id))
