"""Typed events produced by the line classifier.

Each recognized log line becomes exactly one of the frozen dataclasses
below.  ``Event`` is the union of all of them; the accumulator dispatches
on the concrete type.
"""

from dataclasses import dataclass, field

from qlog.means_of_death import MeansOfDeath
from qlog.state import EndReason


@dataclass(frozen=True)
class MatchStart:
    """``InitGame:`` -- a new match begins."""

    settings: dict[str, str] = field(default_factory=dict)
    timestamp: str | None = None


@dataclass(frozen=True)
class MatchEnd:
    """``Exit:`` or ``ShutdownGame:`` -- the current match closes."""

    reason: EndReason
    timestamp: str | None = None


@dataclass(frozen=True)
class ClientConnect:
    client_id: int
    timestamp: str | None = None


@dataclass(frozen=True)
class ClientBegin:
    client_id: int
    timestamp: str | None = None


@dataclass(frozen=True)
class ClientDisconnect:
    client_id: int
    timestamp: str | None = None


@dataclass(frozen=True)
class UserInfo:
    """``ClientUserinfoChanged:`` -- name (and team) for a client."""

    client_id: int
    name: str
    team: int | None = None
    timestamp: str | None = None


@dataclass(frozen=True)
class ItemPickup:
    client_id: int
    item_code: str
    timestamp: str | None = None


@dataclass(frozen=True)
class Kill:
    """``Kill: <killer> <victim> <mod>`` -- killer may be the world sentinel."""

    killer_id: int
    victim_id: int
    cause: MeansOfDeath
    timestamp: str | None = None


@dataclass(frozen=True)
class Scoreboard:
    """``score: <s>  ping: <p>  client: <c> <name>`` end-of-match line."""

    client_id: int
    score: int
    ping: int
    name: str
    timestamp: str | None = None


Event = (
    MatchStart
    | MatchEnd
    | ClientConnect
    | ClientBegin
    | ClientDisconnect
    | UserInfo
    | ItemPickup
    | Kill
    | Scoreboard
)
