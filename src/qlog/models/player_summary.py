"""Pydantic v2 models for per-player rows of a match summary."""

from pydantic import BaseModel, Field


class PlayerSummaryModel(BaseModel):
    """Kill/death/item counters for one client in one match."""

    client_id: int = Field(ge=0)
    name: str | None = None
    kills: int = Field(ge=0)
    deaths: int = Field(ge=0)
    items_collected: dict[str, int] = Field(default_factory=dict)
    old_names: list[str] = Field(default_factory=list)
    team: int | None = None
    connected: bool = True


class ScoreboardEntryModel(BaseModel):
    """One ``score:`` line as reported at the end of a match."""

    client_id: int = Field(ge=0)
    name: str | None = None
    score: int  # Can be negative (suicides, world deaths)
    ping: int = Field(ge=0)
