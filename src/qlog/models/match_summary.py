"""Pydantic v2 models for match summaries and cross-match totals.

MatchSummaryModel validates that kill totals agree with their breakdowns
and that the scoreboard is in descending score order.
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing_extensions import Self

from qlog.means_of_death import MeansOfDeath

from .player_summary import PlayerSummaryModel, ScoreboardEntryModel


class MatchSummaryModel(BaseModel):
    """Everything the report renders for one completed match."""

    ordinal: int = Field(gt=0)
    map_name: str | None = None
    end_reason: str
    started_at: str | None = None
    ended_at: str | None = None
    total_kills: int = Field(ge=0)
    kills_by_cause: dict[str, int] = Field(default_factory=dict)
    players: list[PlayerSummaryModel] = Field(default_factory=list)
    scoreboard: list[ScoreboardEntryModel] = Field(default_factory=list)

    @field_validator("kills_by_cause")
    @classmethod
    def validate_cause_names(cls, v: dict[str, int]) -> dict[str, int]:
        """Cause keys must be MeansOfDeath names with non-negative counts."""
        for cause, count in v.items():
            if cause not in MeansOfDeath.__members__:
                raise ValueError(f"unknown cause of death '{cause}'")
            if count < 0:
                raise ValueError(f"negative kill count for {cause}: {count}")
        return v

    @model_validator(mode="after")
    def check_kill_totals(self) -> Self:
        """total_kills must equal the sum of the per-cause breakdown."""
        breakdown = sum(self.kills_by_cause.values())
        if breakdown != self.total_kills:
            raise ValueError(
                f"kills_by_cause sums to {breakdown}, "
                f"total_kills is {self.total_kills}"
            )
        return self

    @model_validator(mode="after")
    def check_scoreboard_order(self) -> Self:
        """Scoreboard entries must be sorted by descending score."""
        scores = [entry.score for entry in self.scoreboard]
        if scores != sorted(scores, reverse=True):
            raise ValueError(f"scoreboard not in descending order: {scores}")
        return self


class OverallTotalsModel(BaseModel):
    """Kill sums across every match in one log."""

    matches: int = Field(ge=0)
    kills_by_cause: dict[str, int] = Field(default_factory=dict)
    kills_by_player: dict[str, int] = Field(default_factory=dict)
