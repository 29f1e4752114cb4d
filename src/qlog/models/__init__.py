"""Pydantic v2 models for per-match report summaries.

Re-exports all model classes for convenient import::

    from qlog.models import MatchSummaryModel, PlayerSummaryModel, ...
"""

from .match_summary import MatchSummaryModel, OverallTotalsModel
from .player_summary import PlayerSummaryModel, ScoreboardEntryModel

__all__ = [
    "MatchSummaryModel",
    "OverallTotalsModel",
    "PlayerSummaryModel",
    "ScoreboardEntryModel",
]
