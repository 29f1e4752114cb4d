"""Report building and rendering for parsed matches.

Provides:
- summarize_match / summarize_totals: Match state -> validated pydantic models
- render_text: human-readable per-match report
- render_json: the same summaries as a JSON document

Output ordering is fully determined by the input: players by client id,
causes by count then name, scoreboard by score then client id.
"""

import json
from typing import Iterable

from qlog.models import (
    MatchSummaryModel,
    OverallTotalsModel,
    PlayerSummaryModel,
    ScoreboardEntryModel,
)
from qlog.pipeline import overall_totals
from qlog.state import Match


def summarize_match(match: Match) -> MatchSummaryModel:
    """Build the validated summary model for one completed match."""
    players = [
        PlayerSummaryModel(
            client_id=p.client_id,
            name=p.name,
            kills=p.kills,
            deaths=p.deaths,
            items_collected=dict(sorted(p.items_collected.items())),
            old_names=list(p.old_names),
            team=p.team,
            connected=p.connected,
        )
        for p in sorted(match.players.values(), key=lambda p: p.client_id)
    ]
    scoreboard = [
        ScoreboardEntryModel(
            client_id=p.client_id, name=p.name, score=p.final_score, ping=p.ping
        )
        for p in match.scoreboard()
    ]
    return MatchSummaryModel(
        ordinal=match.ordinal or 1,
        map_name=match.map_name,
        end_reason=match.end_reason.value if match.end_reason else "unterminated",
        started_at=match.started_at,
        ended_at=match.ended_at,
        total_kills=match.total_kills,
        kills_by_cause=match.kills_by_cause(),
        players=players,
        scoreboard=scoreboard,
    )


def summarize_totals(matches: list[Match]) -> OverallTotalsModel:
    totals = overall_totals(matches)
    return OverallTotalsModel(matches=len(matches), **totals)


def _player_label(name: str | None, client_id: int) -> str:
    return name if name else f"<client {client_id}>"


def _format_match(summary: MatchSummaryModel) -> list[str]:
    header = f"Match {summary.ordinal}"
    if summary.map_name:
        header += f" ({summary.map_name})"
    lines = [
        "=" * 60,
        header,
        "-" * 60,
        f"End reason:  {summary.end_reason}",
        f"Total kills: {summary.total_kills}",
    ]

    if summary.kills_by_cause:
        lines.append("Kills by cause:")
        for cause, count in summary.kills_by_cause.items():
            lines.append(f"  {cause:<22} {count}")

    if summary.players:
        lines.append("Players:")
        for p in summary.players:
            lines.append(
                f"  {p.client_id:>3} {_player_label(p.name, p.client_id):<20} "
                f"kills {p.kills:>3}  deaths {p.deaths:>3}"
            )
            if p.items_collected:
                items = ", ".join(f"{item} x{n}" for item, n in p.items_collected.items())
                lines.append(f"      items: {items}")

    if summary.scoreboard:
        lines.append("Scoreboard:")
        for entry in summary.scoreboard:
            lines.append(
                f"  score: {entry.score:>4}  ping: {entry.ping:>3}  "
                f"client: {entry.client_id:>3} {_player_label(entry.name, entry.client_id)}"
            )
    return lines


def render_text(
    summaries: Iterable[MatchSummaryModel],
    totals: OverallTotalsModel | None = None,
) -> str:
    """Render match summaries (and optional totals) as a text report."""
    lines: list[str] = []
    for summary in summaries:
        lines.extend(_format_match(summary))

    if totals is not None:
        lines.extend([
            "=" * 60,
            f"Overall ({totals.matches} matches)",
            "-" * 60,
        ])
        if totals.kills_by_cause:
            lines.append("Kills by cause:")
            for cause, count in totals.kills_by_cause.items():
                lines.append(f"  {cause:<22} {count}")
        if totals.kills_by_player:
            lines.append("Ranking:")
            for rank, (name, kills) in enumerate(totals.kills_by_player.items(), 1):
                lines.append(f"  {rank:>3}. {name:<20} {kills} kills")

    lines.append("=" * 60)
    return "\n".join(lines)


def render_json(
    summaries: Iterable[MatchSummaryModel],
    totals: OverallTotalsModel | None = None,
) -> str:
    """Render match summaries (and optional totals) as indented JSON."""
    payload: dict = {"matches": [s.model_dump(mode="json") for s in summaries]}
    if totals is not None:
        payload["overall"] = totals.model_dump(mode="json")
    return json.dumps(payload, indent=2)
