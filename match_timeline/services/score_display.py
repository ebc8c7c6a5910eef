"""Final score shown in a game header."""

from __future__ import annotations

from typing import Any, Mapping

from ..models import RunningScore, ScoreDisplay, TeamStats
from ..normalization.games import parse_score_value

MISSING_SCORE = "-"


def _side_value(source: Mapping[str, Any] | None, side: str) -> int | None:
    if not source:
        return None
    return parse_score_value(source.get(side))


def resolve_score_display(
    computed: RunningScore | None,
    summary_score: Mapping[str, Any] | None = None,
    team_info_score: Mapping[str, Any] | None = None,
    team_stats: TeamStats | None = None,
) -> ScoreDisplay:
    """Resolve each side independently.

    Fallback order: computed running score, goals from the team stats panel,
    provider game summary, per-team info, ``"-"``. ``summary_score`` and
    ``team_info_score`` are ``{"home": ..., "away": ...}`` mappings whose
    values may be ints, numeric strings or ``{"value": n}`` objects.
    """
    resolved: dict[str, str] = {}
    for side in ("home", "away"):
        value: int | None = getattr(computed, side) if computed is not None else None
        if value is None and team_stats is not None:
            value = getattr(team_stats, side).goals
        if value is None:
            value = _side_value(summary_score, side)
        if value is None:
            value = _side_value(team_info_score, side)
        resolved[side] = str(value) if value is not None else MISSING_SCORE
    return ScoreDisplay(**resolved)
