"""Team stats panel from the gameday ``teamStats`` payload.

Each stat row carries a ``sideTranslateKey``: ``G`` holds goals (left) and
shots on goal (right), ``PPG`` the power-play percentage (center) and
``PIM`` the penalty minutes (center).
"""

from __future__ import annotations

from typing import Any

from ..models import TeamStatLine, TeamStats
from ..utils.parsing import parse_int, text_or_none

GOALS_KEY = "G"
POWER_PLAY_KEY = "PPG"
PENALTY_MINUTES_KEY = "PIM"


def _cell(side: Any, position: str) -> Any:
    if not isinstance(side, dict):
        return None
    cell = side.get(position)
    return cell.get("value") if isinstance(cell, dict) else None


def _row_key(row: dict[str, Any]) -> str | None:
    for side in ("homeTeam", "awayTeam"):
        team = row.get(side)
        if isinstance(team, dict) and team.get("sideTranslateKey"):
            return str(team["sideTranslateKey"])
    return None


def _power_play(value: Any) -> str:
    text = text_or_none(value)
    return f"{text}%" if text is not None else "-"


def parse_team_stats(raw: Any) -> TeamStats:
    """Read the stats panel from ``teamStats`` (or its ``stats`` list).

    Rows with unknown keys are ignored; missing values keep the defaults.
    """
    rows = raw.get("stats") if isinstance(raw, dict) else raw
    if not isinstance(rows, list):
        return TeamStats()

    lines: dict[str, dict[str, Any]] = {"home": {}, "away": {}}
    for row in rows:
        if not isinstance(row, dict):
            continue
        key = _row_key(row)
        for side, team_key in (("home", "homeTeam"), ("away", "awayTeam")):
            team = row.get(team_key)
            if key == GOALS_KEY:
                lines[side]["goals"] = parse_int(_cell(team, "left"))
                lines[side]["shots_on_goal"] = parse_int(_cell(team, "right")) or 0
            elif key == POWER_PLAY_KEY:
                lines[side]["power_play"] = _power_play(_cell(team, "center"))
            elif key == PENALTY_MINUTES_KEY:
                lines[side]["penalty_minutes"] = parse_int(_cell(team, "center")) or 0

    return TeamStats(home=TeamStatLine(**lines["home"]), away=TeamStatLine(**lines["away"]))
