"""Render-time labels derived from normalized events."""

from __future__ import annotations

from ..models import NormalizedEvent

# Payload flag -> abbreviation, in display order
GOAL_MODIFIER_LABELS: tuple[tuple[str, str], ...] = (
    ("power_play", "PP"),
    ("short_handed", "SH"),
    ("empty_net", "EN"),
    ("penalty_shot", "PS"),
    ("game_winning", "GWG"),
)

PENALTY_CODE_LABELS: dict[str, str] = {
    "abuse-of-officials": "Abuse of Officials",
    "boarding": "Boarding",
    "bench-minor": "Bench Minor",
    "butt-ending": "Butt-Ending",
    "charging": "Charging",
    "checking-to-the-head": "Checking to the Head",
    "clipping": "Clipping",
    "cross-checking": "Cross-Checking",
    "delay-of-game": "Delay of Game",
    "diving": "Diving",
    "elbowing": "Elbowing",
    "embellishment": "Embellishment",
    "fighting": "Fighting",
    "game-misconduct": "Game Misconduct",
    "goalkeeper-interference": "Goalkeeper Interference",
    "head-butting": "Head-Butting",
    "high-sticking": "High-Sticking",
    "holding": "Holding",
    "holding-the-stick": "Holding the Stick",
    "hooking": "Hooking",
    "illegal-hit": "Illegal Hit",
    "interference": "Interference",
    "kneeing": "Kneeing",
    "match-penalty": "Match Penalty",
    "misconduct": "Misconduct",
    "roughing": "Roughing",
    "slashing": "Slashing",
    "spearing": "Spearing",
    "too-many-men-on-the-ice": "Too Many Men on the Ice",
    "tripping": "Tripping",
    "unsportsmanlike-conduct": "Unsportsmanlike Conduct",
}


def goal_modifier_label(goal: NormalizedEvent) -> str | None:
    """``"PP, GWG"``-style modifiers, always in PP, SH, EN, PS, GWG order."""
    labels = [label for flag, label in GOAL_MODIFIER_LABELS if goal.payload.get(flag)]
    return ", ".join(labels) if labels else None


def penalty_code_label(code: str) -> str:
    key = code.strip().lower()
    if key in PENALTY_CODE_LABELS:
        return PENALTY_CODE_LABELS[key]
    return key.replace("-", " ").title()


def penalty_label(penalty: NormalizedEvent) -> str:
    code = penalty.payload.get("offence_code")
    if code:
        return penalty_code_label(code)
    return penalty.payload.get("offence") or "Penalty"


def marker_label(kind: str, period: int) -> str:
    if kind == "halfMarker":
        if period == 1:
            return "1st Half"
        if period == 2:
            return "2nd Half"
        return f"Half {period}"
    return f"Period {period}"
