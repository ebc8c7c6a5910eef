"""Normalization of raw provider records into canonical models.

Every reader here is tolerant: malformed fields fall back per field and
never raise.
"""

from .events import normalize_events, normalize_football_event, normalize_hockey_event
from .games import normalize_clip, normalize_game_state, normalize_game_summary
from .shooting import ShootingStage, parse_shootings, total_misses, total_spares
from .team_stats import parse_team_stats

__all__ = [
    "ShootingStage",
    "normalize_clip",
    "normalize_events",
    "normalize_football_event",
    "normalize_game_state",
    "normalize_game_summary",
    "normalize_hockey_event",
    "parse_shootings",
    "parse_team_stats",
    "total_misses",
    "total_spares",
]
