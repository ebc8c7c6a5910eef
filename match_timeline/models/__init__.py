"""Common typed models shared across the engine and the notifier."""

from .schemas import (
    GAME_HIGHLIGHTS_TAG,
    MARKER_KINDS,
    EventKind,
    GameState,
    GameSummary,
    NormalizedEvent,
    RunningScore,
    ScoreDisplay,
    SeenGameRecord,
    Side,
    Sport,
    TeamStatLine,
    TeamStats,
    TimelineResult,
    VideoClip,
)

__all__ = [
    "GAME_HIGHLIGHTS_TAG",
    "MARKER_KINDS",
    "EventKind",
    "GameState",
    "GameSummary",
    "NormalizedEvent",
    "RunningScore",
    "ScoreDisplay",
    "SeenGameRecord",
    "Side",
    "Sport",
    "TeamStatLine",
    "TeamStats",
    "TimelineResult",
    "VideoClip",
]
