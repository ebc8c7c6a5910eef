"""Pydantic models shared by the timeline engine and the notifier."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

EventKind = Literal[
    "goal",
    "penalty",
    "card",
    "substitution",
    "goalkeeperChange",
    "timeout",
    "periodMarker",
    "halfMarker",
]
Side = Literal["home", "away"]
Sport = Literal["hockey", "football"]
GameState = Literal["pre-game", "live", "post-game"]

MARKER_KINDS = frozenset({"periodMarker", "halfMarker"})

GAME_HIGHLIGHTS_TAG = "custom.highlights"


class RunningScore(BaseModel):
    """Cumulative (home, away) totals after a goal."""

    model_config = ConfigDict(frozen=True)

    home: int = Field(ge=0)
    away: int = Field(ge=0)

    def __str__(self) -> str:
        return f"{self.home}-{self.away}"

    @property
    def tag(self) -> str:
        """Provider clip tag for the goal that produced this score."""
        return f"goal.{self.home}-{self.away}"


class NormalizedEvent(BaseModel):
    """One tracked match event, or a synthesized period/half marker.

    ``source_index`` is the position in the provider list and is the stable
    tie-break for events sharing a period and clock. Markers carry no index.
    """

    model_config = ConfigDict(frozen=True)

    kind: EventKind
    period: int = Field(ge=1)
    clock: str | None = None
    source_index: int | None = None
    side: Side | None = None
    team_code: str | None = None
    running_score: RunningScore | None = None
    payload: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_marker(self) -> bool:
        return self.kind in MARKER_KINDS


class VideoClip(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    tags: tuple[str, ...] = ()
    title_text: str | None = None
    video_url: str | None = None
    thumbnail_url: str | None = None

    @property
    def is_game_highlight(self) -> bool:
        return GAME_HIGHLIGHTS_TAG in self.tags

    @property
    def display_title(self) -> str:
        """Title for display, derived from tags when the provider sent none."""
        if self.title_text:
            return self.title_text
        if self.is_game_highlight:
            return "Game Highlights"
        goal_tag = next((tag for tag in self.tags if tag.startswith("goal.")), None)
        if goal_tag:
            return f"Goal ({goal_tag[len('goal.'):]})"
        if "penalty" in self.tags:
            return "Penalty"
        if "save" in self.tags:
            return "Save"
        if "interview" in self.tags:
            return "Interview"
        return "Video Clip"


class GameSummary(BaseModel):
    """Schedule-level view of a game as reported by the provider."""

    model_config = ConfigDict(frozen=True)

    game_id: str
    home_team_code: str
    away_team_code: str
    home_team_name: str | None = None
    away_team_name: str | None = None
    home_score: int | None = None
    away_score: int | None = None
    state: GameState | None = None
    start_time: datetime | None = None
    venue: str | None = None

    @property
    def is_finished(self) -> bool:
        return self.state == "post-game"

    @property
    def is_live(self) -> bool:
        return self.state == "live"

    @property
    def home_display_name(self) -> str:
        return self.home_team_name or self.home_team_code

    @property
    def away_display_name(self) -> str:
        return self.away_team_name or self.away_team_code


class SeenGameRecord(BaseModel):
    """A game that is done: notified, timed out, or amnestied."""

    model_config = ConfigDict(frozen=True)

    game_id: str


class TeamStatLine(BaseModel):
    """One side of the team stats panel."""

    model_config = ConfigDict(frozen=True)

    goals: int | None = None
    shots_on_goal: int = 0
    power_play: str = "-"
    penalty_minutes: int = 0


class TeamStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    home: TeamStatLine = Field(default_factory=TeamStatLine)
    away: TeamStatLine = Field(default_factory=TeamStatLine)


class ScoreDisplay(BaseModel):
    model_config = ConfigDict(frozen=True)

    home: str = "-"
    away: str = "-"

    def __str__(self) -> str:
        return f"{self.home}-{self.away}"


class TimelineResult(BaseModel):
    """Everything a game view needs from one pipeline run."""

    model_config = ConfigDict(frozen=True)

    game_id: str
    sport: Sport
    display: tuple[NormalizedEvent, ...] = ()
    goals: tuple[NormalizedEvent, ...] = ()
    unresolved_goals: tuple[NormalizedEvent, ...] = ()
    goal_clips: dict[int, str | None] = Field(default_factory=dict)
    final_score: RunningScore = Field(default_factory=lambda: RunningScore(home=0, away=0))
    score_display: ScoreDisplay = Field(default_factory=ScoreDisplay)
    team_stats: TeamStats = Field(default_factory=TeamStats)
