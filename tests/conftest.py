"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import os
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Ensure the package is importable without an install
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

# Set required environment variables before any imports
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from match_timeline.models import GameSummary, VideoClip  # noqa: E402

HOME = "LHF"
AWAY = "FBK"


@pytest.fixture
def fixed_now():
    return datetime(2025, 1, 15, 22, 0, tzinfo=timezone.utc)


@pytest.fixture
def hockey_records():
    """Three goals (home, away, home) plus a penalty, a timeout and goalkeeper changes."""
    return [
        {
            "type": "goalkeeper",
            "period": 1,
            "time": "00:00",
            "isEntering": True,
            "player": {"givenName": "Joel", "familyName": "Lassinantti", "jerseyToday": "30"},
            "eventTeam": {"teamCode": HOME, "place": "home"},
        },
        {
            "type": "goal",
            "period": 1,
            "time": "05:00",
            "player": {"givenName": "Anton", "familyName": "Lindholm"},
            "eventTeam": {"teamCode": HOME, "place": "home"},
            "homeGoals": 1,
            "awayGoals": 0,
            "isPowerPlay": True,
        },
        {
            "type": "penalty",
            "period": 1,
            "time": "12:41",
            "player": {"givenName": "Max", "familyName": "Friberg"},
            "eventTeam": {"teamCode": AWAY, "place": "away"},
            "offence": {"shortName": "Hooking", "code": "hooking"},
            "variant": {"shortName": "2 min", "minorTime": 2},
        },
        {
            "type": "shot",
            "period": 2,
            "time": "03:10",
            "eventTeam": {"teamCode": AWAY},
        },
        {
            "type": "goal",
            "period": 2,
            "time": "10:12",
            "player": {"firstName": {"value": "Ludvig"}, "lastName": {"value": "Rensfeldt"}},
            "eventTeam": {"teamCode": AWAY, "place": "away"},
        },
        {
            "type": "timeout",
            "period": 3,
            "time": "14:00",
            "eventTeam": {"teamCode": AWAY, "teamName": "Färjestad BK"},
        },
        {
            "type": "goal",
            "period": 3,
            "time": "15:30",
            "player": {"givenName": "Ken", "familyName": "Agostino"},
            "eventTeam": {"teamCode": HOME, "place": "home"},
            "isGameWinningGoal": True,
        },
        {
            "type": "goalkeeper",
            "period": 3,
            "time": "60:00",
            "isEntering": False,
            "gameState": "GameEnded",
            "player": {"givenName": "Joel", "familyName": "Lassinantti"},
            "eventTeam": {"teamCode": HOME, "place": "home"},
        },
    ]


@pytest.fixture
def football_records():
    return [
        {"type": "goal", "timeStr": 23, "isHome": True, "scorer": {"name": "Anna Svensson"}},
        {"type": "card", "timeStr": 45, "overloadTime": 2, "isHome": False, "card": "Yellow", "player": {"name": "Eva Berg"}},
        {"type": "substitution", "timeStr": 60, "isHome": True, "swap": [{"name": "Lisa Ek"}, {"name": "Anna Svensson"}]},
        {"type": "goal", "timeStr": 88, "isHome": False, "nameStr": "Goal! Maja Holm"},
        {"type": "addedTime", "timeStr": 90},
    ]


def make_game(
    game_id: str,
    start_time: datetime | None,
    state: str = "post-game",
    home: str = HOME,
    away: str = AWAY,
) -> GameSummary:
    return GameSummary(
        game_id=game_id,
        home_team_code=home,
        away_team_code=away,
        home_team_name="Luleå",
        away_team_name="Färjestad",
        state=state,
        start_time=start_time,
        venue="Coop Norrbotten Arena",
    )


def highlight_clip(clip_id: str = "hl-1") -> VideoClip:
    return VideoClip(
        id=clip_id,
        tags=("custom.highlights",),
        title_text="Highlights: Luleå - Färjestad",
        video_url="https://video.example/hl.m3u8",
        thumbnail_url="https://img.example/hl.jpg",
    )


@pytest.fixture
def seen_games_path(tmp_path):
    """Path for a temporary seen-set file."""
    return tmp_path / "state" / "seen_games.json"
