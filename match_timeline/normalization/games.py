"""Provider schedule entries and video items to ``GameSummary`` / ``VideoClip``."""

from __future__ import annotations

from typing import Any

from ..models import GameState, GameSummary, VideoClip
from ..utils.datetime_utils import parse_datetime
from ..utils.parsing import parse_int, text_or_none, unwrap_value

_STATE_ALIASES: dict[str, GameState] = {
    "pregame": "pre-game",
    "pre-game": "pre-game",
    "scheduled": "pre-game",
    "postgame": "post-game",
    "post-game": "post-game",
    "final": "post-game",
    "live": "live",
    "ongoing": "live",
    "inprogress": "live",
    "in-progress": "live",
}


def normalize_game_state(state: Any) -> GameState | None:
    """Map provider state strings (``"PostGame"``, ``"in_progress"``, ...) to a canonical state."""
    if state is None:
        return None
    key = str(state).strip().lower().replace("_", "-")
    key = "-".join(key.split())
    return _STATE_ALIASES.get(key)


def parse_score_value(value: Any) -> int | None:
    """Read a score that may be an int, a numeric string, or ``{"value": n}``."""
    value = unwrap_value(value)
    if isinstance(value, str) and value.strip().lower() in ("n/a", "na"):
        return None
    return parse_int(value)


def _team_names(team_info: dict[str, Any]) -> str | None:
    names = team_info.get("names")
    if isinstance(names, dict):
        return text_or_none(names.get("short")) or text_or_none(names.get("long"))
    return text_or_none(team_info.get("name"))


def _team_score(result: Any, info: dict[str, Any]) -> int | None:
    if isinstance(result, dict):
        score = parse_score_value(result.get("score"))
        if score is not None:
            return score
    return parse_score_value(info.get("score"))


def normalize_game_summary(raw: dict[str, Any]) -> GameSummary | None:
    """Build a ``GameSummary`` from one schedule entry; None without id or team codes."""
    game_id = text_or_none(raw.get("uuid")) or text_or_none(raw.get("id"))
    home_info = raw.get("homeTeamInfo") if isinstance(raw.get("homeTeamInfo"), dict) else {}
    away_info = raw.get("awayTeamInfo") if isinstance(raw.get("awayTeamInfo"), dict) else {}
    home_code = text_or_none(home_info.get("code"))
    away_code = text_or_none(away_info.get("code"))
    if not game_id or not home_code or not away_code:
        return None

    venue_info = raw.get("venueInfo")
    venue = text_or_none(venue_info.get("name")) if isinstance(venue_info, dict) else None

    return GameSummary(
        game_id=game_id,
        home_team_code=home_code,
        away_team_code=away_code,
        home_team_name=_team_names(home_info),
        away_team_name=_team_names(away_info),
        home_score=_team_score(raw.get("homeTeamResult"), home_info),
        away_score=_team_score(raw.get("awayTeamResult"), away_info),
        state=normalize_game_state(raw.get("state")),
        start_time=parse_datetime(raw.get("startDateTime")),
        venue=venue,
    )


def normalize_clip(raw: dict[str, Any]) -> VideoClip | None:
    """Build a ``VideoClip`` from a provider video item; None without an id."""
    clip_id = text_or_none(raw.get("id"))
    if not clip_id:
        return None
    tags = raw.get("tags")
    media = raw.get("renderedMedia") if isinstance(raw.get("renderedMedia"), dict) else {}
    return VideoClip(
        id=clip_id,
        tags=tuple(str(tag) for tag in tags) if isinstance(tags, list) else (),
        title_text=text_or_none(raw.get("title")),
        video_url=text_or_none(media.get("videourl")),
        thumbnail_url=text_or_none(media.get("url")) or text_or_none(raw.get("thumbnail")),
    )
