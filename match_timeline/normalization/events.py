"""Normalize raw hockey play-by-play and football incident records.

Each provider record maps to at most one ``NormalizedEvent``. Untracked
record types return None and are dropped by ``normalize_events``.
"""

from __future__ import annotations

import re
from typing import Any, Callable

from ..logging import logger
from ..models import NormalizedEvent, Side, Sport
from ..utils.parsing import parse_int, text_or_none
from .penalties import penalty_minutes, penalty_offence, penalty_offence_code, penalty_variant
from .players import format_player_name, surname_for_matching
from .text import (
    extract_card_player_from_text,
    extract_scorer_from_text,
    extract_substitution_from_text,
)

HOCKEY_KIND_MAP: dict[str, str] = {
    "goal": "goal",
    "penalty": "penalty",
    "goalkeeper": "goalkeeperChange",
    "timeout": "timeout",
}

FOOTBALL_KIND_MAP: dict[str, str] = {
    "goal": "goal",
    "card": "card",
    "substitution": "substitution",
}

# Goal modifier payload key -> provider flag
GOAL_MODIFIER_FLAGS: dict[str, str] = {
    "power_play": "isPowerPlay",
    "short_handed": "isShorthanded",
    "empty_net": "isEmptyNet",
    "penalty_shot": "isPenaltyShot",
    "game_winning": "isGameWinningGoal",
}

GAME_ENDED_STATE = "GameEnded"

FIRST_HALF_LAST_MINUTE = 45
SECOND_HALF_LAST_MINUTE = 90

_LEADING_INT = re.compile(r"(\d+)")


# ---------------------------------------------------------------------------
# Shared field readers
# ---------------------------------------------------------------------------


def _event_team(record: dict[str, Any]) -> dict[str, Any]:
    team = record.get("eventTeam")
    return team if isinstance(team, dict) else {}


def _team_code(record: dict[str, Any]) -> str | None:
    team = _event_team(record)
    return (
        text_or_none(team.get("teamCode"))
        or text_or_none(team.get("code"))
        or text_or_none(record.get("teamCode"))
    )


def _team_name(record: dict[str, Any]) -> str | None:
    team = _event_team(record)
    return text_or_none(team.get("teamName")) or text_or_none(record.get("teamName"))


def resolve_side(
    record: dict[str, Any],
    team_code: str | None,
    home_team_code: str | None,
) -> Side | None:
    """Decide which side an event belongs to.

    An explicit ``isHome`` flag or ``eventTeam.place`` wins over the team
    code. Without either, the team code is compared to the home code.
    """
    is_home = record.get("isHome")
    if isinstance(is_home, bool):
        return "home" if is_home else "away"

    place = text_or_none(_event_team(record).get("place"))
    if place and place.lower() in ("home", "away"):
        return place.lower()  # type: ignore[return-value]

    if team_code and home_team_code:
        return "home" if team_code.upper() == home_team_code.upper() else "away"
    return None


def _provider_score(record: dict[str, Any]) -> dict[str, int] | None:
    """Score the provider attached to a goal, kept for reference only."""
    new_score = record.get("newScore")
    if isinstance(new_score, (list, tuple)) and len(new_score) >= 2:
        home, away = parse_int(new_score[0]), parse_int(new_score[1])
    else:
        score = record.get("score") if isinstance(record.get("score"), dict) else {}
        home = parse_int(record.get("homeGoals"))
        if home is None:
            home = parse_int(record.get("homeScore"))
        if home is None:
            home = parse_int(score.get("home"))
        away = parse_int(record.get("awayGoals"))
        if away is None:
            away = parse_int(record.get("awayScore"))
        if away is None:
            away = parse_int(score.get("away"))
    if home is None or away is None:
        return None
    return {"home": home, "away": away}


def _assist_names(record: dict[str, Any]) -> list[str]:
    assists: list[Any] = []
    raw = record.get("assists")
    if isinstance(raw, list):
        assists.extend(raw)
    for key in ("assist1", "assist2", "assist"):
        if record.get(key):
            assists.append(record[key])
    names = []
    for assist in assists:
        name = format_player_name(assist)
        if name != "Unknown":
            names.append(name)
    return names


# ---------------------------------------------------------------------------
# Hockey
# ---------------------------------------------------------------------------


def _hockey_period(record: dict[str, Any]) -> int:
    period = parse_int(record.get("period"))
    if period is None or period < 1:
        return 1
    return period


def normalize_hockey_event(
    record: dict[str, Any],
    home_team_code: str | None,
    source_index: int = 0,
) -> NormalizedEvent | None:
    """Normalize one hockey play-by-play record.

    Tracked types are goal, penalty, goalkeeper and timeout. The ``MM:SS``
    clock is passed through unchanged.
    """
    raw_kind = str(record.get("type") or "").lower()
    kind = HOCKEY_KIND_MAP.get(raw_kind)
    if kind is None:
        return None

    team_code = _team_code(record)
    side = resolve_side(record, team_code, home_team_code)
    player = record.get("player")

    payload: dict[str, Any]
    if kind == "goal":
        payload = {
            "scorer": format_player_name(player, team_code=team_code),
            "scorer_last_name": surname_for_matching(player),
            "assists": _assist_names(record),
            "provider_score": _provider_score(record),
            "team_name": _team_name(record),
            "goal_type": text_or_none(record.get("goalType")),
        }
        for key, flag in GOAL_MODIFIER_FLAGS.items():
            payload[key] = record.get(flag) is True
    elif kind == "penalty":
        payload = {
            "player": format_player_name(player, team_code=team_code),
            "minutes": penalty_minutes(record),
            "offence": penalty_offence(record),
            "offence_code": penalty_offence_code(record),
            "variant": penalty_variant(record),
        }
    elif kind == "goalkeeperChange":
        jersey = player.get("jerseyToday") if isinstance(player, dict) else None
        payload = {
            "player": format_player_name(player, team_code=team_code),
            "jersey": text_or_none(jersey),
            "is_entering": record.get("isEntering") is True,
            "game_ended": record.get("gameState") == GAME_ENDED_STATE,
        }
    else:
        payload = {"team_name": _team_name(record) or team_code or "Team"}

    return NormalizedEvent(
        kind=kind,
        period=_hockey_period(record),
        clock=text_or_none(record.get("time")),
        source_index=source_index,
        side=side,
        team_code=team_code,
        payload=payload,
    )


# ---------------------------------------------------------------------------
# Football
# ---------------------------------------------------------------------------


def with_minute_marker(clock: str | None) -> str | None:
    if not clock:
        return None
    return clock if "'" in clock else f"{clock}'"


def football_clock(record: dict[str, Any]) -> str | None:
    """Display clock: ``clock``, ``halfStrShort``, or minute plus added time."""
    clock = text_or_none(record.get("clock")) or text_or_none(record.get("halfStrShort"))
    if clock:
        return with_minute_marker(clock)

    minute = parse_int(record.get("timeStr"))
    if minute is None:
        minute = parse_int(record.get("time"))
    if minute is None:
        return None
    added = parse_int(record.get("overloadTime"))
    if added and added > 0:
        return f"{minute}+{added}'"
    return f"{minute}'"


def infer_football_period(minute: int | None) -> int:
    """Half from the match minute: up to 45 first, up to 90 second, then extra time."""
    if minute is None or minute <= FIRST_HALF_LAST_MINUTE:
        return 1
    if minute <= SECOND_HALF_LAST_MINUTE:
        return 2
    return 3


def _football_period(record: dict[str, Any], clock: str | None) -> int:
    explicit = parse_int(record.get("period"))
    if explicit is not None and explicit >= 1:
        return explicit
    minute = parse_int(record.get("timeStr"))
    if minute is None:
        minute = parse_int(record.get("time"))
    if minute is None and clock:
        match = _LEADING_INT.search(clock)
        minute = int(match.group(1)) if match else None
    return infer_football_period(minute)


def _football_goal_type(record: dict[str, Any]) -> str:
    if record.get("ownGoal"):
        return "Own Goal"
    if record.get("isPenaltyShootoutEvent"):
        return "Penalty Shootout"
    return (
        text_or_none(record.get("goalType"))
        or text_or_none(record.get("goalDescription"))
        or "Goal"
    )


def _substitution_players(record: dict[str, Any]) -> tuple[str | None, str | None]:
    player_in = record.get("playerIn")
    player_out = record.get("playerOut")
    swap = record.get("swap")
    if player_in is None and player_out is None and isinstance(swap, list):
        player_in = swap[0] if len(swap) > 0 else None
        player_out = swap[1] if len(swap) > 1 else None

    name_in = format_player_name(player_in) if player_in else None
    name_out = format_player_name(player_out) if player_out else None
    if name_in == "Unknown":
        name_in = None
    if name_out == "Unknown":
        name_out = None
    if name_in and name_out:
        return name_in, name_out

    text_in, text_out = extract_substitution_from_text(text_or_none(record.get("text")))
    return name_in or text_in, name_out or text_out


def normalize_football_event(
    record: dict[str, Any],
    home_team_code: str | None,
    source_index: int = 0,
) -> NormalizedEvent | None:
    """Normalize one football incident record (goal, card or substitution)."""
    raw_kind = str(record.get("type") or "").lower()
    kind = FOOTBALL_KIND_MAP.get(raw_kind)
    if kind is None:
        return None

    team_code = _team_code(record)
    side = resolve_side(record, team_code, home_team_code)
    if team_code is None and side == "home":
        team_code = home_team_code
    clock = football_clock(record)
    text = text_or_none(record.get("text")) or text_or_none(record.get("nameStr"))

    payload: dict[str, Any]
    if kind == "goal":
        scorer_ref = record.get("scorer") or record.get("player")
        payload = {
            "scorer": format_player_name(
                scorer_ref,
                text_fallback=extract_scorer_from_text(text),
                team_code=team_code,
            ),
            "scorer_last_name": surname_for_matching(scorer_ref),
            "assists": _assist_names(record),
            "provider_score": _provider_score(record),
            "team_name": _team_name(record),
            "goal_type": _football_goal_type(record),
        }
        for key in GOAL_MODIFIER_FLAGS:
            payload[key] = False
    elif kind == "card":
        raw_card = str(record.get("cardType") or record.get("card") or "").lower()
        payload = {
            "player": format_player_name(
                record.get("player"),
                text_fallback=extract_card_player_from_text(text),
                team_code=team_code,
            ),
            "card_type": "red" if "red" in raw_card else "yellow",
            "reason": text_or_none(record.get("reason"))
            or text_or_none(record.get("cardDescription"))
            or text_or_none(record.get("card")),
        }
    else:
        player_in, player_out = _substitution_players(record)
        payload = {
            "player_in": player_in,
            "player_out": player_out,
            "text": f"{player_in} for {player_out}" if player_in and player_out else text,
        }

    return NormalizedEvent(
        kind=kind,
        period=_football_period(record, clock),
        clock=clock,
        source_index=source_index,
        side=side,
        team_code=team_code,
        payload=payload,
    )


# ---------------------------------------------------------------------------
# Batch
# ---------------------------------------------------------------------------

_NORMALIZERS: dict[str, Callable[..., NormalizedEvent | None]] = {
    "hockey": normalize_hockey_event,
    "football": normalize_football_event,
}


def normalize_events(
    records: list[Any],
    home_team_code: str | None,
    sport: Sport,
) -> list[NormalizedEvent]:
    """Normalize a provider event list, keeping provider position as ``source_index``."""
    normalizer = _NORMALIZERS.get(sport)
    if normalizer is None:
        raise ValueError(f"Unsupported sport: {sport}")

    events: list[NormalizedEvent] = []
    for index, record in enumerate(records or []):
        if not isinstance(record, dict):
            logger.debug("event_record_not_object", sport=sport, source_index=index)
            continue
        event = normalizer(record, home_team_code, source_index=index)
        if event is None:
            logger.debug(
                "event_kind_untracked",
                sport=sport,
                source_index=index,
                raw_type=record.get("type"),
            )
            continue
        events.append(event)
    return events
