"""Player display names from the different provider shapes."""

from __future__ import annotations

from typing import Any

from ..utils.parsing import text_or_none

UNKNOWN_PLAYER = "Unknown"


def player_first_name(player: Any) -> str | None:
    if not isinstance(player, dict):
        return None
    return text_or_none(player.get("givenName")) or text_or_none(player.get("firstName"))


def player_last_name(player: Any) -> str | None:
    if not isinstance(player, dict):
        return None
    return text_or_none(player.get("familyName")) or text_or_none(player.get("lastName"))


def player_full_name(player: Any) -> str | None:
    if isinstance(player, str):
        return text_or_none(player)
    if not isinstance(player, dict):
        return None
    return text_or_none(player.get("name")) or text_or_none(player.get("displayName"))


def format_player_name(
    player: Any,
    *,
    text_fallback: str | None = None,
    team_code: str | None = None,
) -> str:
    """Build a display name for a player reference.

    Order: ``"F. Last"`` from structured first/last names, the surname alone,
    a full ``name``/``displayName``, a name pulled from free text, the team
    (``"LHF (Team)"``), and finally ``"Unknown"``.
    """
    first = player_first_name(player)
    last = player_last_name(player)
    if first and last:
        return f"{first[0]}. {last}"
    if last:
        return last
    full = player_full_name(player)
    if full:
        return full
    if text_fallback:
        return text_fallback
    if team_code:
        return f"{team_code} (Team)"
    return UNKNOWN_PLAYER


def surname_for_matching(player: Any) -> str | None:
    """Surname used to match clip titles; the last word of a full name otherwise."""
    last = player_last_name(player)
    if last:
        return last
    full = player_full_name(player)
    if full:
        return full.split()[-1]
    return None
