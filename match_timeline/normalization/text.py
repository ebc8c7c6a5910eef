"""Last-resort name extraction from free-text incident descriptions.

Structured fields always win; these patterns only run when a provider sent
nothing but prose.
"""

from __future__ import annotations

import re

GOAL_TEXT_PATTERNS = (
    re.compile(r"Goal[!.]?\s*(.+?)(?:\s+scores|\s+mål|\s*$)", re.IGNORECASE),
    re.compile(r"^(.+?)\s+(?:scores|goal)", re.IGNORECASE),
    re.compile(r"Goal\s*-\s*(.+?)(?:\s*\(|$)", re.IGNORECASE),
)

CARD_TEXT_PATTERNS = (
    re.compile(r"(?:Yellow|Red)\s+Card\s*[-–]\s*(.+?)(?:\s*\(|$)", re.IGNORECASE),
    re.compile(r"^(.+?)\s+(?:receives|gets|shown)\s+(?:a\s+)?(?:yellow|red)", re.IGNORECASE),
    re.compile(r"(?:yellow|red)\s+card\s+(?:for|to)\s+(.+?)(?:\s*\(|$)", re.IGNORECASE),
)

# (pattern, group index of the incoming player, group index of the outgoing player)
SUBSTITUTION_TEXT_PATTERNS = (
    (re.compile(r"(.+?)\s+(?:is replaced by|replaced by|ersätts av)\s+(.+)", re.IGNORECASE), 2, 1),
    (re.compile(r"(.+?)\s+(?:replaces|ersätter|comes on for)\s+(.+)", re.IGNORECASE), 1, 2),
    (re.compile(r"(.+?)\s+(?:off|ut)[,.]?\s+(.+?)\s+(?:on|in)\b", re.IGNORECASE), 2, 1),
    (re.compile(r"substitution[,.]?\s*(?:[^.]+\.)?\s*(.+?)\s+(?:for|för)\s+(.+)", re.IGNORECASE), 1, 2),
    (re.compile(r"(.+?)\s+(?:for|för)\s+(.+)", re.IGNORECASE), 1, 2),
    (re.compile(r"(.+?)\s*(?:→|->|›)\s*(.+)"), 2, 1),
)


def _first_match(text: str | None, patterns) -> str | None:
    if not text:
        return None
    for pattern in patterns:
        match = pattern.search(text)
        if match and match.group(1).strip():
            return match.group(1).strip()
    return None


def extract_scorer_from_text(text: str | None) -> str | None:
    """Extract a scorer from e.g. ``"Goal! Anna Svensson"``."""
    return _first_match(text, GOAL_TEXT_PATTERNS)


def extract_card_player_from_text(text: str | None) -> str | None:
    """Extract the booked player from e.g. ``"Yellow Card - Erik Berg"``."""
    return _first_match(text, CARD_TEXT_PATTERNS)


def extract_substitution_from_text(text: str | None) -> tuple[str | None, str | None]:
    """Return ``(player_in, player_out)`` parsed from a substitution description.

    Patterns are tried in order; ``(None, None)`` when none matches.
    """
    if not text:
        return None, None
    for pattern, in_group, out_group in SUBSTITUTION_TEXT_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(in_group).strip(), match.group(out_group).strip()
    return None, None
