"""
Generic, format-agnostic parsing utilities.

Provider payloads mix ints, numeric strings, floats and ``{"value": n}``
wrappers for the same field, so every reader goes through these helpers.
"""

from __future__ import annotations

import re
from typing import Any

_LEADING_INT = re.compile(r"(\d+)")
_ADDED_TIME = re.compile(r"\+\s*(\d+)")
_SECONDS = re.compile(r":(\d{1,2})")


def parse_int(value: str | int | float | None) -> int | None:
    """Parse a value to an integer, handling common edge cases.

    Accepts strings, ints, floats, or None. Returns None for empty strings or "-".
    """
    if value in (None, "", "-"):
        return None
    if isinstance(value, bool):
        return None
    try:
        return int(float(value))
    except (ValueError, TypeError):
        return None


def unwrap_value(value: Any) -> Any:
    """Return ``value["value"]`` for wrapper objects, otherwise ``value``."""
    if isinstance(value, dict):
        return value.get("value")
    return value


def text_or_none(value: Any) -> str | None:
    """Return a stripped non-empty string, or None."""
    value = unwrap_value(value)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def clock_sort_key(clock: str | int | float | None) -> tuple[int, int, int]:
    """Sort key for an in-period clock.

    The first component is the leading integer minute ("45+2'" -> 45,
    "05:30" -> 5). Missing or non-numeric clocks sort as minute 0. Added
    time after ``+`` and seconds after ``:`` break ties within a minute.
    """
    if clock is None:
        return (0, 0, 0)
    text = str(clock)
    match = _LEADING_INT.search(text)
    if not match:
        return (0, 0, 0)
    minute = int(match.group(1))
    added = _ADDED_TIME.search(text)
    seconds = _SECONDS.search(text)
    return (
        minute,
        int(added.group(1)) if added else 0,
        int(seconds.group(1)) if seconds else 0,
    )
