"""Penalty duration and offence extraction for hockey penalty records."""

from __future__ import annotations

import re
from typing import Any

from ..utils.parsing import parse_int, text_or_none

DEFAULT_PENALTY_MINUTES = 2

VARIANT_TIME_FIELDS = (
    "majorTime",
    "minorTime",
    "doubleMinorTime",
    "misconductTime",
    "gMTime",
    "mPTime",
    "benchTime",
)

_FIRST_NUMBER = re.compile(r"(\d+)")


def penalty_minutes(record: dict[str, Any]) -> int:
    """Resolve penalty minutes.

    ``penaltyMinutes`` wins, then the first number in ``variant.description``,
    then the largest positive ``variant.*Time`` field, then 2.
    """
    explicit = parse_int(record.get("penaltyMinutes"))
    if explicit:
        return explicit

    variant = record.get("variant")
    if not isinstance(variant, dict):
        return DEFAULT_PENALTY_MINUTES

    description = text_or_none(variant.get("description"))
    if description:
        match = _FIRST_NUMBER.search(description)
        if match:
            return int(match.group(1))

    times = [parse_int(variant.get(field)) or 0 for field in VARIANT_TIME_FIELDS]
    longest = max(times)
    if longest > 0:
        return longest
    return DEFAULT_PENALTY_MINUTES


def penalty_offence(record: dict[str, Any]) -> str:
    offence = record.get("offence")
    if isinstance(offence, str) and offence.strip():
        return offence.strip()
    if isinstance(offence, dict):
        return (
            text_or_none(offence.get("shortName"))
            or text_or_none(offence.get("name"))
            or "Penalty"
        )
    return "Penalty"


def penalty_offence_code(record: dict[str, Any]) -> str | None:
    """Hyphenated offence code (``"too-many-men-on-the-ice"``) if the record has one."""
    offence = record.get("offence")
    code = text_or_none(record.get("offenceCode")) or text_or_none(record.get("descKey"))
    if not code and isinstance(offence, dict):
        code = text_or_none(offence.get("code")) or text_or_none(offence.get("descKey"))
    return code.lower() if code else None


def penalty_variant(record: dict[str, Any]) -> str | None:
    variant = record.get("variant")
    if isinstance(variant, dict):
        return text_or_none(variant.get("shortName"))
    return None
