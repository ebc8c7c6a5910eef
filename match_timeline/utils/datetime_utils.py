"""
Low-level timezone and timestamp utilities.

Domain-agnostic helpers for timezone-aware UTC datetime operations.
"""

from __future__ import annotations

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Return the current timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_datetime(value: str | datetime | None) -> datetime | None:
    """Parse an ISO datetime string to a UTC datetime.

    Naive values are assumed to be UTC. Returns None for missing or
    unparseable input.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def hours_since(moment: datetime, now: datetime) -> float:
    """Return elapsed hours from ``moment`` to ``now`` (negative if in the future)."""
    return (now - moment).total_seconds() / 3600
