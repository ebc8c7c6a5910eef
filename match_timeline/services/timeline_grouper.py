"""Newest-first display sequence with period/half markers."""

from __future__ import annotations

from typing import Iterable

from ..models import NormalizedEvent, Sport
from .labels import marker_label
from .score_reconstructor import sort_chronologically

MARKER_KIND_BY_SPORT: dict[str, str] = {
    "hockey": "periodMarker",
    "football": "halfMarker",
}

OPENING_CLOCKS = frozenset({"00:00", "0:00"})


def is_suppressed(event: NormalizedEvent) -> bool:
    """Goalkeeper changes that carry no information are hidden.

    That is the starting goalkeeper entering at 00:00 of period 1, and a
    goalkeeper leaving once the game has ended.
    """
    if event.kind != "goalkeeperChange":
        return False
    if event.payload.get("is_entering"):
        return event.period == 1 and event.clock in OPENING_CLOCKS
    return bool(event.payload.get("game_ended"))


def group_timeline(events: Iterable[NormalizedEvent], sport: Sport) -> list[NormalizedEvent]:
    """Return events newest first with a marker ahead of each period's block.

    A marker is emitted on every period change while walking the reversed
    list, so periods without events get no marker.
    """
    marker_kind = MARKER_KIND_BY_SPORT[sport]
    visible = [event for event in events if not event.is_marker and not is_suppressed(event)]
    ordered = list(reversed(sort_chronologically(visible)))

    display: list[NormalizedEvent] = []
    current_period: int | None = None
    for event in ordered:
        if event.period != current_period:
            current_period = event.period
            display.append(
                NormalizedEvent(
                    kind=marker_kind,
                    period=current_period,
                    payload={"label": marker_label(marker_kind, current_period)},
                )
            )
        display.append(event)
    return display
