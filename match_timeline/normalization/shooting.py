"""Biathlon shooting strings.

Individual races report misses per stage as ``"0+1+0+0"``. Relays report
``misses+spares`` per stage, stages separated by spaces: ``"0+2 0+3"``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from ..utils.parsing import parse_int

ShootingPosition = Literal["prone", "standing"]


@dataclass(frozen=True)
class ShootingStage:
    misses: int
    spares: int
    position: ShootingPosition


def shooting_positions(
    stage_count: int,
    positions: str | None = None,
    discipline: str | None = None,
) -> list[ShootingPosition]:
    """Position per stage.

    An explicit ``"PPSS"``-style string is used when its length matches.
    Otherwise two stages are prone then standing, four stages are PSPS for
    individual races and PPSS for pursuit/mass start, and anything else
    alternates starting prone.
    """
    if positions and len(positions) == stage_count:
        return ["prone" if char.upper() == "P" else "standing" for char in positions]
    if stage_count == 2:
        return ["prone", "standing"]
    if stage_count == 4:
        if "individual" in (discipline or "").lower():
            return ["prone", "standing", "prone", "standing"]
        return ["prone", "prone", "standing", "standing"]
    return ["prone" if index % 2 == 0 else "standing" for index in range(stage_count)]


def parse_shootings(
    shootings: str | None,
    positions: str | None = None,
    discipline: str | None = None,
) -> tuple[ShootingStage, ...]:
    if not shootings or not isinstance(shootings, str) or not shootings.strip():
        return ()

    trimmed = shootings.strip()
    counts: list[tuple[int, int]] = []
    if " " in trimmed:
        for stage in trimmed.split():
            parts = stage.split("+")
            misses = parse_int(parts[0]) or 0
            spares = (parse_int(parts[1]) or 0) if len(parts) > 1 else 0
            counts.append((misses, spares))
    else:
        counts = [(parse_int(part) or 0, 0) for part in trimmed.split("+")]

    stage_positions = shooting_positions(len(counts), positions, discipline)
    return tuple(
        ShootingStage(misses=misses, spares=spares, position=position)
        for (misses, spares), position in zip(counts, stage_positions)
    )


def total_misses(stages: tuple[ShootingStage, ...]) -> int:
    return sum(stage.misses for stage in stages)


def total_spares(stages: tuple[ShootingStage, ...]) -> int:
    return sum(stage.spares for stage in stages)
