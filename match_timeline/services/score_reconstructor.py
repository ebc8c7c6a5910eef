"""Running-score reconstruction from a set of goal events.

Provider scores attached to goals are not trusted: they can be missing or
stale. Totals are recomputed from the chronological order of the goals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from ..logging import logger
from ..models import NormalizedEvent, RunningScore
from ..utils.parsing import clock_sort_key

ZERO_SCORE = RunningScore(home=0, away=0)


def chronological_key(event: NormalizedEvent) -> tuple:
    """Order by period, then in-period clock, then provider position."""
    index = event.source_index if event.source_index is not None else -1
    return (event.period, clock_sort_key(event.clock), index)


def sort_chronologically(events: Iterable[NormalizedEvent]) -> list[NormalizedEvent]:
    return sorted(events, key=chronological_key)


@dataclass(frozen=True)
class ScoreReconstruction:
    """Goals in chronological order with their running scores attached.

    Goals whose side could not be determined stay in ``goals`` with
    ``running_score=None`` and are also listed in ``unresolved``.
    """

    goals: tuple[NormalizedEvent, ...] = ()
    unresolved: tuple[NormalizedEvent, ...] = ()
    final_score: RunningScore = field(default_factory=lambda: ZERO_SCORE)

    @property
    def has_resolved_goals(self) -> bool:
        return len(self.goals) > len(self.unresolved)


def reconstruct_scores(
    goals: Iterable[NormalizedEvent],
    home_team_code: str | None = None,
) -> ScoreReconstruction:
    """Attach cumulative (home, away) totals to every goal with a known side.

    Non-goal events in the input are ignored.
    """
    home = 0
    away = 0
    scored: list[NormalizedEvent] = []
    unresolved: list[NormalizedEvent] = []

    for goal in sort_chronologically(event for event in goals if event.kind == "goal"):
        if goal.side == "home":
            home += 1
        elif goal.side == "away":
            away += 1
        else:
            logger.warning(
                "goal_side_unresolved",
                period=goal.period,
                clock=goal.clock,
                source_index=goal.source_index,
                team_code=goal.team_code,
                home_team_code=home_team_code,
            )
            unresolved_goal = goal.model_copy(update={"running_score": None})
            scored.append(unresolved_goal)
            unresolved.append(unresolved_goal)
            continue
        scored.append(goal.model_copy(update={"running_score": RunningScore(home=home, away=away)}))

    return ScoreReconstruction(
        goals=tuple(scored),
        unresolved=tuple(unresolved),
        final_score=RunningScore(home=home, away=away),
    )
