"""Detect goals that appeared since the previous poll of a live game."""

from __future__ import annotations

from typing import Iterable

from ..logging import logger
from ..models import NormalizedEvent


def goal_key(goal: NormalizedEvent) -> str:
    """Identity of a goal across polls, from per-goal provider fields only.

    The reconstructed running score is not part of the key.
    """
    provider_score = goal.payload.get("provider_score") or {}
    parts = (
        goal.period,
        goal.clock or "",
        goal.team_code or goal.side or "",
        goal.payload.get("scorer") or "",
        provider_score.get("home", ""),
        provider_score.get("away", ""),
    )
    return "|".join(str(part) for part in parts)


class GoalWatcher:
    """Remembers goals per game across polls.

    The first observation of a game only primes its known goals so that a
    process started mid-game does not announce goals already scored.
    """

    def __init__(self) -> None:
        self._seen: dict[str, set[str]] = {}

    @property
    def tracked_games(self) -> frozenset[str]:
        return frozenset(self._seen)

    def is_tracking(self, game_id: str) -> bool:
        return game_id in self._seen

    def detect_new_goals(self, game_id: str, goals: Iterable[NormalizedEvent]) -> list[NormalizedEvent]:
        goals = [goal for goal in goals if goal.kind == "goal"]
        if game_id not in self._seen:
            self._seen[game_id] = {goal_key(goal) for goal in goals}
            logger.info("goal_watcher_primed", game_id=game_id, goal_count=len(goals))
            return []

        known = self._seen[game_id]
        new_goals: list[NormalizedEvent] = []
        for goal in goals:
            key = goal_key(goal)
            if key not in known:
                known.add(key)
                new_goals.append(goal)
        if new_goals:
            logger.info("goal_watcher_new_goals", game_id=game_id, new_count=len(new_goals))
        return new_goals

    def forget(self, game_id: str) -> None:
        """Drop a game, e.g. once it has finished."""
        self._seen.pop(game_id, None)
