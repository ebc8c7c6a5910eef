"""Tests for services/goal_watcher.py."""

from __future__ import annotations

from match_timeline.models import NormalizedEvent, RunningScore
from match_timeline.services.goal_watcher import GoalWatcher, goal_key


def goal(period, clock, side, home, away, scorer="A. Lindholm", provider_score=None):
    return NormalizedEvent(
        kind="goal",
        period=period,
        clock=clock,
        side=side,
        team_code="LHF" if side == "home" else "FBK",
        running_score=RunningScore(home=home, away=away),
        payload={"scorer": scorer, "provider_score": provider_score},
    )


class TestGoalWatcher:
    def test_first_observation_primes_silently(self):
        watcher = GoalWatcher()
        assert watcher.detect_new_goals("g1", [goal(1, "05:00", "home", 1, 0)]) == []
        assert watcher.is_tracking("g1")

    def test_new_goal_detected_once(self):
        watcher = GoalWatcher()
        first = goal(1, "05:00", "home", 1, 0)
        second = goal(2, "10:12", "away", 1, 1)
        watcher.detect_new_goals("g1", [first])

        assert watcher.detect_new_goals("g1", [first, second]) == [second]
        assert watcher.detect_new_goals("g1", [first, second]) == []

    def test_empty_first_poll_then_goal(self):
        watcher = GoalWatcher()
        watcher.detect_new_goals("g1", [])
        new = goal(1, "01:00", "home", 1, 0)
        assert watcher.detect_new_goals("g1", [new]) == [new]

    def test_games_tracked_separately(self):
        watcher = GoalWatcher()
        watcher.detect_new_goals("g1", [])
        assert watcher.detect_new_goals("g2", [goal(1, "01:00", "home", 1, 0)]) == []

    def test_non_goals_ignored(self):
        watcher = GoalWatcher()
        watcher.detect_new_goals("g1", [])
        penalty = NormalizedEvent(kind="penalty", period=1, clock="02:00")
        assert watcher.detect_new_goals("g1", [penalty]) == []

    def test_forget(self):
        watcher = GoalWatcher()
        watcher.detect_new_goals("g1", [])
        watcher.forget("g1")
        assert not watcher.is_tracking("g1")

    def test_tracked_games(self):
        watcher = GoalWatcher()
        watcher.detect_new_goals("g1", [])
        watcher.detect_new_goals("g2", [])
        assert watcher.tracked_games == frozenset({"g1", "g2"})

    def test_late_goal_does_not_resurface_later_goals(self):
        """Goals A and B get new running scores once C is filled in before them."""
        watcher = GoalWatcher()
        a = goal(2, "10:00", "away", 0, 1, scorer="L. Rensfeldt")
        b = goal(3, "05:00", "home", 1, 1, scorer="K. Agostino")
        watcher.detect_new_goals("g1", [a, b])

        c = goal(1, "03:00", "home", 1, 0)
        shifted_a = a.model_copy(update={"running_score": RunningScore(home=1, away=1)})
        shifted_b = b.model_copy(update={"running_score": RunningScore(home=2, away=1)})

        assert watcher.detect_new_goals("g1", [c, shifted_a, shifted_b]) == [c]


class TestGoalKey:
    def test_ignores_running_score(self):
        assert goal_key(goal(1, "05:00", "home", 1, 0)) == goal_key(goal(1, "05:00", "home", 2, 0))

    def test_uses_provider_score(self):
        first = goal(1, "05:00", "home", 1, 0, provider_score={"home": 1, "away": 0})
        second = goal(1, "05:00", "home", 1, 0, provider_score={"home": 2, "away": 0})
        assert goal_key(first) != goal_key(second)

    def test_scorer_and_team_distinguish(self):
        assert goal_key(goal(1, "05:00", "home", 1, 0)) != goal_key(goal(1, "05:00", "away", 1, 0))
        assert goal_key(goal(1, "05:00", "home", 1, 0, scorer="X. Y")) != goal_key(goal(1, "05:00", "home", 1, 0))
