"""Tests for services/freshness.py."""

from __future__ import annotations

from datetime import timedelta
from unittest.mock import MagicMock

from conftest import highlight_clip, make_game

from match_timeline.errors import SeenStoreError
from match_timeline.models import VideoClip
from match_timeline.persistence.seen_games import InMemorySeenGameStore
from match_timeline.services.freshness import FreshnessTracker, GameFreshness, TrackerAction


class TestDecide:
    def test_resolved_game_skipped(self, fixed_now):
        tracker = FreshnessTracker(InMemorySeenGameStore(["g1"]))
        assert tracker.decide(make_game("g1", fixed_now - timedelta(hours=2)), fixed_now) == TrackerAction.SKIP

    def test_recent_game_checked(self, fixed_now):
        tracker = FreshnessTracker(InMemorySeenGameStore())
        game = make_game("g1", fixed_now - timedelta(hours=2))
        assert tracker.state("g1") == GameFreshness.UNSEEN
        assert tracker.decide(game, fixed_now) == TrackerAction.CHECK
        assert tracker.state("g1") == GameFreshness.PENDING

    def test_timeout_after_window(self, fixed_now):
        """Highlights never appear: past 24 hours the game is given up."""
        tracker = FreshnessTracker(InMemorySeenGameStore())
        game = make_game("g1", fixed_now - timedelta(hours=25))
        assert tracker.decide(game, fixed_now) == TrackerAction.GIVE_UP

    def test_exactly_at_window_still_checked(self, fixed_now):
        tracker = FreshnessTracker(InMemorySeenGameStore())
        game = make_game("g1", fixed_now - timedelta(hours=24))
        assert tracker.decide(game, fixed_now) == TrackerAction.CHECK

    def test_custom_window(self, fixed_now):
        tracker = FreshnessTracker(InMemorySeenGameStore(), max_age_hours=6)
        assert tracker.decide(make_game("g1", fixed_now - timedelta(hours=7)), fixed_now) == TrackerAction.GIVE_UP

    def test_no_start_time_checked(self, fixed_now):
        tracker = FreshnessTracker(InMemorySeenGameStore())
        assert tracker.decide(make_game("g1", None), fixed_now) == TrackerAction.CHECK

    def test_action_values(self):
        assert TrackerAction.GIVE_UP.value == "giveUpAndMarkSeen"
        assert TrackerAction.SKIP.value == "skip"
        assert TrackerAction.CHECK.value == "check"


class TestShouldNotify:
    def test_highlight_present(self, fixed_now):
        tracker = FreshnessTracker(InMemorySeenGameStore())
        game = make_game("g1", fixed_now - timedelta(hours=3))
        assert tracker.should_notify(game, [highlight_clip()], fixed_now) is True

    def test_no_highlight_clip(self, fixed_now):
        tracker = FreshnessTracker(InMemorySeenGameStore())
        game = make_game("g1", fixed_now - timedelta(hours=3))
        clips = [VideoClip(id="c1", tags=("goal.1-0",))]
        assert tracker.should_notify(game, clips, fixed_now) is False

    def test_resolved_game_never_notifies(self, fixed_now):
        tracker = FreshnessTracker(InMemorySeenGameStore(["g1"]))
        game = make_game("g1", fixed_now - timedelta(hours=3))
        assert tracker.should_notify(game, [highlight_clip()], fixed_now) is False

    def test_stale_game_never_notifies(self, fixed_now):
        tracker = FreshnessTracker(InMemorySeenGameStore())
        game = make_game("g1", fixed_now - timedelta(hours=30))
        assert tracker.should_notify(game, [highlight_clip()], fixed_now) is False

    def test_does_not_mark_pending(self, fixed_now):
        tracker = FreshnessTracker(InMemorySeenGameStore())
        game = make_game("g1", fixed_now - timedelta(hours=3))
        tracker.should_notify(game, [highlight_clip()], fixed_now)
        assert tracker.state("g1") == GameFreshness.UNSEEN


class TestBootstrap:
    def test_amnesty_all_but_most_recent(self, fixed_now):
        """[A, B, C] on an empty seen-set: A and B resolved, C pending."""
        store = InMemorySeenGameStore()
        tracker = FreshnessTracker(store)
        games = [
            make_game("C", fixed_now - timedelta(hours=1)),
            make_game("A", fixed_now - timedelta(hours=5)),
            make_game("B", fixed_now - timedelta(hours=3)),
        ]

        resolved = tracker.bootstrap(games)

        assert resolved == ["A", "B"]
        assert tracker.state("A") == GameFreshness.RESOLVED
        assert tracker.state("B") == GameFreshness.RESOLVED
        assert tracker.decide(games[0], fixed_now) == TrackerAction.CHECK
        assert store.flush_count == 1

    def test_single_candidate_no_amnesty(self, fixed_now):
        store = InMemorySeenGameStore()
        tracker = FreshnessTracker(store)
        assert tracker.bootstrap([make_game("A", fixed_now)]) == []
        assert len(store) == 0

    def test_non_empty_store_no_amnesty(self, fixed_now):
        store = InMemorySeenGameStore(["old"])
        tracker = FreshnessTracker(store)
        games = [make_game("A", fixed_now - timedelta(hours=2)), make_game("B", fixed_now)]
        assert tracker.bootstrap(games) == []
        assert store.game_ids == ["old"]

    def test_runs_again_while_store_stays_empty(self, fixed_now):
        tracker = FreshnessTracker(InMemorySeenGameStore())
        assert tracker.bootstrap([]) == []
        games = [make_game("A", fixed_now - timedelta(hours=2)), make_game("B", fixed_now)]
        assert tracker.bootstrap(games) == ["A"]


class TestMarkResolved:
    def test_appends_and_flushes(self):
        store = InMemorySeenGameStore()
        tracker = FreshnessTracker(store)
        assert tracker.mark_resolved("g1") is True
        assert store.game_ids == ["g1"]
        assert store.flush_count == 1
        assert tracker.mark_resolved("g1") is False
        assert store.flush_count == 1

    def test_flush_failure_logged_and_retried(self):
        store = MagicMock()
        store.__contains__.return_value = False
        store.__len__.return_value = 0
        store.append.return_value = True
        store.flush.side_effect = [SeenStoreError("disk full"), None]
        store.is_dirty = True
        tracker = FreshnessTracker(store)

        assert tracker.mark_resolved("g1") is True
        assert tracker.retry_flush() is True
        assert store.flush.call_count == 2

    def test_retry_flush_noop_when_clean(self):
        store = InMemorySeenGameStore()
        tracker = FreshnessTracker(store)
        assert tracker.retry_flush() is True
        assert store.flush_count == 0


class TestDeliveredTopics:
    def test_recorded_for_pending_game(self, fixed_now):
        tracker = FreshnessTracker(InMemorySeenGameStore())
        tracker.decide(make_game("g1", fixed_now - timedelta(hours=2)), fixed_now)
        tracker.record_delivered("g1", ["shl-highlights-LHF"])
        tracker.record_delivered("g1", [])
        assert tracker.delivered_topics("g1") == frozenset({"shl-highlights-LHF"})

    def test_cleared_on_resolve(self):
        tracker = FreshnessTracker(InMemorySeenGameStore())
        tracker.record_delivered("g1", ["shl-highlights-LHF"])
        tracker.mark_resolved("g1")
        assert tracker.delivered_topics("g1") == frozenset()

    def test_ignored_for_resolved_game(self):
        tracker = FreshnessTracker(InMemorySeenGameStore(["g1"]))
        tracker.record_delivered("g1", ["shl-highlights-LHF"])
        assert tracker.delivered_topics("g1") == frozenset()


class TestPrune:
    def test_drops_games_off_schedule(self, fixed_now):
        tracker = FreshnessTracker(InMemorySeenGameStore())
        for game_id in ("g1", "g2"):
            tracker.decide(make_game(game_id, fixed_now - timedelta(hours=2)), fixed_now)
        tracker.record_delivered("g1", ["shl-highlights-LHF"])

        dropped = tracker.prune(["g2"])

        assert dropped == ["g1"]
        assert tracker.state("g1") == GameFreshness.UNSEEN
        assert tracker.state("g2") == GameFreshness.PENDING
        assert tracker.delivered_topics("g1") == frozenset()

    def test_resolved_games_unaffected(self):
        store = InMemorySeenGameStore(["g1"])
        tracker = FreshnessTracker(store)
        assert tracker.prune([]) == []
        assert tracker.state("g1") == GameFreshness.RESOLVED
