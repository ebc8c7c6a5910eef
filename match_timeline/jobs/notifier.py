"""Highlight notifier process.

Polls the SHL schedule on a fixed interval and, for every finished game,
waits for the game highlight clip and announces it once to both teams'
ntfy topics. Each game is notified at most once; games whose highlights
never show up are given up after ``max_age_hours``. With ``--goal-alerts``
the same loop also announces new goals in live games.

Usage:
    python -m match_timeline.jobs.notifier [--once] [--interval SECONDS] [--goal-alerts]
"""

from __future__ import annotations

import argparse
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Sequence

import structlog

from ..config import settings
from ..errors import FeedUnavailableError
from ..live.shl import ShlFeedClient
from ..logging import logger
from ..models import GameSummary
from ..normalization.events import normalize_events
from ..notifications.ntfy import NtfyDispatcher
from ..persistence.seen_games import JsonSeenGameStore
from ..services.freshness import FreshnessTracker, TrackerAction
from ..services.goal_watcher import GoalWatcher
from ..services.score_reconstructor import reconstruct_scores
from ..utils.datetime_utils import now_utc


@dataclass
class CycleReport:
    """What happened to each finished game in one polling cycle."""

    schedule_failed: bool = False
    amnestied: list[str] = field(default_factory=list)
    notified: list[str] = field(default_factory=list)
    given_up: list[str] = field(default_factory=list)
    pending: list[str] = field(default_factory=list)
    skipped: int = 0
    goals_announced: int = 0


class HighlightNotifier:
    def __init__(
        self,
        feed: ShlFeedClient,
        dispatcher: NtfyDispatcher,
        tracker: FreshnessTracker,
        clock: Callable[[], datetime] = now_utc,
        goal_watcher: GoalWatcher | None = None,
    ) -> None:
        self.feed = feed
        self.dispatcher = dispatcher
        self.tracker = tracker
        self.clock = clock
        self.goal_watcher = goal_watcher
        self.cycles = 0

    def run_cycle(self) -> CycleReport:
        """One pass over the schedule.

        A schedule failure ends the cycle with no transitions. Video and
        dispatch failures leave the affected game pending for the next cycle.
        """
        self.cycles += 1
        with structlog.contextvars.bound_contextvars(cycle=self.cycles):
            return self._run_cycle()

    def _run_cycle(self) -> CycleReport:
        report = CycleReport()
        now = self.clock()
        self.tracker.retry_flush()

        try:
            schedule = self.feed.fetch_schedule()
        except FeedUnavailableError as exc:
            logger.warning("notifier_schedule_unavailable", error=str(exc))
            report.schedule_failed = True
            return report

        finished = [game for game in schedule if game.is_finished]
        report.amnestied = self.tracker.bootstrap(finished)
        self.tracker.prune(game.game_id for game in finished)

        for game in finished:
            action = self.tracker.decide(game, now)
            if action == TrackerAction.SKIP:
                report.skipped += 1
                continue
            if action == TrackerAction.GIVE_UP:
                logger.info("notifier_game_given_up", game_id=game.game_id, max_age_hours=self.tracker.max_age_hours)
                self.tracker.mark_resolved(game.game_id)
                report.given_up.append(game.game_id)
                continue

            if self._check_game(game, now):
                report.notified.append(game.game_id)
            else:
                report.pending.append(game.game_id)

        if self.goal_watcher is not None:
            report.goals_announced = self._watch_live_goals(schedule)

        logger.info(
            "notifier_cycle_complete",
            finished_count=len(finished),
            amnestied=len(report.amnestied),
            notified=len(report.notified),
            given_up=len(report.given_up),
            pending=len(report.pending),
            skipped=report.skipped,
            goals_announced=report.goals_announced,
        )
        return report

    def _check_game(self, game: GameSummary, now: datetime) -> bool:
        """Look for the game highlight clip and notify; True once resolved."""
        try:
            clips = self.feed.fetch_game_videos(game.game_id)
        except FeedUnavailableError as exc:
            logger.warning("notifier_videos_unavailable", game_id=game.game_id, error=str(exc))
            return False

        if not self.tracker.should_notify(game, clips, now):
            logger.debug("notifier_highlights_not_ready", game_id=game.game_id, clip_count=len(clips))
            return False

        highlight = next((clip for clip in clips if clip.is_game_highlight and clip.video_url), None)
        if highlight is None:
            logger.info("notifier_highlight_missing_url", game_id=game.game_id)
            return False

        already = self.tracker.delivered_topics(game.game_id)
        result = self.dispatcher.notify_highlights(game, highlight, skip_topics=already)
        self.tracker.record_delivered(game.game_id, result.delivered)
        if not result.complete:
            logger.warning(
                "notifier_dispatch_incomplete",
                game_id=game.game_id,
                delivered=sorted(already | set(result.delivered)),
                failed=result.failed,
            )
            return False

        self.tracker.mark_resolved(game.game_id)
        logger.info(
            "notifier_game_notified",
            game_id=game.game_id,
            clip_id=highlight.id,
            topics=sorted(already | set(result.delivered)),
        )
        return True

    def _watch_live_goals(self, schedule: Sequence[GameSummary]) -> int:
        """Announce goals scored since the previous poll of each live game."""
        live = [game for game in schedule if game.is_live]
        live_ids = {game.game_id for game in live}
        for game_id in list(self.goal_watcher.tracked_games):
            if game_id not in live_ids:
                self.goal_watcher.forget(game_id)

        announced = 0
        for game in live:
            try:
                records = self.feed.fetch_play_by_play(game.game_id)
            except FeedUnavailableError as exc:
                logger.warning("notifier_pbp_unavailable", game_id=game.game_id, error=str(exc))
                continue

            events = normalize_events(records, game.home_team_code, "hockey")
            reconstruction = reconstruct_scores(
                [event for event in events if event.kind == "goal"],
                home_team_code=game.home_team_code,
            )
            for goal in self.goal_watcher.detect_new_goals(game.game_id, reconstruction.goals):
                result = self.dispatcher.notify_goal(game, goal)
                if not result.complete:
                    logger.warning("notifier_goal_dispatch_incomplete", game_id=game.game_id, failed=result.failed)
                announced += 1
        return announced

    def run_forever(self, interval_seconds: int) -> None:
        logger.info("notifier_started", interval_seconds=interval_seconds)
        while True:
            self.run_cycle()
            time.sleep(interval_seconds)


def build_notifier(goal_alerts: bool = False) -> HighlightNotifier:
    config = settings.notifier_config
    store = JsonSeenGameStore(config.seen_games_file)
    store.load()
    return HighlightNotifier(
        feed=ShlFeedClient(settings.feed_config),
        dispatcher=NtfyDispatcher(config),
        tracker=FreshnessTracker(store, max_age_hours=config.max_age_hours),
        goal_watcher=GoalWatcher() if goal_alerts else None,
    )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Notify team topics when SHL game highlights are published")
    parser.add_argument("--once", action="store_true", help="Run a single polling cycle and exit")
    parser.add_argument(
        "--interval",
        type=int,
        default=None,
        help="Seconds between cycles (defaults to NOTIFIER_INTERVAL_SECONDS)",
    )
    parser.add_argument("--goal-alerts", action="store_true", help="Also announce new goals in live games")
    args = parser.parse_args(argv)

    notifier = build_notifier(goal_alerts=args.goal_alerts)
    try:
        if args.once:
            notifier.run_cycle()
        else:
            notifier.run_forever(args.interval or settings.notifier_config.interval_seconds)
    except KeyboardInterrupt:
        logger.info("notifier_stopped")
    finally:
        notifier.feed.close()
        notifier.dispatcher.close()


if __name__ == "__main__":
    main()
