"""Freshness/dedup decisions for finished games in the highlight notifier.

A game is ``unseen`` until the tracker first looks at it, ``pending`` while
highlights are being waited for, and ``resolved`` once it is in the
seen-set. Resolved is terminal.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, Sequence

from ..errors import SeenStoreError
from ..logging import logger
from ..models import GameSummary, VideoClip
from ..persistence.seen_games import SeenGameStore
from ..utils.datetime_utils import hours_since

DEFAULT_MAX_AGE_HOURS = 24


class TrackerAction(str, Enum):
    SKIP = "skip"
    CHECK = "check"
    GIVE_UP = "giveUpAndMarkSeen"


class GameFreshness(str, Enum):
    UNSEEN = "unseen"
    PENDING = "pending"
    RESOLVED = "resolved"


def _start_sort_key(game: GameSummary) -> datetime:
    return game.start_time or datetime.min.replace(tzinfo=timezone.utc)


class FreshnessTracker:
    """Decides, per finished game, whether to look for highlights again."""

    def __init__(self, store: SeenGameStore, max_age_hours: int = DEFAULT_MAX_AGE_HOURS) -> None:
        self.store = store
        self.max_age_hours = max_age_hours
        self._pending: set[str] = set()
        self._delivered: dict[str, set[str]] = {}

    def state(self, game_id: str) -> GameFreshness:
        if game_id in self.store:
            return GameFreshness.RESOLVED
        if game_id in self._pending:
            return GameFreshness.PENDING
        return GameFreshness.UNSEEN

    def _classify(self, game: GameSummary, now: datetime) -> TrackerAction:
        if game.game_id in self.store:
            return TrackerAction.SKIP
        if game.start_time is not None and hours_since(game.start_time, now) > self.max_age_hours:
            return TrackerAction.GIVE_UP
        return TrackerAction.CHECK

    def decide(self, game: GameSummary, now: datetime) -> TrackerAction:
        """Pick the action for one game this cycle.

        Games without a start time cannot age out and are always checked.
        """
        action = self._classify(game, now)
        if action != TrackerAction.SKIP:
            self._pending.add(game.game_id)
        return action

    def should_notify(self, game: GameSummary, clips: Sequence[VideoClip], now: datetime) -> bool:
        """True when the game is still within its window and a game highlight clip is out.

        Does not change tracker state.
        """
        if self._classify(game, now) != TrackerAction.CHECK:
            return False
        return any(clip.is_game_highlight for clip in clips)

    def delivered_topics(self, game_id: str) -> frozenset[str]:
        return frozenset(self._delivered.get(game_id, ()))

    def record_delivered(self, game_id: str, topics: Iterable[str]) -> None:
        """Remember topics already notified for a pending game so retries skip them."""
        topics = set(topics)
        if topics and game_id not in self.store:
            self._delivered.setdefault(game_id, set()).update(topics)

    def prune(self, game_ids: Iterable[str]) -> list[str]:
        """Forget pending games that are no longer among ``game_ids``."""
        keep = set(game_ids)
        dropped = sorted(self._pending - keep)
        self._pending &= keep
        for game_id in list(self._delivered):
            if game_id not in keep:
                del self._delivered[game_id]
        if dropped:
            logger.debug("freshness_pending_pruned", dropped=dropped)
        return dropped

    def bootstrap(self, finished_games: Iterable[GameSummary]) -> list[str]:
        """Amnesty for a fresh install.

        Only when the seen-set is empty and more than one finished game is
        known: every game except the most recently started is resolved
        without a check. Returns the ids that were resolved.
        """
        candidates = [game for game in finished_games if game.game_id not in self.store]
        if len(self.store) > 0 or len(candidates) <= 1:
            return []

        ordered = sorted(candidates, key=_start_sort_key)
        amnestied = [game.game_id for game in ordered[:-1]]
        for game_id in amnestied:
            self.store.append(game_id)
            self._pending.discard(game_id)
            self._delivered.pop(game_id, None)
        logger.info(
            "seen_games_bootstrap_amnesty",
            resolved_count=len(amnestied),
            kept_pending=ordered[-1].game_id,
        )
        self._flush()
        return amnestied

    def mark_resolved(self, game_id: str) -> bool:
        """Resolve a game and flush. Returns False if it was already resolved."""
        added = self.store.append(game_id)
        self._pending.discard(game_id)
        self._delivered.pop(game_id, None)
        if added:
            self._flush()
        return added

    def retry_flush(self) -> bool:
        """Flush writes left over from a failed cycle. Returns True if nothing remains."""
        if not self.store.is_dirty:
            return True
        return self._flush()

    def _flush(self) -> bool:
        try:
            self.store.flush()
        except SeenStoreError as exc:
            logger.warning("seen_games_flush_failed", error=str(exc), seen_count=len(self.store))
            return False
        return True
