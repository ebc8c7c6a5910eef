"""Full pipeline for one game view, plus an optional memo.

normalize -> reconstruct scores -> group for display -> correlate clips.
"""

from __future__ import annotations

import hashlib
import json
from collections import OrderedDict
from typing import Any, Mapping, Sequence

from ..logging import logger
from ..models import NormalizedEvent, Sport, TimelineResult, VideoClip
from ..normalization.events import normalize_events
from ..normalization.team_stats import parse_team_stats
from .highlight_correlator import correlate_goals
from .score_display import resolve_score_display
from .score_reconstructor import reconstruct_scores
from .timeline_grouper import group_timeline

DEFAULT_MEMO_SIZE = 64


def build_game_timeline(
    game_id: str,
    sport: Sport,
    records: Sequence[Any],
    home_team_code: str | None,
    clips: Sequence[VideoClip] = (),
    summary_score: Mapping[str, Any] | None = None,
    team_info_score: Mapping[str, Any] | None = None,
    team_stats: Any = None,
) -> TimelineResult:
    """Run the whole timeline pipeline for one game.

    Pure: the same inputs always give an equal result.
    """
    events = normalize_events(list(records), home_team_code, sport)
    reconstruction = reconstruct_scores(
        [event for event in events if event.kind == "goal"],
        home_team_code=home_team_code,
    )

    scored_by_index = {goal.source_index: goal for goal in reconstruction.goals}
    merged: list[NormalizedEvent] = [
        scored_by_index.get(event.source_index, event) if event.kind == "goal" else event
        for event in events
    ]

    computed = reconstruction.final_score if reconstruction.has_resolved_goals else None
    stats = parse_team_stats(team_stats)
    result = TimelineResult(
        game_id=game_id,
        sport=sport,
        display=tuple(group_timeline(merged, sport)),
        goals=reconstruction.goals,
        unresolved_goals=reconstruction.unresolved,
        goal_clips=correlate_goals(reconstruction.goals, clips),
        final_score=reconstruction.final_score,
        score_display=resolve_score_display(computed, summary_score, team_info_score, stats),
        team_stats=stats,
    )
    logger.debug(
        "timeline_built",
        game_id=game_id,
        sport=sport,
        event_count=len(events),
        goal_count=len(reconstruction.goals),
        unresolved_count=len(reconstruction.unresolved),
        final_score=str(reconstruction.final_score),
    )
    return result


def input_fingerprint(
    sport: Sport,
    records: Sequence[Any],
    home_team_code: str | None,
    clips: Sequence[VideoClip],
    summary_score: Mapping[str, Any] | None,
    team_info_score: Mapping[str, Any] | None,
    team_stats: Any = None,
) -> str:
    """sha1 of the canonical JSON of the pipeline inputs."""
    canonical = json.dumps(
        {
            "sport": sport,
            "records": list(records),
            "home_team_code": home_team_code,
            "clips": [clip.model_dump(mode="json") for clip in clips],
            "summary_score": summary_score,
            "team_info_score": team_info_score,
            "team_stats": team_stats,
        },
        sort_keys=True,
        separators=(",", ":"),
        default=str,
    )
    return hashlib.sha1(canonical.encode("utf-8")).hexdigest()


class TimelineMemo:
    """Bounded LRU memo for ``build_game_timeline``.

    Keyed on ``(game_id, input fingerprint)`` so a changed feed always
    produces a fresh result.
    """

    def __init__(self, max_size: int = DEFAULT_MEMO_SIZE) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self._entries: OrderedDict[tuple[str, str], TimelineResult] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def build(
        self,
        game_id: str,
        sport: Sport,
        records: Sequence[Any],
        home_team_code: str | None,
        clips: Sequence[VideoClip] = (),
        summary_score: Mapping[str, Any] | None = None,
        team_info_score: Mapping[str, Any] | None = None,
        team_stats: Any = None,
    ) -> TimelineResult:
        key = (
            game_id,
            input_fingerprint(sport, records, home_team_code, clips, summary_score, team_info_score, team_stats),
        )
        cached = self._entries.get(key)
        if cached is not None:
            self._entries.move_to_end(key)
            self.hits += 1
            return cached

        self.misses += 1
        result = build_game_timeline(
            game_id,
            sport,
            records,
            home_team_code,
            clips=clips,
            summary_score=summary_score,
            team_info_score=team_info_score,
            team_stats=team_stats,
        )
        self._entries[key] = result
        if len(self._entries) > self.max_size:
            self._entries.popitem(last=False)
        return result

    def clear(self) -> None:
        self._entries.clear()
