"""Match reconstructed goals to highlight clips."""

from __future__ import annotations

from typing import Iterable, Sequence

from ..models import NormalizedEvent, VideoClip

MIN_SURNAME_LENGTH = 3


def _match_by_tag(goal: NormalizedEvent, clips: Sequence[VideoClip]) -> VideoClip | None:
    if goal.running_score is None:
        return None
    tag = goal.running_score.tag
    return next((clip for clip in clips if tag in clip.tags), None)


def _match_by_surname(goal: NormalizedEvent, clips: Sequence[VideoClip]) -> VideoClip | None:
    surname = (goal.payload.get("scorer_last_name") or "").strip().lower()
    if len(surname) < MIN_SURNAME_LENGTH:
        return None
    return next(
        (clip for clip in clips if clip.title_text and surname in clip.title_text.lower()),
        None,
    )


def find_goal_clip(goal: NormalizedEvent, clips: Sequence[VideoClip]) -> VideoClip | None:
    """Find the clip for a goal.

    The ``goal.<home>-<away>`` tag built from the running score wins. Only
    when no clip carries that tag (or the goal has no running score) is the
    scorer's surname looked up in clip titles. First match wins in both tiers.
    """
    return _match_by_tag(goal, clips) or _match_by_surname(goal, clips)


def correlate_goals(
    goals: Iterable[NormalizedEvent],
    clips: Sequence[VideoClip],
) -> dict[int, str | None]:
    """Clip id per goal, keyed by the goal's ``source_index``."""
    matches: dict[int, str | None] = {}
    for goal in goals:
        if goal.source_index is None:
            continue
        clip = find_goal_clip(goal, clips)
        matches[goal.source_index] = clip.id if clip else None
    return matches
