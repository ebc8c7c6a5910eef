"""ntfy.sh dispatch for highlight and goal notifications.

One JSON POST per team topic (``<prefix><TEAM_CODE>``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

import httpx

from ..config import NotifierConfig, settings
from ..errors import NotificationError
from ..logging import logger
from ..models import GameSummary, NormalizedEvent, VideoClip

DEFAULT_ARENA = "arenan"
GOAL_PRIORITY = 5


@dataclass
class DispatchResult:
    """Topics posted to successfully, and those that failed, in one dispatch."""

    delivered: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.failed


def team_topic(prefix: str, team_code: str) -> str:
    return f"{prefix}{team_code}"


def build_highlight_payload(
    game: GameSummary,
    clip: VideoClip,
    team_code: str,
    *,
    topic_prefix: str,
    priority: int,
) -> dict[str, Any]:
    """ntfy JSON body announcing a game's highlight clip to one team topic."""
    home = game.home_display_name
    away = game.away_display_name
    arena = game.venue or DEFAULT_ARENA
    video_url = clip.video_url
    message = f"Watch the summary from {home} vs {away} at {arena}"
    if clip.thumbnail_url and video_url:
        message += f"\n\n[![Highlights]({clip.thumbnail_url})]({video_url})"

    payload: dict[str, Any] = {
        "topic": team_topic(topic_prefix, team_code),
        "title": f"Highlights: {home} vs {away}",
        "message": message,
        "tags": ["hockey", team_code.lower(), "highlights"],
        "priority": priority,
        "markdown": True,
    }
    if video_url:
        payload["click"] = video_url
        payload["actions"] = [{"action": "view", "label": "Watch Highlights", "url": video_url}]
    return payload


def build_goal_payload(
    game: GameSummary,
    goal: NormalizedEvent,
    team_code: str,
    *,
    topic_prefix: str,
) -> dict[str, Any]:
    """ntfy JSON body for a live goal, e.g. ``"L. Svensson scores! 2-1 (12:34 P2)"``."""
    if goal.side == "away":
        scoring_team = game.away_display_name
    elif goal.side == "home":
        scoring_team = game.home_display_name
    else:
        scoring_team = goal.team_code or "Unknown"

    message = f"{goal.payload.get('scorer') or 'Unknown'} scores!"
    if goal.running_score is not None:
        message += f" {goal.running_score}"
    if goal.clock:
        message += f" ({goal.clock} P{goal.period})"

    return {
        "topic": team_topic(topic_prefix, team_code),
        "title": f"Goal: {scoring_team}",
        "message": message,
        "tags": ["hockey", team_code.lower(), "goal"],
        "priority": GOAL_PRIORITY,
    }


class NtfyDispatcher:
    """Posts highlight and goal notifications to an ntfy server."""

    def __init__(self, config: NotifierConfig | None = None, client: httpx.Client | None = None) -> None:
        self.config = config or settings.notifier_config
        self.client = client or httpx.Client(timeout=self.config.request_timeout_seconds)

    def close(self) -> None:
        self.client.close()

    def send(self, payload: dict[str, Any]) -> None:
        topic = payload.get("topic")
        try:
            response = self.client.post(self.config.ntfy_url, json=payload)
        except httpx.HTTPError as exc:
            logger.error("ntfy_send_error", topic=topic, error=str(exc))
            raise NotificationError(f"ntfy POST to {topic} failed: {exc}") from exc

        if response.status_code >= 400:
            logger.error(
                "ntfy_send_failed",
                topic=topic,
                status=response.status_code,
                body=response.text[:200] if response.text else "",
            )
            raise NotificationError(f"ntfy POST to {topic} returned HTTP {response.status_code}")
        logger.info("ntfy_sent", topic=topic)

    def _send_each(self, payloads: Iterable[dict[str, Any]]) -> DispatchResult:
        result = DispatchResult()
        for payload in payloads:
            try:
                self.send(payload)
            except NotificationError:
                result.failed.append(payload["topic"])
                continue
            result.delivered.append(payload["topic"])
        return result

    def notify_highlights(
        self,
        game: GameSummary,
        clip: VideoClip,
        skip_topics: Iterable[str] = (),
    ) -> DispatchResult:
        """Notify both teams' topics, except those already delivered.

        Every remaining topic is attempted even when an earlier one fails.
        """
        skipped = set(skip_topics)
        payloads = [
            build_highlight_payload(
                game,
                clip,
                team_code,
                topic_prefix=self.config.topic_prefix,
                priority=self.config.priority,
            )
            for team_code in (game.home_team_code, game.away_team_code)
        ]
        return self._send_each(payload for payload in payloads if payload["topic"] not in skipped)

    def notify_goal(self, game: GameSummary, goal: NormalizedEvent) -> DispatchResult:
        """Announce a live goal to followers of either team."""
        return self._send_each(
            build_goal_payload(game, goal, team_code, topic_prefix=self.config.topic_prefix)
            for team_code in (game.home_team_code, game.away_team_code)
        )
