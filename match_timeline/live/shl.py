"""SHL feed client: schedule, game videos and play-by-play.

Uses the public endpoints behind www.shl.se. Transport errors and non-200
responses raise ``FeedUnavailableError``; payloads are normalized here so
callers only see ``GameSummary`` / ``VideoClip`` models and raw event lists.
"""

from __future__ import annotations

from typing import Any

import httpx

from ..config import FeedConfig, settings
from ..errors import FeedUnavailableError
from ..logging import logger
from ..models import GameSummary, VideoClip
from ..normalization.games import normalize_clip, normalize_game_summary

SCHEDULE_PATH = "/sports-v2/game-schedule"
VIDEOS_PATH = "/media/videos-for-game"
PLAY_BY_PLAY_PATH = "/gameday/play-by-play/{game_id}"


class ShlFeedClient:
    """Client for the SHL schedule, media and gameday endpoints."""

    def __init__(self, config: FeedConfig | None = None, client: httpx.Client | None = None) -> None:
        self.config = config or settings.feed_config
        self.client = client or httpx.Client(
            timeout=self.config.request_timeout_seconds,
            headers={"User-Agent": self.config.user_agent},
        )

    def close(self) -> None:
        self.client.close()

    def _get_json(self, path: str, *, params: dict[str, Any] | None = None, **log_context: Any) -> Any:
        url = f"{self.config.base_url.rstrip('/')}{path}"
        try:
            response = self.client.get(url, params=params)
        except httpx.HTTPError as exc:
            logger.warning("shl_feed_fetch_error", url=url, error=str(exc), **log_context)
            raise FeedUnavailableError(f"GET {url} failed: {exc}") from exc

        if response.status_code != 200:
            logger.warning(
                "shl_feed_fetch_failed",
                url=url,
                status=response.status_code,
                body=response.text[:200] if response.text else "",
                **log_context,
            )
            raise FeedUnavailableError(f"GET {url} returned HTTP {response.status_code}")

        try:
            return response.json()
        except ValueError as exc:
            logger.warning("shl_feed_invalid_json", url=url, error=str(exc), **log_context)
            raise FeedUnavailableError(f"GET {url} returned invalid JSON") from exc

    def fetch_schedule(self) -> list[GameSummary]:
        """Fetch the configured season schedule."""
        params = {
            "seasonUuid": self.config.season_uuid,
            "seriesUuid": self.config.series_uuid,
            "gameTypeUuid": self.config.game_type_uuid,
            "gamePlace": "all",
            "played": "all",
        }
        payload = self._get_json(SCHEDULE_PATH, params=params)
        raw_games = payload.get("gameInfo") if isinstance(payload, dict) else None
        if not isinstance(raw_games, list):
            logger.warning("shl_schedule_missing_game_info")
            return []

        games: list[GameSummary] = []
        for raw in raw_games:
            game = normalize_game_summary(raw) if isinstance(raw, dict) else None
            if game is None:
                logger.debug("shl_schedule_entry_skipped", raw_id=raw.get("uuid") if isinstance(raw, dict) else None)
                continue
            games.append(game)
        logger.info("shl_schedule_parsed", count=len(games))
        return games

    def fetch_game_videos(self, game_id: str) -> list[VideoClip]:
        params = {"page": 0, "pageSize": self.config.videos_page_size, "gameUuid": game_id}
        payload = self._get_json(VIDEOS_PATH, params=params, game_id=game_id)
        items = payload.get("items") if isinstance(payload, dict) else None
        clips = [
            clip
            for clip in (normalize_clip(item) for item in items or [] if isinstance(item, dict))
            if clip is not None
        ]
        logger.debug("shl_videos_parsed", game_id=game_id, count=len(clips))
        return clips

    def fetch_play_by_play(self, game_id: str) -> list[dict[str, Any]]:
        """Raw play-by-play records, in provider order."""
        payload = self._get_json(PLAY_BY_PLAY_PATH.format(game_id=game_id), game_id=game_id)
        if not isinstance(payload, list):
            logger.warning("shl_pbp_not_list", game_id=game_id)
            return []
        return [record for record in payload if isinstance(record, dict)]
