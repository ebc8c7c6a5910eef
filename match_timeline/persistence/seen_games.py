"""Seen-set of games that need no further highlight checks.

Persisted as a JSON list of game id strings. Records are append-only.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Protocol

from ..errors import SeenStoreError
from ..logging import logger


class SeenGameStore(Protocol):
    """Storage the freshness tracker depends on."""

    def load(self) -> None: ...

    def __contains__(self, game_id: object) -> bool: ...

    def __len__(self) -> int: ...

    def append(self, game_id: str) -> bool: ...

    def flush(self) -> None: ...

    @property
    def is_dirty(self) -> bool: ...


class InMemorySeenGameStore:
    """Store without persistence, used in tests and dry runs."""

    def __init__(self, game_ids: list[str] | None = None) -> None:
        self._game_ids: list[str] = list(dict.fromkeys(game_ids or []))
        self._dirty = False
        self.flush_count = 0

    def load(self) -> None:
        return None

    def __contains__(self, game_id: object) -> bool:
        return game_id in self._game_ids

    def __len__(self) -> int:
        return len(self._game_ids)

    @property
    def game_ids(self) -> list[str]:
        return list(self._game_ids)

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    def append(self, game_id: str) -> bool:
        if game_id in self._game_ids:
            return False
        self._game_ids.append(game_id)
        self._dirty = True
        return True

    def flush(self) -> None:
        self._dirty = False
        self.flush_count += 1


class JsonSeenGameStore:
    """JSON file store written via temp file + atomic replace."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._game_ids: list[str] = []
        self._index: set[str] = set()
        self._dirty = False

    def load(self) -> None:
        """Read the seen-set from disk.

        A missing file is an empty set. A file that is not a JSON list is
        logged and treated as empty. Unreadable files raise ``SeenStoreError``.
        """
        if not self.path.exists():
            logger.info("seen_games_file_missing", path=str(self.path))
            self._set_ids([])
            return

        try:
            with open(self.path, "r", encoding="utf-8") as handle:
                data = json.load(handle)
        except json.JSONDecodeError as exc:
            logger.warning("seen_games_file_invalid", path=str(self.path), error=str(exc))
            self._set_ids([])
            return
        except OSError as exc:
            raise SeenStoreError(f"Could not read {self.path}: {exc}") from exc

        if not isinstance(data, list):
            logger.warning("seen_games_file_not_list", path=str(self.path), type=type(data).__name__)
            self._set_ids([])
            return

        self._set_ids([str(game_id) for game_id in data])
        logger.info("seen_games_loaded", path=str(self.path), count=len(self._game_ids))

    def _set_ids(self, game_ids: list[str]) -> None:
        self._game_ids = list(dict.fromkeys(game_ids))
        self._index = set(self._game_ids)
        self._dirty = False

    def __contains__(self, game_id: object) -> bool:
        return game_id in self._index

    def __len__(self) -> int:
        return len(self._game_ids)

    @property
    def game_ids(self) -> list[str]:
        return list(self._game_ids)

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    def append(self, game_id: str) -> bool:
        """Add a game id; returns False if it was already present."""
        if game_id in self._index:
            return False
        self._game_ids.append(game_id)
        self._index.add(game_id)
        self._dirty = True
        return True

    def flush(self) -> None:
        """Write the full list atomically. Leaves the store dirty on failure."""
        temp_file = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_file, "w", encoding="utf-8") as handle:
                json.dump(self._game_ids, handle, indent=2)
            temp_file.replace(self.path)
        except OSError as exc:
            raise SeenStoreError(f"Could not write {self.path}: {exc}") from exc
        self._dirty = False
        logger.debug("seen_games_flushed", path=str(self.path), count=len(self._game_ids))
