"""Durable notifier state."""

from .seen_games import InMemorySeenGameStore, JsonSeenGameStore, SeenGameStore

__all__ = ["InMemorySeenGameStore", "JsonSeenGameStore", "SeenGameStore"]
