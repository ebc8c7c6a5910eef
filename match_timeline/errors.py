"""Exception types raised across the timeline engine and notifier."""

from __future__ import annotations


class TimelineError(RuntimeError):
    """Base class for match timeline errors."""


class FeedUnavailableError(TimelineError):
    """Raised when the provider feed cannot be reached or answers non-200.

    The notifier treats this as transient: the affected game stays pending.
    """


class NotificationError(TimelineError):
    """Raised when a highlight notification could not be dispatched."""


class SeenStoreError(TimelineError):
    """Raised when the seen-set cannot be loaded or flushed."""
