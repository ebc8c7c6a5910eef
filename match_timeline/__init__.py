"""Match event timeline reconstruction, highlight correlation and notifier."""
