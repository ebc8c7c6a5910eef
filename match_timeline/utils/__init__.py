"""Generic helpers shared by the engine and the notifier."""
