"""Timeline engine services and notifier decision logic."""
