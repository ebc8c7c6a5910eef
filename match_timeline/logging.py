"""
structlog setup shared by the timeline engine and the notifier process.

Every event is a snake_case key with keyword context. Output is one JSON
object per line (event under "message") unless LOG_FORMAT=console. Context
bound with ``structlog.contextvars`` (the notifier binds its cycle number)
is merged into every event.
"""

from __future__ import annotations

import logging

import structlog

from .config import settings


def _resolve_level(level: str | None, environment: str) -> int:
    if not level:
        return logging.INFO if environment.lower() == "production" else logging.DEBUG
    return logging.getLevelNamesMapping().get(level.strip().upper(), logging.INFO)


def _output_processors(log_format: str) -> list:
    if log_format.lower() == "console":
        return [structlog.dev.ConsoleRenderer(colors=False)]
    return [
        structlog.processors.EventRenamer("message"),
        structlog.processors.JSONRenderer(),
    ]


def configure_logging() -> None:
    level = _resolve_level(settings.log_level, settings.environment)
    logging.basicConfig(level=level)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            *_output_processors(settings.log_format),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )


configure_logging()

logger = structlog.get_logger("match-timeline").bind(
    service="match-timeline",
    environment=settings.environment,
)
