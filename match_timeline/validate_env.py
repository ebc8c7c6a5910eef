"""Fail-fast checks on the environment before the notifier starts.

Bad overrides raise RuntimeError at startup instead of surfacing as a
crash halfway through a polling cycle.
"""

from __future__ import annotations

import os
from functools import lru_cache
from urllib.parse import urlparse

ALLOWED_ENVIRONMENTS = {"development", "staging", "production"}
ALLOWED_LOG_FORMATS = {"json", "console"}
POSITIVE_INT_VARS = ("NOTIFIER_INTERVAL_SECONDS", "HIGHLIGHT_MAX_AGE_HOURS")
URL_VARS = ("NTFY_URL", "FEED_BASE_URL")
LOCAL_HOSTS = {"localhost", "127.0.0.1", "::1"}


def require_env(name: str) -> str:
    """Return a stripped environment variable, or raise if it is unset or blank."""
    value = os.getenv(name)
    if value is None or not value.strip():
        raise RuntimeError(f"{name} is required and must be set before startup.")
    return value.strip()


def validate_environment_value(environment: str) -> None:
    if environment not in ALLOWED_ENVIRONMENTS:
        allowed = ", ".join(sorted(ALLOWED_ENVIRONMENTS))
        raise RuntimeError(f"ENVIRONMENT must be one of: {allowed}.")


def validate_http_url(name: str, value: str, *, allow_local: bool = True) -> None:
    """Require an http(s) URL with a host; optionally reject loopback hosts."""
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise RuntimeError(f"{name} must be an http(s) URL with a hostname.")
    if not allow_local and parsed.hostname in LOCAL_HOSTS:
        raise RuntimeError(f"{name} must not point to localhost in production.")


def validate_positive_int(name: str, value: str) -> None:
    try:
        parsed = int(value)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {value!r}.") from None
    if parsed <= 0:
        raise RuntimeError(f"{name} must be greater than zero.")


@lru_cache(maxsize=1)
def validate_env() -> None:
    """Validate ENVIRONMENT and any notifier overrides that are set.

    Outside production, loopback URLs are allowed so a local ntfy server or
    recorded feed can be used.
    """
    environment = require_env("ENVIRONMENT")
    validate_environment_value(environment)
    is_production = environment == "production"

    log_format = os.getenv("LOG_FORMAT")
    if log_format and log_format.strip().lower() not in ALLOWED_LOG_FORMATS:
        raise RuntimeError(f"LOG_FORMAT must be one of: {', '.join(sorted(ALLOWED_LOG_FORMATS))}.")

    for name in POSITIVE_INT_VARS:
        value = os.getenv(name)
        if value and value.strip():
            validate_positive_int(name, value.strip())

    for name in URL_VARS:
        value = os.getenv(name)
        if value and value.strip():
            validate_http_url(name, value.strip(), allow_local=not is_production)
