"""Tests for config.py and validate_env.py."""

from __future__ import annotations

import pytest

from match_timeline.config import Settings
from match_timeline.validate_env import (
    require_env,
    validate_env,
    validate_environment_value,
    validate_http_url,
    validate_positive_int,
)

OVERRIDE_VARS = (
    "SEEN_GAMES_FILE",
    "NOTIFIER_INTERVAL_SECONDS",
    "HIGHLIGHT_MAX_AGE_HOURS",
    "NTFY_URL",
    "FEED_BASE_URL",
    "LOG_FORMAT",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in OVERRIDE_VARS:
        monkeypatch.delenv(name, raising=False)
    validate_env.cache_clear()
    yield monkeypatch
    validate_env.cache_clear()


class TestSettings:
    def test_defaults(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.notifier_config.interval_seconds == 300
        assert settings.notifier_config.max_age_hours == 24
        assert settings.notifier_config.topic_prefix == "shl-highlights-"
        assert settings.feed_config.base_url == "https://www.shl.se/api"
        assert settings.log_format == "json"

    def test_overrides(self, clean_env):
        clean_env.setenv("SEEN_GAMES_FILE", "/tmp/seen.json")
        clean_env.setenv("NOTIFIER_INTERVAL_SECONDS", "60")
        clean_env.setenv("HIGHLIGHT_MAX_AGE_HOURS", "12")
        clean_env.setenv("NTFY_URL", "https://ntfy.example/")
        clean_env.setenv("FEED_BASE_URL", "https://feed.example/api/")
        settings = Settings(_env_file=None)
        assert settings.notifier_config.seen_games_file == "/tmp/seen.json"
        assert settings.notifier_config.interval_seconds == 60
        assert settings.notifier_config.max_age_hours == 12
        assert settings.notifier_config.ntfy_url == "https://ntfy.example"
        assert settings.feed_config.base_url == "https://feed.example/api"


class TestValidators:
    def test_require_env_missing(self, monkeypatch):
        monkeypatch.delenv("SOME_MISSING_VAR", raising=False)
        with pytest.raises(RuntimeError):
            require_env("SOME_MISSING_VAR")

    def test_environment_value(self):
        validate_environment_value("production")
        with pytest.raises(RuntimeError):
            validate_environment_value("qa")

    def test_http_url(self):
        validate_http_url("NTFY_URL", "https://ntfy.sh")
        validate_http_url("NTFY_URL", "http://localhost:8080")
        with pytest.raises(RuntimeError):
            validate_http_url("NTFY_URL", "http://localhost:8080", allow_local=False)
        with pytest.raises(RuntimeError):
            validate_http_url("NTFY_URL", "ntfy.sh")

    def test_positive_int(self):
        validate_positive_int("NOTIFIER_INTERVAL_SECONDS", "30")
        with pytest.raises(RuntimeError):
            validate_positive_int("NOTIFIER_INTERVAL_SECONDS", "0")
        with pytest.raises(RuntimeError):
            validate_positive_int("NOTIFIER_INTERVAL_SECONDS", "five")


class TestValidateEnv:
    def test_development_allows_local_ntfy(self, clean_env):
        clean_env.setenv("ENVIRONMENT", "development")
        clean_env.setenv("NTFY_URL", "http://127.0.0.1:8080")
        validate_env()

    def test_production_rejects_local_ntfy(self, clean_env):
        clean_env.setenv("ENVIRONMENT", "production")
        clean_env.setenv("NTFY_URL", "http://127.0.0.1")
        with pytest.raises(RuntimeError):
            validate_env()

    def test_rejects_bad_interval(self, clean_env):
        clean_env.setenv("ENVIRONMENT", "development")
        clean_env.setenv("NOTIFIER_INTERVAL_SECONDS", "-5")
        with pytest.raises(RuntimeError):
            validate_env()

    def test_rejects_unknown_log_format(self, clean_env):
        clean_env.setenv("ENVIRONMENT", "development")
        clean_env.setenv("LOG_FORMAT", "xml")
        with pytest.raises(RuntimeError):
            validate_env()
