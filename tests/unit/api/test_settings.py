"""Tests for api/settings module."""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from api.settings import Settings, get_settings


class TestDefaults:
    def test_local_development_defaults(self):
        with patch.dict("os.environ", {}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.pocketbase_url == "http://127.0.0.1:8090"
        assert settings.skip_pb_auth is False
        assert settings.stats_cache_ttl_seconds == 60
        assert settings.max_reported_errors == 5
        assert settings.max_import_errors == 10
        assert settings.og_host_name == "OG Sandwich Project"

    def test_environment_overrides(self):
        env = {
            "POCKETBASE_URL": "http://pb:8090",
            "SKIP_PB_AUTH": "true",
            "MAX_REPORTED_ERRORS": "3",
            "STATS_CACHE_TTL_SECONDS": "0",
        }
        with patch.dict("os.environ", env, clear=True):
            settings = Settings(_env_file=None)

        assert settings.pocketbase_url == "http://pb:8090"
        assert settings.skip_pb_auth is True
        assert settings.max_reported_errors == 3
        assert settings.stats_cache_ttl_seconds == 0

    def test_error_cap_must_be_positive(self):
        with patch.dict("os.environ", {"MAX_REPORTED_ERRORS": "0"}, clear=True):
            with pytest.raises(ValidationError):
                Settings(_env_file=None)


class TestAllowedOrigins:
    def test_comma_separated_origins(self):
        with patch.dict("os.environ", {"ALLOWED_ORIGINS": "https://a.example, https://b.example,,"}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.allowed_origins == ["https://a.example", "https://b.example"]

    def test_default_origins(self):
        with patch.dict("os.environ", {}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.allowed_origins == ["http://localhost:3000", "http://localhost:5173"]


class TestPasswordWarning:
    def test_insecure_password_logs_warning(self, caplog):
        with patch.dict("os.environ", {"POCKETBASE_ADMIN_PASSWORD": "password"}, clear=True):
            with caplog.at_level(logging.WARNING, logger="api.settings"):
                Settings(_env_file=None)

        assert "SECURITY WARNING" in caplog.text

    def test_strong_password_is_quiet(self, caplog):
        with patch.dict("os.environ", {"POCKETBASE_ADMIN_PASSWORD": "correct-horse-battery"}, clear=True):
            with caplog.at_level(logging.WARNING, logger="api.settings"):
                Settings(_env_file=None)

        assert "SECURITY WARNING" not in caplog.text


def test_get_settings_is_cached():
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()
