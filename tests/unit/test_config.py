"""
Unit tests for teambition_sdk/config.py

Tests Settings defaults, environment variable loading and caching.
"""

import logging

import pytest
from pydantic import ValidationError

from teambition_sdk.config import Settings, configure_logging, get_settings


class TestSettingsDefaults:
    """Test Settings initialization with default values."""

    def test_settings_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.python_env == "development"
        assert settings.log_level == "INFO"
        assert settings.api_host == "https://www.teambition.com/api"
        assert settings.token == ""
        assert settings.request_timeout == 30.0
        assert settings.max_retries == 3
        assert settings.has_token is False

    def test_is_development_default(self):
        settings = Settings(_env_file=None)
        assert settings.is_development is True
        assert settings.is_production is False

    def test_is_production_when_set(self):
        settings = Settings(_env_file=None, python_env="production")
        assert settings.is_production is True
        assert settings.is_development is False


class TestSettingsEnvironmentVariables:
    """Test Settings loading from environment variables."""

    def test_settings_from_env_vars(self, monkeypatch):
        monkeypatch.setenv("TEAMBITION_API_HOST", "https://tb.example.com/api/")
        monkeypatch.setenv("TEAMBITION_TOKEN", "secret")
        monkeypatch.setenv("TEAMBITION_REQUEST_TIMEOUT", "5")
        monkeypatch.setenv("TEAMBITION_LOG_LEVEL", "DEBUG")

        settings = Settings(_env_file=None)

        assert settings.api_host == "https://tb.example.com/api"
        assert settings.token == "secret"
        assert settings.has_token is True
        assert settings.request_timeout == 5.0
        assert settings.log_level == "DEBUG"

    def test_unprefixed_vars_are_ignored(self, monkeypatch):
        monkeypatch.setenv("TOKEN", "not-mine")

        assert Settings(_env_file=None).token == ""

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="VERBOSE")

    def test_invalid_max_retries(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, max_retries=0)


class TestGetSettings:
    """Test cached settings access."""

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_cache_clear_reloads(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("TEAMBITION_TOKEN", "rotated")
        get_settings.cache_clear()

        assert get_settings() is not first
        assert get_settings().token == "rotated"


class TestConfigureLogging:
    """Test configure_logging."""

    def test_applies_level(self):
        configure_logging(Settings(_env_file=None, log_level="DEBUG"))

        assert logging.getLogger("teambition_sdk").level == logging.DEBUG

        configure_logging(Settings(_env_file=None, log_level="WARNING"))
        assert logging.getLogger("teambition_sdk").level == logging.WARNING

    def test_exported_from_package(self):
        import teambition_sdk

        assert teambition_sdk.configure_logging is configure_logging
