"""Tests for Settings configuration class."""

from pathlib import Path

import pytest


class TestSettingsDefaults:
    """Test that Settings loads sensible defaults."""

    def test_settings_loads_with_defaults(self, monkeypatch):
        """Settings should load with default values when no env vars are set."""
        monkeypatch.delenv("OUTPUT_DIR", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        from src.config.settings import Settings

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.output_dir == Path("./artifacts")
        assert settings.log_level == "INFO"


class TestSettingsFromEnvironment:
    """Test that Settings reads from environment variables."""

    def test_settings_reads_output_dir_from_env(self, monkeypatch):
        """Settings should read OUTPUT_DIR from environment."""
        monkeypatch.setenv("OUTPUT_DIR", "/tmp/reports")

        from src.config.settings import Settings

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.output_dir == Path("/tmp/reports")

    def test_settings_normalizes_log_level_case(self, monkeypatch):
        """LOG_LEVEL should be accepted case-insensitively."""
        monkeypatch.setenv("LOG_LEVEL", "debug")

        from src.config.settings import Settings

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.log_level == "DEBUG"

    def test_settings_rejects_unknown_log_level(self, monkeypatch):
        """An unknown LOG_LEVEL should fail validation."""
        from pydantic import ValidationError

        monkeypatch.setenv("LOG_LEVEL", "VERBOSE")

        from src.config.settings import Settings

        with pytest.raises(ValidationError):
            Settings(_env_file=None)  # type: ignore[call-arg]


class TestGetSettings:
    """Test the settings singleton helpers."""

    def test_get_settings_is_singleton(self):
        """get_settings should return the same instance until reset."""
        from src.config.settings import get_settings, reset_settings

        reset_settings()
        first = get_settings()
        second = get_settings()

        assert first is second

        reset_settings()
        assert get_settings() is not first
