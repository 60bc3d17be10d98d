"""Tests for extractor configuration."""

import pytest


class TestExtractorConfig:
    """Test ExtractorConfig settings."""

    def test_extractor_config_has_defaults(self):
        """ExtractorConfig should load with sensible defaults."""
        from src.extractor.config import ExtractorConfig

        config = ExtractorConfig(_env_file=None)  # type: ignore[call-arg]

        assert config.max_file_size_mb == 5.0
        assert config.max_file_size_bytes == 5 * 1024 * 1024
        assert config.supported_extensions == [".pdf", ".docx", ".txt", ".md", ".rtf"]

    def test_extractor_config_reads_from_environment_variables(self, monkeypatch):
        """ExtractorConfig should read from environment variables."""
        from src.extractor.config import ExtractorConfig

        monkeypatch.setenv("EXTRACTOR_MAX_FILE_SIZE_MB", "2.5")
        monkeypatch.setenv("EXTRACTOR_SUPPORTED_EXTENSIONS", '["PDF", "docx", " "]')

        config = ExtractorConfig(_env_file=None)  # type: ignore[call-arg]

        assert config.max_file_size_mb == 2.5
        assert config.supported_extensions == [".pdf", ".docx"]

    def test_extractor_config_validates_size_positive(self):
        """ExtractorConfig should validate max_file_size_mb > 0."""
        from pydantic import ValidationError

        from src.extractor.config import ExtractorConfig

        with pytest.raises(ValidationError):
            ExtractorConfig(_env_file=None, max_file_size_mb=0)  # type: ignore[call-arg]


class TestExtractorConfigSingleton:
    def test_get_extractor_config_returns_singleton(self):
        from src.extractor.config import get_extractor_config, reset_extractor_config

        reset_extractor_config()

        assert get_extractor_config() is get_extractor_config()

    def test_reset_extractor_config_creates_new_instance(self):
        from src.extractor.config import get_extractor_config, reset_extractor_config

        first = get_extractor_config()
        reset_extractor_config()

        assert get_extractor_config() is not first
