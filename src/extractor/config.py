"""Configuration settings for resume text extraction."""

from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ExtractorConfig(BaseSettings):
    """Extractor configuration settings.

    All settings have sensible defaults and can be overridden via
    environment variables with EXTRACTOR_ prefix or a .env file.

    Attributes:
        max_file_size_mb: Documents larger than this are not parsed.
        supported_extensions: File extensions the extractor will attempt.
    """

    model_config = SettingsConfigDict(
        env_prefix="EXTRACTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    max_file_size_mb: Annotated[float, Field(gt=0)] = Field(
        default=5.0,
        description="Maximum document size in megabytes",
    )
    supported_extensions: list[str] = Field(
        default_factory=lambda: [".pdf", ".docx", ".txt", ".md", ".rtf"],
        description="File extensions accepted for extraction",
    )

    @field_validator("supported_extensions")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        """Lower-case extensions and ensure a leading dot."""
        normalized: list[str] = []
        for ext in v:
            value = ext.strip().lower()
            if not value:
                continue
            if not value.startswith("."):
                value = f".{value}"
            normalized.append(value)
        return normalized

    @property
    def max_file_size_bytes(self) -> int:
        return int(self.max_file_size_mb * 1024 * 1024)


# Singleton instance for easy import
_extractor_config: ExtractorConfig | None = None


def get_extractor_config() -> ExtractorConfig:
    """Get the extractor configuration singleton."""
    global _extractor_config
    if _extractor_config is None:
        _extractor_config = ExtractorConfig()
    return _extractor_config


def reset_extractor_config() -> None:
    """Reset the extractor configuration singleton (useful for testing)."""
    global _extractor_config
    _extractor_config = None
