"""Configuration settings for resume scoring."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PLACEHOLDER_API_KEYS = frozenset({"your_api_key_here", "changeme"})


class ScoringConfig(BaseSettings):
    """Resume scoring configuration settings.

    The score curve, blend weights and feedback tiers are product-tuning
    constants rather than invariants, so they live here and can be
    overridden via environment variables with `SCORING_` prefix or a .env
    file.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCORING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Keyword store
    keywords_path: Path | None = Field(
        default=None,
        description="Optional YAML/JSON file with role keywords (overrides built-ins)",
    )

    # Input guards
    min_text_length: Annotated[int, Field(ge=0)] = Field(
        default=50,
        description="Extracted text shorter than this is treated as degraded input",
    )

    # Score curve: round(floor + ratio * span), raised by bands, capped
    score_floor: Annotated[int, Field(ge=0, le=100)] = Field(
        default=5,
        description="Score for a zero match ratio on a non-empty keyword set",
    )
    score_span: Annotated[int, Field(ge=0, le=100)] = Field(
        default=90,
        description="Points added across the full match ratio range",
    )
    score_cap: Annotated[int, Field(ge=0, le=100)] = Field(
        default=95,
        description="Hard ceiling on the keyword score",
    )
    score_bands: list[tuple[float, int]] = Field(
        default_factory=lambda: [(1.0, 95), (0.8, 90), (0.6, 80), (0.4, 65)],
        description="(min_ratio, min_score) floor-raise bands",
    )

    # Blend weights (must sum to 1.0)
    keyword_weight: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.4,
        description="Weight of the keyword score when blending with the LLM score",
    )
    llm_weight: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.6,
        description="Weight of the LLM score when blending",
    )

    # Feedback settings
    high_match_count: Annotated[int, Field(ge=1)] = Field(
        default=8,
        description="Matched keywords needed for 'high' match level phrasing",
    )
    medium_match_count: Annotated[int, Field(ge=1)] = Field(
        default=5,
        description="Matched keywords needed for 'medium' match level phrasing",
    )
    max_feedback_items: Annotated[int, Field(ge=1)] = Field(
        default=3,
        description="Maximum strengths/improvements produced",
    )

    # Presentation settings
    max_display_keywords: Annotated[int, Field(ge=0)] = Field(
        default=10,
        description="Matched/missing keywords shown in the display payload",
    )
    percentile_jitter_max: Annotated[int, Field(ge=0)] = Field(
        default=4,
        description="Upper bound of the cosmetic jitter added to resumePercentile",
    )

    # LLM enrichment
    scoring_mode: Literal["keyword", "llm"] = Field(
        default="keyword",
        description="'keyword' for deterministic scoring, 'llm' to blend in an LLM score",
    )
    llm_provider: str = Field(
        default="openai",
        description="LiteLLM provider name (openai, anthropic, gemini, ...)",
    )
    llm_model: str = Field(default="gpt-4o", description="Model ID")
    llm_api_key: str | None = Field(default=None, description="Provider API key")
    llm_base_url: str | None = Field(
        default=None, description="Base URL for OpenAI-compatible endpoints"
    )
    llm_timeout: Annotated[float, Field(gt=0)] = Field(
        default=30.0,
        description="Timeout for one LLM request in seconds",
    )
    llm_max_retries: Annotated[int, Field(ge=0)] = Field(
        default=1,
        description="Retries after a failed LLM request",
    )
    llm_reasoning_effort: str | None = Field(
        default=None,
        description="Reasoning effort for supported models",
    )

    @field_validator("score_bands")
    @classmethod
    def validate_score_bands(cls, v: list[tuple[float, int]]) -> list[tuple[float, int]]:
        """Bands must use ratios in [0, 1]; they are stored highest ratio first."""
        for ratio, floor in v:
            if not (0.0 <= ratio <= 1.0):
                raise ValueError(f"Band ratio must be between 0.0 and 1.0 (got {ratio})")
            if not (0 <= floor <= 100):
                raise ValueError(f"Band score must be between 0 and 100 (got {floor})")
        return sorted(v, key=lambda band: band[0], reverse=True)

    @model_validator(mode="after")
    def validate_weights_sum_to_one(self) -> ScoringConfig:
        """Ensure blend weights sum to 1.0 (within tolerance)."""
        weight_sum = self.keyword_weight + self.llm_weight
        if abs(weight_sum - 1.0) > 1e-6:
            raise ValueError(
                "Blend weights must sum to 1.0. "
                f"Got {weight_sum:.6f} "
                f"(keyword={self.keyword_weight}, llm={self.llm_weight})."
            )
        return self

    @model_validator(mode="after")
    def validate_match_levels(self) -> ScoringConfig:
        """The 'high' tier must not be easier to reach than 'medium'."""
        if self.high_match_count < self.medium_match_count:
            raise ValueError(
                "high_match_count must be >= medium_match_count "
                f"(got high={self.high_match_count}, medium={self.medium_match_count})."
            )
        return self

    @property
    def llm_enabled(self) -> bool:
        """True when LLM enrichment is requested and not obviously misconfigured."""
        if self.scoring_mode != "llm":
            return False
        if self.llm_api_key is not None:
            key = self.llm_api_key.strip()
            if not key or key.lower() in PLACEHOLDER_API_KEYS:
                return False
        return True


# Singleton instance for easy import
_scoring_config: ScoringConfig | None = None


def get_scoring_config() -> ScoringConfig:
    """Get the scoring configuration singleton."""
    global _scoring_config
    if _scoring_config is None:
        _scoring_config = ScoringConfig()
    return _scoring_config


def reset_scoring_config() -> None:
    """Reset the scoring configuration singleton (useful for testing)."""
    global _scoring_config
    _scoring_config = None
