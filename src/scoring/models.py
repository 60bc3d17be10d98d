"""Data models for resume scoring."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

MatchLevel = Literal["high", "medium", "low"]

ScoreSource = Literal[
    "keyword",
    "blended",
    "fallback_keyword",
    "degraded_input",
    "no_keywords",
    "fallback_report",
]


class RoleKeywords(BaseModel):
    """Keyword list configured for one job role."""

    role: str = Field(..., min_length=1, description="Job role name")
    keywords: list[str] = Field(
        default_factory=list, description="Keywords in display order"
    )

    @field_validator("role")
    @classmethod
    def strip_role(cls, v: str) -> str:
        value = v.strip()
        if not value:
            raise ValueError("role must not be blank")
        return value

    @field_validator("keywords")
    @classmethod
    def dedupe_keywords(cls, v: list[str]) -> list[str]:
        """Drop blanks and case-insensitive duplicates, keeping first casing."""
        seen: set[str] = set()
        keywords: list[str] = []
        for keyword in v:
            value = keyword.strip()
            key = value.lower()
            if not value or key in seen:
                continue
            seen.add(key)
            keywords.append(value)
        return keywords

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> RoleKeywords:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)


class LLMResumeEvaluation(BaseModel):
    """Structured resume evaluation returned by the LLM."""

    model_config = ConfigDict(populate_by_name=True)

    score: int = Field(..., ge=0, le=100, description="Overall fit score (0-100)")
    strengths: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    action_verbs_score: int = Field(default=3, ge=1, le=5, alias="actionVerbsScore")
    readability_score: int = Field(default=3, ge=1, le=5, alias="readabilityScore")

    @field_validator("score", "action_verbs_score", "readability_score", mode="before")
    @classmethod
    def round_fractional_scores(cls, v):
        """Round fractional scores half up before bounds are checked."""
        if isinstance(v, float) and math.isfinite(v):
            return int(math.floor(v + 0.5))
        return v


@dataclass(frozen=True)
class MatchResult:
    """Order-preserving partition of a keyword set into matched and missing."""

    matched: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.matched) + len(self.missing)

    @property
    def ratio(self) -> float:
        """Matched share of the keyword set (0.0 for an empty set)."""
        if self.total == 0:
            return 0.0
        return len(self.matched) / self.total


@dataclass(frozen=True)
class ScoreReport:
    """Deterministic scores derived from a MatchResult and the raw text."""

    score: int
    match_ratio: float
    action_verb_score: int
    readability_score: int

    def __post_init__(self) -> None:
        if not (0 <= self.score <= 100):
            raise ValueError(f"score must be between 0 and 100 (got {self.score})")
        if not (0.0 <= self.match_ratio <= 1.0):
            raise ValueError(
                f"match_ratio must be between 0.0 and 1.0 (got {self.match_ratio})"
            )
        if not (1 <= self.action_verb_score <= 5):
            raise ValueError(
                f"action_verb_score must be between 1 and 5 (got {self.action_verb_score})"
            )
        if not (1 <= self.readability_score <= 5):
            raise ValueError(
                f"readability_score must be between 1 and 5 (got {self.readability_score})"
            )


@dataclass(frozen=True)
class FeedbackBundle:
    """Narrative strengths and improvements."""

    strengths: list[str] = field(default_factory=list)
    improvements: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class AnalysisResult:
    """Full analysis output for one resume and role."""

    role: str
    score: int
    matched_keywords: list[str]
    missing_keywords: list[str]
    action_verbs: int
    readability: int
    strengths: list[str] = field(default_factory=list)
    improvements: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    score_source: ScoreSource = "keyword"
    keyword_score: int | None = None
    llm_score: int | None = None
    note: str | None = None
    keyword_total: int | None = None
    analyzed_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        if not (0 <= self.score <= 100):
            raise ValueError(f"score must be between 0 and 100 (got {self.score})")

    @property
    def total_keywords(self) -> int:
        if self.keyword_total is not None:
            return self.keyword_total
        return len(self.matched_keywords) + len(self.missing_keywords)

    @property
    def skill_match(self) -> str:
        return f"{len(self.matched_keywords)}/{self.total_keywords}"

    @property
    def llm_enhanced(self) -> bool:
        return self.score_source == "blended"
