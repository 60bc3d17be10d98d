"""Resume keyword matching and scoring.

This module scores resume text against a job role's keyword set and
produces narrative feedback, optionally enriched by an LLM.

Public API:
    - ResumeScoringService: Main analysis service
    - KeywordStore: Role keyword lookup
    - AnalysisResult: Analysis output model
    - ScoringConfig: Configuration settings
"""

from src.scoring.config import ScoringConfig, get_scoring_config, reset_scoring_config
from src.scoring.keywords import DEFAULT_KEYWORDS, KeywordStore
from src.scoring.matchers import keyword_variations, match_keywords, normalize_text
from src.scoring.models import (
    AnalysisResult,
    FeedbackBundle,
    LLMResumeEvaluation,
    MatchResult,
    RoleKeywords,
    ScoreReport,
)
from src.scoring.scorer import score_resume
from src.scoring.service import ResumeScoringService

__all__ = [
    "ResumeScoringService",
    "KeywordStore",
    "DEFAULT_KEYWORDS",
    "AnalysisResult",
    "FeedbackBundle",
    "LLMResumeEvaluation",
    "MatchResult",
    "RoleKeywords",
    "ScoreReport",
    "normalize_text",
    "keyword_variations",
    "match_keywords",
    "score_resume",
    "ScoringConfig",
    "get_scoring_config",
    "reset_scoring_config",
]
