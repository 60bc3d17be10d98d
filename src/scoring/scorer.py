"""Deterministic scoring for keyword matches and resume prose."""

from __future__ import annotations

import math
import re

from src.scoring.config import ScoringConfig, get_scoring_config
from src.scoring.models import MatchResult, ScoreReport

ACTION_VERBS: tuple[str, ...] = (
    "achieved",
    "improved",
    "developed",
    "managed",
    "created",
    "implemented",
    "designed",
    "led",
    "increased",
    "reduced",
    "negotiated",
    "organized",
    "delivered",
    "launched",
    "built",
    "trained",
    "supervised",
    "coordinated",
    "analyzed",
    "established",
    "generated",
    "resolved",
    "streamlined",
)

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_WORD_SPLIT_RE = re.compile(r"\s+")

LONG_WORD_LENGTH = 6


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def keyword_score(
    match_ratio: float, total_keywords: int, config: ScoringConfig | None = None
) -> int:
    """Map a match ratio onto the bounded keyword score.

    The curve is front-loaded so partial coverage is rewarded, and it is
    capped below 100: keyword coverage alone never earns a perfect score.
    An empty keyword set scores 0.
    """
    config = config or get_scoring_config()
    if total_keywords <= 0:
        return 0

    ratio = min(1.0, max(0.0, match_ratio))
    score = round_half_up(config.score_floor + ratio * config.score_span)
    for min_ratio, min_score in config.score_bands:
        if ratio >= min_ratio:
            score = max(score, min_score)

    return min(config.score_cap, score)


def action_verb_score(raw_text: str) -> int:
    """Score action-verb usage on a 1-5 scale (five distinct verbs per point)."""
    lowered = raw_text.lower()
    found = sum(1 for verb in ACTION_VERBS if verb in lowered)
    return min(5, max(1, math.ceil(found / 5)))


def readability_score(raw_text: str) -> int:
    """Score readability on a 2-5 scale.

    Shorter sentences and fewer long words (more than six characters)
    score higher. Text without words scores 5.
    """
    sentences = [s for s in _SENTENCE_SPLIT_RE.split(raw_text) if s.strip()]
    words = [w for w in _WORD_SPLIT_RE.split(raw_text) if w]
    if not words:
        return 5

    avg_sentence_length = len(words) / max(1, len(sentences))
    long_words = sum(1 for w in words if len(w) > LONG_WORD_LENGTH)
    long_word_pct = long_words / len(words) * 100

    if avg_sentence_length > 25 or long_word_pct > 30:
        return 2
    if avg_sentence_length > 20 or long_word_pct > 25:
        return 3
    if avg_sentence_length > 15 or long_word_pct > 20:
        return 4
    return 5


def blend_scores(
    keyword: int, llm: int, config: ScoringConfig | None = None
) -> int:
    """Blend the keyword score with an LLM score using the configured weights."""
    config = config or get_scoring_config()
    blended = keyword * config.keyword_weight + llm * config.llm_weight
    return min(100, max(0, round_half_up(blended)))


def score_resume(
    match: MatchResult, raw_text: str, config: ScoringConfig | None = None
) -> ScoreReport:
    """Compute the keyword score and auxiliary prose scores for one resume."""
    config = config or get_scoring_config()
    return ScoreReport(
        score=keyword_score(match.ratio, match.total, config),
        match_ratio=match.ratio,
        action_verb_score=action_verb_score(raw_text),
        readability_score=readability_score(raw_text),
    )
