"""Resume scoring service implementation."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from typing import Any

from src.scoring.config import ScoringConfig, get_scoring_config
from src.scoring.feedback import (
    DEFAULT_SUGGESTIONS,
    GENERIC_IMPROVEMENTS,
    GENERIC_STRENGTHS,
    generate_feedback,
)
from src.scoring.keywords import KeywordStore
from src.scoring.llm import ScoringLLM, ScoringLLMError
from src.scoring.matchers import ensure_keyword_list, match_keywords, normalize_text
from src.scoring.models import AnalysisResult
from src.scoring.scorer import (
    action_verb_score,
    blend_scores,
    readability_score,
    score_resume,
)

logger = logging.getLogger(__name__)

REUPLOAD_SUGGESTION = (
    "Re-upload your resume as a text-based PDF, DOCX or TXT file; "
    "the uploaded document yielded little or no readable text"
)
DEGRADED_NOTE = (
    "Too little text could be extracted from the resume to analyze it. "
    "Scanned or image-only documents are not supported."
)
FALLBACK_STRENGTHS: tuple[str, ...] = (
    "Some experience in relevant areas",
    "Basic communication skills",
    "Foundational knowledge for the role",
)
FALLBACK_IMPROVEMENTS: tuple[str, ...] = (
    "Add more specific achievements with metrics",
    "Include experience with industry-standard tools",
    "Highlight leadership experience",
)


class ResumeScoringService:
    """Service for analyzing a resume's text against a job role."""

    def __init__(
        self,
        config: ScoringConfig | None = None,
        keyword_store: KeywordStore | None = None,
        llm: ScoringLLM | None = None,
    ) -> None:
        self.config = config or get_scoring_config()
        self.keyword_store = keyword_store or KeywordStore.from_config(self.config)

        self._llm = llm
        if self._llm is None and self.config.llm_enabled:
            self._llm = ScoringLLM(config=self.config)

    @property
    def llm_enabled(self) -> bool:
        return self._llm is not None and self.config.llm_enabled

    def analyze(
        self, text: str, role: str, keywords: Sequence[str] | None = None
    ) -> AnalysisResult:
        """Run a full analysis of resume text for a role.

        ``keywords`` overrides the store lookup for ``role``. Empty keyword
        sets and degraded text return defined minimal results instead of
        raising; malformed keyword sets raise ``TypeError``.
        """
        if keywords is None:
            keyword_list = self.keyword_store.get_keywords(role)
        else:
            keyword_list = ensure_keyword_list(keywords)

        if not keyword_list:
            return self._no_keywords_result(text, role)

        if len(text.strip()) < self.config.min_text_length:
            return self._degraded_result(role, len(keyword_list))

        match = match_keywords(normalize_text(text), keyword_list)
        report = score_resume(match, text, self.config)
        feedback = generate_feedback(match, role, self.config)

        base = {
            "role": role,
            "matched_keywords": match.matched,
            "missing_keywords": match.missing,
            "keyword_score": report.score,
        }

        llm = self._llm if self.config.llm_enabled else None
        if llm is None:
            return AnalysisResult(
                **base,
                score=report.score,
                action_verbs=report.action_verb_score,
                readability=report.readability_score,
                strengths=feedback.strengths,
                improvements=feedback.improvements,
                suggestions=list(DEFAULT_SUGGESTIONS),
                score_source="keyword",
            )

        try:
            evaluation = llm.evaluate_resume(
                text=text, role=role, keywords=keyword_list
            )
        except ScoringLLMError as e:
            logger.warning("LLM enrichment failed, using keyword score: %s", e)
            return AnalysisResult(
                **base,
                score=report.score,
                action_verbs=report.action_verb_score,
                readability=report.readability_score,
                strengths=feedback.strengths,
                improvements=feedback.improvements,
                suggestions=list(DEFAULT_SUGGESTIONS),
                score_source="fallback_keyword",
                note="AI analysis was unavailable; showing keyword-based results.",
            )

        return AnalysisResult(
            **base,
            score=blend_scores(report.score, evaluation.score, self.config),
            action_verbs=evaluation.action_verbs_score,
            readability=evaluation.readability_score,
            strengths=evaluation.strengths or feedback.strengths,
            improvements=evaluation.improvements or feedback.improvements,
            suggestions=evaluation.suggestions or list(DEFAULT_SUGGESTIONS),
            score_source="blended",
            llm_score=evaluation.score,
        )

    def _no_keywords_result(self, text: str, role: str) -> AnalysisResult:
        logger.warning("No keywords configured for role %r", role)
        return AnalysisResult(
            role=role,
            score=0,
            matched_keywords=[],
            missing_keywords=[],
            action_verbs=action_verb_score(text),
            readability=readability_score(text),
            strengths=[s.format(role=role) for s in GENERIC_STRENGTHS[:3]],
            improvements=list(GENERIC_IMPROVEMENTS[:3]),
            suggestions=list(DEFAULT_SUGGESTIONS),
            score_source="no_keywords",
            keyword_total=0,
            note=f"No keywords are configured for the role '{role}'.",
        )

    def _degraded_result(self, role: str, keyword_total: int) -> AnalysisResult:
        logger.warning(
            "Resume text shorter than %d characters; returning minimal report",
            self.config.min_text_length,
        )
        return AnalysisResult(
            role=role,
            score=0,
            matched_keywords=[],
            missing_keywords=[],
            action_verbs=1,
            readability=5,
            suggestions=[REUPLOAD_SUGGESTION],
            score_source="degraded_input",
            keyword_total=keyword_total,
            note=DEGRADED_NOTE,
        )

    def build_fallback_result(self, role: str, reason: str | None = None) -> AnalysisResult:
        """Build the placeholder report used when the resume could not be read."""
        note = (
            "We could not read this resume. It may be in an unsupported format "
            "or a scanned/image-only document."
        )
        if reason:
            note = f"{note} ({reason})"
        return AnalysisResult(
            role=role,
            score=0,
            matched_keywords=[],
            missing_keywords=[],
            action_verbs=1,
            readability=5,
            strengths=list(FALLBACK_STRENGTHS),
            improvements=list(FALLBACK_IMPROVEMENTS),
            suggestions=list(DEFAULT_SUGGESTIONS[:3]),
            score_source="fallback_report",
            keyword_total=0,
            note=note,
        )

    def to_payload(
        self, result: AnalysisResult, rng: random.Random | None = None
    ) -> dict[str, Any]:
        """Shape a result for rendering.

        ``resumePercentile`` adds a random 0..``percentile_jitter_max`` offset
        for display variety; it is reproducible only with an injected ``rng``.
        """
        rng = rng or random.Random()
        jitter = rng.randint(0, max(0, self.config.percentile_jitter_max))
        limit = self.config.max_display_keywords

        return {
            "score": result.score,
            "skillMatch": result.skill_match,
            "actionVerbs": result.action_verbs,
            "readability": result.readability,
            "resumePercentile": f"{min(100, result.score + jitter)}%",
            "matchedKeywords": result.matched_keywords[:limit],
            "missingKeywords": result.missing_keywords[:limit],
            "strengths": list(result.strengths),
            "improvements": list(result.improvements),
            "suggestions": list(result.suggestions),
            "llmEnhanced": result.llm_enhanced,
            "scoreSource": result.score_source,
            "note": result.note,
        }

    def format_result(self, result: AnalysisResult) -> str:
        """Format an AnalysisResult for CLI output."""
        lines: list[str] = []
        lines.append(f"Role: {result.role}")
        lines.append(
            f"Score: {result.score}/100 "
            f"(source={result.score_source.upper()}, skills={result.skill_match})"
        )
        if result.score_source == "blended":
            lines.append(
                f"Keyword score: {result.keyword_score} | LLM score: {result.llm_score}"
            )
        lines.append(
            f"Action verbs: {result.action_verbs}/5 | Readability: {result.readability}/5"
        )

        limit = self.config.max_display_keywords
        if result.matched_keywords:
            lines.append(f"Matched: {', '.join(result.matched_keywords[:limit])}")
        if result.missing_keywords:
            lines.append(f"Missing: {', '.join(result.missing_keywords[:limit])}")

        for title, items in (
            ("Strengths", result.strengths),
            ("Improvements", result.improvements),
            ("Suggestions", result.suggestions),
        ):
            if items:
                lines.append(f"{title}:")
                lines.extend(f"  - {item}" for item in items)

        if result.note:
            lines.append(f"Note: {result.note}")
        return "\n".join(lines)
