"""Unit tests for scoring data models."""

import pytest
from pydantic import ValidationError


class TestRoleKeywords:
    def test_strips_and_dedupes_keywords(self):
        from src.scoring.models import RoleKeywords

        entry = RoleKeywords(
            role="  Python Developer ", keywords=["Python", "python", " ", " SQL "]
        )

        assert entry.role == "Python Developer"
        assert entry.keywords == ["Python", "SQL"]

    def test_blank_role_is_rejected(self):
        from src.scoring.models import RoleKeywords

        with pytest.raises(ValidationError):
            RoleKeywords(role="   ", keywords=[])

    def test_dict_round_trip(self):
        from src.scoring.models import RoleKeywords

        entry = RoleKeywords.from_dict({"role": "SEO", "keywords": ["SERP"]})

        assert entry.to_dict() == {"role": "SEO", "keywords": ["SERP"]}


class TestLLMResumeEvaluation:
    def test_parses_camel_case_aliases(self):
        from src.scoring.models import LLMResumeEvaluation

        evaluation = LLMResumeEvaluation.model_validate_json(
            '{"score": 88, "strengths": ["a"], "improvements": [], '
            '"suggestions": ["b"], "actionVerbsScore": 4, "readabilityScore": 2}'
        )

        assert evaluation.score == 88
        assert evaluation.action_verbs_score == 4
        assert evaluation.readability_score == 2

    def test_sub_scores_default_to_three(self):
        from src.scoring.models import LLMResumeEvaluation

        evaluation = LLMResumeEvaluation(score=50)

        assert evaluation.action_verbs_score == 3
        assert evaluation.readability_score == 3
        assert evaluation.strengths == []

    def test_fractional_scores_round_half_up(self):
        from src.scoring.models import LLMResumeEvaluation

        evaluation = LLMResumeEvaluation.model_validate_json(
            '{"score": 85.5, "actionVerbsScore": 3.5, "readabilityScore": 4.2}'
        )

        assert evaluation.score == 86
        assert evaluation.action_verbs_score == 4
        assert evaluation.readability_score == 4

    def test_fractional_score_still_bounded(self):
        from src.scoring.models import LLMResumeEvaluation

        with pytest.raises(ValidationError):
            LLMResumeEvaluation(score=100.6)

    def test_out_of_range_score_is_rejected(self):
        from src.scoring.models import LLMResumeEvaluation

        with pytest.raises(ValidationError):
            LLMResumeEvaluation(score=140)
        with pytest.raises(ValidationError):
            LLMResumeEvaluation(score=50, actionVerbsScore=9)


class TestMatchResult:
    def test_ratio(self):
        from src.scoring.models import MatchResult

        result = MatchResult(matched=["a"], missing=["b", "c", "d"])

        assert result.total == 4
        assert result.ratio == 0.25

    def test_empty_ratio_is_zero(self):
        from src.scoring.models import MatchResult

        assert MatchResult().ratio == 0.0


class TestScoreReport:
    def test_valid_report(self):
        from src.scoring.models import ScoreReport

        report = ScoreReport(
            score=80, match_ratio=0.5, action_verb_score=2, readability_score=4
        )
        assert report.score == 80

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"score": 101},
            {"match_ratio": 1.5},
            {"action_verb_score": 0},
            {"readability_score": 6},
        ],
    )
    def test_out_of_range_values_raise(self, kwargs):
        from src.scoring.models import ScoreReport

        values = {
            "score": 50,
            "match_ratio": 0.5,
            "action_verb_score": 3,
            "readability_score": 3,
        }
        values.update(kwargs)

        with pytest.raises(ValueError):
            ScoreReport(**values)


class TestAnalysisResult:
    def _result(self, **overrides):
        from src.scoring.models import AnalysisResult

        values = {
            "role": "Python Developer",
            "score": 80,
            "matched_keywords": ["Python", "SQL"],
            "missing_keywords": ["Django"],
            "action_verbs": 1,
            "readability": 5,
        }
        values.update(overrides)
        return AnalysisResult(**values)

    def test_skill_match(self):
        assert self._result().skill_match == "2/3"

    def test_keyword_total_override(self):
        result = self._result(matched_keywords=[], missing_keywords=[], keyword_total=20)

        assert result.skill_match == "0/20"

    def test_llm_enhanced_only_when_blended(self):
        assert self._result(score_source="blended").llm_enhanced is True
        assert self._result(score_source="fallback_keyword").llm_enhanced is False

    def test_invalid_score_raises(self):
        with pytest.raises(ValueError):
            self._result(score=-1)

    def test_is_frozen(self):
        from dataclasses import FrozenInstanceError

        result = self._result()
        with pytest.raises(FrozenInstanceError):
            result.score = 10  # type: ignore[misc]
