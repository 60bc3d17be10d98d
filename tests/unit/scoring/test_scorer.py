"""Unit tests for deterministic resume scoring."""

import pytest


def _config(**overrides):
    from src.scoring.config import ScoringConfig

    return ScoringConfig(_env_file=None, **overrides)  # type: ignore[call-arg]


class TestRoundHalfUp:
    def test_halves_round_up(self):
        from src.scoring.scorer import round_half_up

        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(64.5) == 65

    def test_other_values(self):
        from src.scoring.scorer import round_half_up

        assert round_half_up(74.0) == 74
        assert round_half_up(65.4) == 65
        assert round_half_up(65.6) == 66


class TestKeywordScore:
    """Test the keyword score curve."""

    @pytest.mark.parametrize(
        ("ratio", "expected"),
        [
            (0.0, 5),
            (0.2, 23),
            (0.4, 65),
            (0.5, 65),
            (2 / 3, 80),
            (0.8, 90),
            (1.0, 95),
        ],
    )
    def test_curve_anchor_points(self, ratio, expected):
        from src.scoring.scorer import keyword_score

        assert keyword_score(ratio, 10, _config()) == expected

    def test_empty_keyword_set_scores_zero(self):
        from src.scoring.scorer import keyword_score

        assert keyword_score(0.0, 0, _config()) == 0

    def test_bounds_for_non_empty_sets(self):
        from src.scoring.scorer import keyword_score

        config = _config()
        for total in (1, 3, 7, 20):
            for matched in range(total + 1):
                score = keyword_score(matched / total, total, config)
                assert 5 <= score <= 95

    def test_monotonic_in_ratio(self):
        from src.scoring.scorer import keyword_score

        config = _config()
        scores = [keyword_score(i / 100, 100, config) for i in range(101)]
        assert scores == sorted(scores)

    def test_custom_curve_from_config(self):
        from src.scoring.scorer import keyword_score

        config = _config(score_floor=0, score_span=100, score_cap=100, score_bands=[])
        assert keyword_score(0.5, 4, config) == 50
        assert keyword_score(1.0, 4, config) == 100


class TestActionVerbScore:
    def test_no_verbs_scores_one(self):
        from src.scoring.scorer import action_verb_score

        assert action_verb_score("") == 1
        assert action_verb_score("Accountant with ten years of experience") == 1

    def test_one_point_per_five_distinct_verbs(self):
        from src.scoring.scorer import action_verb_score

        text = (
            "Achieved goals. Improved speed. Developed tools. "
            "Managed team. Created docs. Implemented features."
        )
        assert action_verb_score(text) == 2

    def test_repeated_verb_counts_once(self):
        from src.scoring.scorer import action_verb_score

        assert action_verb_score("managed managed managed managed managed managed") == 1

    def test_capped_at_five(self):
        from src.scoring.scorer import ACTION_VERBS, action_verb_score

        assert action_verb_score(" ".join(ACTION_VERBS)) == 5


class TestReadabilityScore:
    def test_empty_text_scores_five(self):
        from src.scoring.scorer import readability_score

        assert readability_score("") == 5
        assert readability_score("   ") == 5

    def test_short_plain_sentences_score_five(self):
        from src.scoring.scorer import readability_score

        assert readability_score("I led a team. We built apps. It went well.") == 5

    def test_long_sentence_scores_two(self):
        from src.scoring.scorer import readability_score

        assert readability_score("cat " * 30 + ".") == 2

    def test_many_long_words_score_two(self):
        from src.scoring.scorer import readability_score

        assert readability_score("extraordinary " * 10 + ".") == 2

    @pytest.mark.parametrize(("words", "expected"), [(22, 3), (17, 4), (12, 5)])
    def test_sentence_length_bands(self, words, expected):
        from src.scoring.scorer import readability_score

        assert readability_score("cat " * words + ".") == expected


class TestBlendScores:
    def test_blend_scenario(self):
        from src.scoring.scorer import blend_scores

        assert blend_scores(50, 90, _config()) == 74

    def test_blend_is_clamped(self):
        from src.scoring.scorer import blend_scores

        assert 0 <= blend_scores(0, 0, _config()) <= 100
        assert blend_scores(95, 100, _config()) == 98


class TestScoreResume:
    def test_scenario_score(self):
        from src.scoring.matchers import match_keywords, normalize_text
        from src.scoring.scorer import score_resume

        raw = "I developed APIs using Python and SQL for 3 years"
        match = match_keywords(normalize_text(raw), ["Python", "Django", "SQL"])
        report = score_resume(match, raw, _config())

        assert report.score == 80
        assert report.match_ratio == pytest.approx(2 / 3)

    def test_empty_text_scores_floor(self):
        from src.scoring.matchers import match_keywords
        from src.scoring.scorer import score_resume

        match = match_keywords("", ["Python", "SQL"])
        report = score_resume(match, "", _config())

        assert report.score == 5
        assert report.action_verb_score == 1
        assert report.readability_score == 5
