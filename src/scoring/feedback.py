"""Narrative feedback built from matched and missing keywords."""

from __future__ import annotations

from collections.abc import Sequence
from types import MappingProxyType

from src.scoring.config import ScoringConfig, get_scoring_config
from src.scoring.models import FeedbackBundle, MatchLevel, MatchResult

# Keywords containing terms from the same cluster are grouped together.
RELATED_TERM_CLUSTERS: tuple[frozenset[str], ...] = (
    frozenset({"java", "spring", "hibernate", "j2ee"}),
    frozenset({"python", "django", "flask", "pandas"}),
    frozenset({"javascript", "react", "node", "angular", "vue"}),
    frozenset({"ui", "ux", "design", "user"}),
    frozenset({"hr", "recruitment", "hiring", "employee"}),
    frozenset({"seo", "keyword", "content", "marketing"}),
    frozenset({"medical", "patient", "healthcare", "clinical"}),
    frozenset({"prompt", "ai", "nlp", "machine learning"}),
)

STRENGTH_TEMPLATES: MappingProxyType[MatchLevel, str] = MappingProxyType(
    {
        "high": "Strong experience in {keywords}",
        "medium": "Demonstrated knowledge of {keywords}",
        "low": "Some background in {keywords}",
    }
)
IMPROVEMENT_TEMPLATE = "Add experience with {keywords}"

NO_STRENGTHS: tuple[str, ...] = (
    "Limited experience directly relevant to this role",
    "Consider adding more role-specific keywords to your resume",
    "Focus on transferable skills that could apply to this position",
)
NO_IMPROVEMENTS: tuple[str, ...] = (
    "Your resume already includes most key terms for this role",
    "Consider adding more quantifiable achievements",
    "Enhance your resume with more specific project details",
)
GENERIC_STRENGTHS: tuple[str, ...] = (
    "Experience relevant to {role} position",
    "Professional communication skills",
    "Problem-solving abilities",
    "Team collaboration experience",
)
GENERIC_IMPROVEMENTS: tuple[str, ...] = (
    "Quantify your achievements with specific metrics",
    "Add more specific technical achievements",
    "Highlight leadership experience",
    "Include more industry-specific terminology",
)

DEFAULT_SUGGESTIONS: tuple[str, ...] = (
    "Quantify your achievements with specific metrics",
    "Tailor your resume to highlight skills relevant to the position",
    "Use strong action verbs to describe your accomplishments",
    "Ensure your resume is well-formatted and easy to read",
    "Add keywords from the job description to pass ATS screening",
)


def match_level(matched_count: int, config: ScoringConfig | None = None) -> MatchLevel:
    """Return the phrasing tier for a number of matched keywords."""
    config = config or get_scoring_config()
    if matched_count >= config.high_match_count:
        return "high"
    if matched_count >= config.medium_match_count:
        return "medium"
    return "low"


def are_keywords_related(keyword1: str, keyword2: str) -> bool:
    """Return True if both keywords contain a term from the same cluster."""
    k1 = keyword1.lower()
    k2 = keyword2.lower()
    return any(
        any(term in k1 for term in cluster) and any(term in k2 for term in cluster)
        for cluster in RELATED_TERM_CLUSTERS
    )


def _belongs_with(seed: str, candidate: str) -> bool:
    # Substring containment is case-sensitive; cluster lookup is not.
    return seed in candidate or candidate in seed or are_keywords_related(seed, candidate)


def group_related_keywords(keywords: Sequence[str]) -> list[list[str]]:
    """Greedily group keywords that are related to each group's seed keyword."""
    groups: list[list[str]] = []
    grouped: set[int] = set()

    for i, seed in enumerate(keywords):
        if i in grouped:
            continue
        grouped.add(i)
        group = [seed]

        for j in range(i + 1, len(keywords)):
            if j in grouped:
                continue
            if _belongs_with(seed, keywords[j]):
                group.append(keywords[j])
                grouped.add(j)

        groups.append(group)

    return groups


def _pad(statements: list[str], generic: Sequence[str], limit: int) -> list[str]:
    for statement in generic:
        if len(statements) >= limit:
            break
        statements.append(statement)
    return statements


def generate_strengths(
    matched: Sequence[str],
    role: str,
    level: MatchLevel,
    config: ScoringConfig | None = None,
) -> list[str]:
    config = config or get_scoring_config()
    limit = config.max_feedback_items
    if not matched:
        return list(NO_STRENGTHS[:limit])

    template = STRENGTH_TEMPLATES[level]
    strengths = [
        template.format(keywords=", ".join(group))
        for group in group_related_keywords(matched)[:limit]
    ]
    generic = [statement.format(role=role) for statement in GENERIC_STRENGTHS]
    return _pad(strengths, generic, limit)


def generate_improvements(
    missing: Sequence[str], role: str, config: ScoringConfig | None = None
) -> list[str]:
    config = config or get_scoring_config()
    limit = config.max_feedback_items
    if not missing:
        return list(NO_IMPROVEMENTS[:limit])

    improvements = [
        IMPROVEMENT_TEMPLATE.format(keywords=", ".join(group))
        for group in group_related_keywords(missing)[:limit]
    ]
    return _pad(improvements, GENERIC_IMPROVEMENTS, limit)


def generate_feedback(
    match: MatchResult, role: str, config: ScoringConfig | None = None
) -> FeedbackBundle:
    """Build strengths from matched keywords and improvements from missing ones."""
    config = config or get_scoring_config()
    level = match_level(len(match.matched), config)
    return FeedbackBundle(
        strengths=generate_strengths(match.matched, role, level, config),
        improvements=generate_improvements(match.missing, role, config),
    )
