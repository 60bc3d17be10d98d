"""Keyword matching utilities for resume scoring."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from functools import lru_cache
from types import MappingProxyType

from src.scoring.models import MatchResult

logger = logging.getLogger(__name__)

_NON_WORD_RE = re.compile(r"[^\w\s]|_")
_WHITESPACE_RE = re.compile(r"\s+")

# Known surface forms per keyword, keyed by the lower-cased keyword.
_KEYWORD_ALIASES: MappingProxyType[str, frozenset[str]] = MappingProxyType(
    {
        "javascript": frozenset({"js", "ecmascript", "java script"}),
        "typescript": frozenset({"type script"}),
        "nodejs": frozenset({"node.js", "node js", "node"}),
        "node.js": frozenset({"nodejs", "node js", "node"}),
        "react": frozenset({"reactjs", "react.js", "react js"}),
        "vue.js": frozenset({"vue", "vuejs", "vue js"}),
        "angular": frozenset({"angularjs", "angular.js"}),
        "express": frozenset({"expressjs", "express.js"}),
        "python": frozenset({"python3"}),
        "postgresql": frozenset({"postgres", "psql"}),
        "mongodb": frozenset({"mongo", "mongo db"}),
        "kubernetes": frozenset({"k8s"}),
        "aws": frozenset({"amazon web services"}),
        "gcp": frozenset({"google cloud", "google cloud platform"}),
        "ci/cd": frozenset({"cicd", "continuous integration", "continuous delivery"}),
        "rest api": frozenset({"restful api", "rest apis", "restful"}),
        "natural language processing": frozenset({"nlp"}),
        "llm": frozenset({"large language model", "large language models", "llms"}),
        "user experience": frozenset({"ux design", "ux research"}),
        "user interface": frozenset({"ui design"}),
        "electronic health records": frozenset({"ehr", "emr"}),
        "human resources": frozenset({"hr department", "hr management"}),
        "search engine optimization": frozenset({"seo"}),
        "scikit-learn": frozenset({"sklearn", "scikit learn"}),
        "j2ee": frozenset({"java ee", "jakarta ee"}),
    }
)

_SEPARATORS = (".", "_", "-")


def normalize_text(raw_text: str) -> str:
    """Canonicalize text for keyword containment tests.

    Lower-cases, replaces everything that is not a letter, digit or
    whitespace with a space, collapses whitespace runs and trims. Empty
    input yields an empty string.
    """
    value = _NON_WORD_RE.sub(" ", raw_text.lower())
    return _WHITESPACE_RE.sub(" ", value).strip()


@lru_cache(maxsize=1024)
def keyword_variations(keyword: str) -> frozenset[str]:
    """Return the lower-cased surface forms considered equivalent to a keyword."""
    base = keyword.strip().lower()
    variations = {base}
    variations.update(_KEYWORD_ALIASES.get(base, frozenset()))

    parts = base.split()
    if len(parts) > 1:
        variations.add("".join(parts))
        for separator in _SEPARATORS:
            variations.add(separator.join(parts))

    return frozenset(variations)


def _word_boundary_match(normalized_text: str, keyword: str) -> bool:
    pattern = rf"\b{re.escape(keyword.strip())}\b"
    return re.search(pattern, normalized_text, re.IGNORECASE) is not None


def _flexible_spacing_match(normalized_text: str, keyword: str) -> bool:
    tokens = keyword.split()
    if not tokens:
        return False
    pattern = r"\s*".join(re.escape(token) for token in tokens)
    return re.search(pattern, normalized_text, re.IGNORECASE) is not None


def _variation_match(normalized_text: str, keyword: str) -> bool:
    for variation in keyword_variations(keyword):
        normalized = normalize_text(variation)
        if normalized and normalized in normalized_text:
            return True
    return False


def find_match_strategy(normalized_text: str, keyword: str) -> str | None:
    """Return the name of the first strategy that finds the keyword, or None.

    Strategies run in order: ``substring``, ``word_boundary``,
    ``flexible_spacing`` (keywords longer than 3 characters only) and
    ``variation``.
    """
    if not normalized_text:
        return None

    normalized_keyword = normalize_text(keyword)
    if normalized_keyword and normalized_keyword in normalized_text:
        return "substring"

    if keyword.strip() and _word_boundary_match(normalized_text, keyword):
        return "word_boundary"

    if len(keyword) > 3 and _flexible_spacing_match(normalized_text, keyword):
        return "flexible_spacing"

    if _variation_match(normalized_text, keyword):
        return "variation"

    return None


def keyword_in_text(normalized_text: str, keyword: str) -> bool:
    """Return True if the keyword is present in already-normalized text."""
    return find_match_strategy(normalized_text, keyword) is not None


def ensure_keyword_list(keywords: Sequence[str]) -> list[str]:
    """Return keywords as a list, raising TypeError for malformed keyword sets."""
    if isinstance(keywords, str) or not isinstance(keywords, Sequence):
        raise TypeError(
            f"keywords must be a sequence of strings (got {type(keywords).__name__})"
        )
    for keyword in keywords:
        if not isinstance(keyword, str):
            raise TypeError(
                f"keywords must contain only strings (got {type(keyword).__name__})"
            )
    return list(keywords)


def match_keywords(normalized_text: str, keywords: Sequence[str]) -> MatchResult:
    """Partition keywords into matched and missing, preserving input order."""
    matched: list[str] = []
    missing: list[str] = []

    for keyword in ensure_keyword_list(keywords):
        strategy = find_match_strategy(normalized_text, keyword)
        if strategy is None:
            missing.append(keyword)
        else:
            logger.debug("Matched keyword %r via %s", keyword, strategy)
            matched.append(keyword)

    return MatchResult(matched=matched, missing=missing)
