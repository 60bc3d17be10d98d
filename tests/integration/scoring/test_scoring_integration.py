"""Integration tests for scoring end-to-end flow."""

from __future__ import annotations

import io
import random
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[3]
EXAMPLE_ROLES = REPO_ROOT / "config" / "roles.example.yaml"

DATA_ENGINEER_RESUME = """
Jane Doe - Data Engineer

Built batch ETL pipelines in Python and SQL feeding a Snowflake data-warehouse.
Orchestrated jobs with Airflow and streamed events through Kafka.
Deployed services with Docker on AWS. Reduced pipeline costs by 30%.
"""


def test_scoring_integration_docx_resume_with_example_roles():
    """A DOCX resume scored against the example role file."""
    from docx import Document

    from src.extractor.config import ExtractorConfig
    from src.extractor.service import ResumeTextExtractor
    from src.scoring.config import ScoringConfig
    from src.scoring.keywords import KeywordStore
    from src.scoring.service import ResumeScoringService

    document = Document()
    for line in DATA_ENGINEER_RESUME.strip().splitlines():
        document.add_paragraph(line)
    buffer = io.BytesIO()
    document.save(buffer)

    extractor = ResumeTextExtractor(config=ExtractorConfig(_env_file=None))  # type: ignore[call-arg]
    text = extractor.extract_bytes(buffer.getvalue(), "resume.docx")

    config = ScoringConfig(_env_file=None, keywords_path=EXAMPLE_ROLES)  # type: ignore[call-arg]
    service = ResumeScoringService(config=config, keyword_store=KeywordStore.from_config(config))
    result = service.analyze(text, "Data Engineer")

    assert result.matched_keywords == [
        "Python",
        "SQL",
        "Airflow",
        "Kafka",
        "ETL",
        "Data Warehouse",
        "AWS",
        "Docker",
    ]
    assert result.missing_keywords == ["Apache Spark", "dbt"]
    assert result.skill_match == "8/10"
    assert result.score == 90
    assert result.strengths[0].startswith("Strong experience in ")

    payload = service.to_payload(result, rng=random.Random(1))
    assert payload["skillMatch"] == "8/10"
    assert payload["llmEnhanced"] is False


def test_scoring_integration_example_file_overrides_builtin_role():
    """Example file roles replace built-in roles with the same name."""
    from src.scoring.keywords import KeywordStore

    store = KeywordStore.from_file(EXAMPLE_ROLES)

    assert len(store.get_keywords("Python Developer")) == 8
    assert store.has_role("HR")


def test_scoring_integration_llm_fallback_is_total(monkeypatch):
    """A failing LLM call leaves the keyword-only result unchanged."""
    from src.scoring.config import ScoringConfig
    from src.scoring.keywords import KeywordStore
    from src.scoring.llm import ScoringLLM
    from src.scoring.service import ResumeScoringService

    store = KeywordStore.from_file(EXAMPLE_ROLES)
    keyword_only = ResumeScoringService(
        config=ScoringConfig(_env_file=None), keyword_store=store  # type: ignore[call-arg]
    ).analyze(DATA_ENGINEER_RESUME, "Data Engineer")

    llm_config = ScoringConfig(  # type: ignore[call-arg]
        _env_file=None, scoring_mode="llm", llm_api_key="sk-test", llm_max_retries=0
    )
    llm = ScoringLLM(config=llm_config)

    def _unavailable(**_kwargs):
        raise ConnectionError("network unreachable")

    monkeypatch.setattr(llm, "_call_completion", _unavailable)

    result = ResumeScoringService(config=llm_config, keyword_store=store, llm=llm).analyze(
        DATA_ENGINEER_RESUME, "Data Engineer"
    )

    assert result.score_source == "fallback_keyword"
    assert result.score == keyword_only.score
    assert result.action_verbs == keyword_only.action_verbs
    assert result.readability == keyword_only.readability
    assert result.strengths == keyword_only.strengths
    assert result.improvements == keyword_only.improvements
