"""Pytest configuration and shared fixtures."""

import pytest


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Reset logging and config singletons between tests."""
    yield

    from src.config.settings import reset_settings
    from src.extractor.config import reset_extractor_config
    from src.scoring.config import reset_scoring_config
    from src.utils.logging import reset_logging

    reset_logging()
    reset_settings()
    reset_scoring_config()
    reset_extractor_config()


@pytest.fixture
def python_resume_text() -> str:
    """Short resume for a Python developer role."""
    return (
        "Senior Python Developer with 5 years of experience. "
        "Developed REST APIs using Django and Flask. "
        "Implemented data pipelines with Pandas and NumPy. "
        "Deployed services to AWS with Docker. "
        "Led code reviews and mentored junior engineers."
    )
