"""ATS Resume Scorer: keyword-based resume scoring against job roles."""

__version__ = "0.1.0"
