"""Resume text extraction.

This module turns uploaded resume documents (PDF, DOCX, TXT, Markdown, RTF)
into plain text for scoring.

Public API:
    - ResumeTextExtractor: Main service class for text extraction
    - ExtractorConfig: Configuration settings for the extractor
    - get_extractor_config: Get the extractor configuration singleton
"""

from src.extractor.config import (
    ExtractorConfig,
    get_extractor_config,
    reset_extractor_config,
)
from src.extractor.service import ResumeTextExtractor

__all__ = [
    "ResumeTextExtractor",
    "ExtractorConfig",
    "get_extractor_config",
    "reset_extractor_config",
]
