"""Prompt builders for LLM-based resume evaluation."""

from __future__ import annotations

import json
from collections.abc import Sequence

RESUME_LLM_SYSTEM_PROMPT = """You are an expert ATS (Applicant Tracking System) and resume analyzer.

You must follow these rules:
- Be truthful. Only credit skills and experience that the resume text supports.
- Judge the resume against the stated job role and its keywords.
- Output MUST be valid JSON only (no markdown), matching the required schema.
"""

_RESPONSE_SCHEMA = {
    "score": "number (0-100)",
    "strengths": ["strength1", "strength2"],
    "improvements": ["improvement1", "improvement2"],
    "suggestions": ["suggestion1", "suggestion2"],
    "actionVerbsScore": "number (1-5)",
    "readabilityScore": "number (1-5)",
}


def build_llm_resume_prompt(*, text: str, role: str, keywords: Sequence[str]) -> str:
    """Build the user prompt asking for a structured resume evaluation."""
    return "\n".join(
        [
            f"Analyze the following resume for a {role} position.",
            "",
            "Resume text:",
            text,
            "",
            f"Job role: {role}",
            "",
            "Important keywords for this role:",
            ", ".join(keywords) if keywords else "(none configured)",
            "",
            "Provide:",
            "1. A score from 0-100 indicating how well the resume matches the job role",
            "2. A list of strengths in the resume",
            "3. A list of areas for improvement",
            "4. Specific suggestions to improve the resume for this job role",
            "5. An assessment of the use of action verbs (score 1-5)",
            "6. An assessment of readability (score 1-5)",
            "",
            "Respond with a JSON object of this shape:",
            json.dumps(_RESPONSE_SCHEMA, indent=2),
        ]
    )
