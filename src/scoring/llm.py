"""LLM client for resume enrichment.

Uses LiteLLM to request a structured resume evaluation. Every failure is
surfaced as ``ScoringLLMError`` so callers can fall back to keyword scoring.
"""

from __future__ import annotations

import logging
import os
import time
import warnings
from collections.abc import Sequence
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from src.scoring.config import ScoringConfig, get_scoring_config
from src.scoring.models import LLMResumeEvaluation
from src.scoring.prompts import RESUME_LLM_SYSTEM_PROMPT, build_llm_resume_prompt

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

warnings.filterwarnings(
    "ignore",
    message=r"(?s)^Pydantic serializer warnings:.*",
    category=UserWarning,
)

# Keep LiteLLM from loading a local `.env` into the process environment.
os.environ.setdefault("LITELLM_MODE", "PRODUCTION")

_MAX_RETRY_DELAY = 8.0


class ScoringLLMError(Exception):
    """Exception raised when an LLM enrichment call fails."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error


class ScoringLLM:
    """LiteLLM-backed client returning validated resume evaluations."""

    def __init__(self, config: ScoringConfig | None = None) -> None:
        self.config = config or get_scoring_config()
        self._setup_provider_env()

    def _setup_provider_env(self) -> None:
        if self.config.llm_provider != "anthropic" or not self.config.llm_base_url:
            return
        base_url = self.config.llm_base_url.rstrip("/")
        if base_url.endswith("/v1"):
            base_url = base_url[:-3]
        os.environ["ANTHROPIC_BASE_URL"] = base_url
        if self.config.llm_api_key:
            os.environ["ANTHROPIC_API_KEY"] = self.config.llm_api_key

    @property
    def model_name(self) -> str:
        """Provider-qualified model name used for LiteLLM routing."""
        model = self.config.llm_model
        provider = self.config.llm_provider
        if "/" in model:
            return model
        if provider == "anthropic":
            return f"anthropic/{model}"
        if self.config.llm_base_url:
            return f"openai/{model}"
        if provider == "openai":
            return model
        return f"{provider}/{model}"

    def evaluate_resume(
        self, *, text: str, role: str, keywords: Sequence[str]
    ) -> LLMResumeEvaluation:
        """Ask the model to evaluate a resume for a role."""
        prompt = build_llm_resume_prompt(text=text, role=role, keywords=keywords)
        return self.generate_structured(
            prompt=prompt,
            output_model=LLMResumeEvaluation,
            system_prompt=RESUME_LLM_SYSTEM_PROMPT,
        )

    def generate_structured(
        self,
        *,
        prompt: str,
        output_model: type[T],
        system_prompt: str | None = None,
    ) -> T:
        """Generate output validated against a Pydantic model.

        Transient failures are retried with exponential backoff up to
        ``llm_max_retries`` times. Timeouts and parse errors are not retried.
        """
        from litellm.exceptions import Timeout

        messages: list[dict[str, str]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        attempts = self.config.llm_max_retries + 1
        for attempt in range(attempts):
            try:
                response = self._call_completion(
                    messages=messages, response_format=output_model
                )
            except Timeout as e:
                raise ScoringLLMError(
                    "LLM request timed out "
                    f"(SCORING_LLM_TIMEOUT={self.config.llm_timeout}s).",
                    e,
                ) from e
            except Exception as e:
                if attempt + 1 >= attempts:
                    raise ScoringLLMError(
                        f"LLM call failed after {attempts} attempt(s): {e}", e
                    ) from e
                delay = min(0.5 * (2**attempt), _MAX_RETRY_DELAY)
                logger.warning(
                    "LLM call failed (attempt %s/%s), retrying in %.1fs: %s",
                    attempt + 1,
                    attempts,
                    delay,
                    e,
                )
                time.sleep(delay)
                continue

            try:
                return self._parse_response(response, output_model)
            except ScoringLLMError:
                raise
            except Exception as e:
                raise ScoringLLMError(f"LLM response could not be parsed: {e}", e) from e

        raise ScoringLLMError("LLM call was not attempted (no attempts configured).")

    def _call_completion(
        self,
        *,
        messages: list[dict[str, str]],
        response_format: type[BaseModel] | None = None,
    ):
        from litellm import completion

        kwargs: dict[str, Any] = {
            "model": self.model_name,
            "messages": messages,
            "timeout": self.config.llm_timeout,
        }

        reasoning_effort = _normalize_reasoning_effort(self.config.llm_reasoning_effort)
        if reasoning_effort is not None:
            kwargs["reasoning_effort"] = reasoning_effort
        if self.config.llm_api_key:
            kwargs["api_key"] = self.config.llm_api_key
        if self.config.llm_base_url and self.config.llm_provider != "anthropic":
            kwargs["base_url"] = self.config.llm_base_url
        if response_format is not None:
            kwargs["response_format"] = response_format

        return completion(**kwargs)

    def _parse_response(self, response, output_model: type[T]) -> T:
        try:
            message = response.choices[0].message
        except (AttributeError, IndexError, TypeError) as e:
            raise ScoringLLMError("LLM response has no choices.", e) from e

        content = getattr(message, "content", None)
        if content is None:
            for tool_call in getattr(message, "tool_calls", None) or []:
                arguments = getattr(getattr(tool_call, "function", None), "arguments", None)
                if isinstance(arguments, str) and arguments.strip():
                    content = arguments
                    break

        if content is None or not str(content).strip():
            raise ScoringLLMError("LLM returned no content to parse.")

        payload = extract_json(str(content))
        try:
            return output_model.model_validate_json(payload)
        except ValidationError as e:
            raise ScoringLLMError(f"LLM response failed validation: {e}", e) from e


def extract_json(content: str) -> str:
    """Pull a JSON object or array out of a model reply.

    Handles fenced code blocks and prose around the payload. Returns the
    stripped input unchanged when no balanced object or array is found.
    """
    content = content.strip()

    if content.startswith("```"):
        first_newline = content.find("\n")
        if first_newline != -1:
            content = content[first_newline + 1 :]
        if content.endswith("```"):
            content = content[:-3]
        content = content.strip()

    if content.startswith(("{", "[")):
        return content

    for open_char, close_char in (("{", "}"), ("[", "]")):
        extracted = _balanced_span(content, open_char, close_char)
        if extracted is not None:
            return extracted
    return content


def _balanced_span(text: str, open_char: str, close_char: str) -> str | None:
    start = text.find(open_char)
    if start == -1:
        return None

    depth = 0
    for idx in range(start, len(text)):
        ch = text[idx]
        if ch == open_char:
            depth += 1
        elif ch == close_char:
            depth -= 1
            if depth == 0:
                return text[start : idx + 1].strip()
    return None


def _normalize_reasoning_effort(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = str(value).strip().lower()
    if not normalized:
        return None
    if normalized in {"off", "disabled", "0", "false"}:
        return "disable"
    return normalized
