from __future__ import annotations

import logging
from typing import Callable, TypeVar

from pydantic import BaseModel

from resume_tailor.ai.gateway import LLMGateway
from resume_tailor.core.errors import ParseError, ResumeTailorError, UpstreamError, ValidationError
from resume_tailor.parsing.extract import TOO_LITTLE_TEXT_MESSAGE, ensure_min_length, extract_document
from resume_tailor.prompts.parse import build_detailed_parse_prompt, build_parse_prompt
from resume_tailor.schemas.migration import LegacyProfile, upgrade_legacy
from resume_tailor.schemas.profile import Profile

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

AI_PARSE_FAILED_MESSAGE = "AI parsing failed. Please try again."


class AIParseFailed(ResumeTailorError):
    code = "ai_parse_failed"


def _ask(gateway: LLMGateway, call: Callable[[], ModelT]) -> ModelT:
    try:
        return call()
    except (UpstreamError, ParseError) as exc:
        logger.warning("resume_parse_failed model=%s code=%s", gateway.model, exc.code)
        raise AIParseFailed(AI_PARSE_FAILED_MESSAGE) from exc


def short_text_message(minimum: int) -> str:
    return f"Please provide more resume text (at least {minimum} characters)"


def parse_resume_text(gateway: LLMGateway, resume_text: str, *, min_chars: int = 100) -> Profile:
    """Pasted text → expanded profile through the exhaustive extraction prompt."""
    text = ensure_min_length(resume_text, min_chars, short_text_message(min_chars))
    prompt = build_detailed_parse_prompt(text)
    return _ask(gateway, lambda: gateway.complete_json(prompt, Profile, tool="parse-resume-text"))


def _parse_flat(gateway: LLMGateway, text: str) -> Profile:
    prompt = build_parse_prompt(text)
    legacy = _ask(gateway, lambda: gateway.complete_json(prompt, LegacyProfile, tool="parse-resume"))
    return upgrade_legacy(legacy)


def parse_pasted_resume(gateway: LLMGateway, resume_text: str | None, *, min_chars: int = 50) -> Profile:
    if not (resume_text or "").strip():
        raise ValidationError("No resume text provided")
    text = ensure_min_length(resume_text, min_chars, TOO_LITTLE_TEXT_MESSAGE)
    return _parse_flat(gateway, text)


def parse_uploaded_resume(
    gateway: LLMGateway,
    content: bytes,
    mime_type: str,
    filename: str = "",
    *,
    min_chars: int = 50,
    pdf_enabled: bool = False,
) -> Profile:
    document = extract_document(content, mime_type, filename, pdf_enabled=pdf_enabled)
    text = ensure_min_length(document.text, min_chars, TOO_LITTLE_TEXT_MESSAGE)
    return _parse_flat(gateway, text)
