from __future__ import annotations

import json
import logging
import re
from typing import TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from resume_tailor.core.errors import ParseError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_FENCE_RE = re.compile(r"```(?:json)?\n?")


def strip_code_fences(text: str) -> str:
    """Remove every ```json / ``` marker and surrounding whitespace.

    Running it twice gives the same result as running it once.
    """
    return _FENCE_RE.sub("", text or "").strip()


def decode_model_json(text: str, model_cls: type[ModelT]) -> ModelT:
    clean = strip_code_fences(text)
    try:
        data = json.loads(clean)
    except json.JSONDecodeError as exc:
        logger.warning("llm_json_decode_failed pos=%s text_len=%s", exc.pos, len(clean))
        raise ParseError(raw_text=clean) from exc

    if not isinstance(data, dict):
        logger.warning("llm_json_not_object type=%s", type(data).__name__)
        raise ParseError(raw_text=clean)

    try:
        return model_cls.model_validate(data)
    except PydanticValidationError as exc:
        logger.warning("llm_json_schema_invalid model=%s errors=%s", model_cls.__name__, exc.error_count())
        raise ParseError(raw_text=clean) from exc
