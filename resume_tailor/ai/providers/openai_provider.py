from __future__ import annotations

import logging
from typing import Optional, Sequence

import openai
from openai import OpenAI

from resume_tailor.ai.types import ChatMessage
from resume_tailor.core.errors import LLMNotConfiguredError, ParseError, UpstreamError

logger = logging.getLogger(__name__)


class OpenAIProvider:
    provider = "openai"

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        max_tokens: int = 4000,
        timeout_s: float = 60.0,
        temperature: float = 0.2,
    ):
        self.model = model
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._api_key = (api_key or "").strip()
        self._base_url = base_url or None
        self._timeout_s = timeout_s
        self._client: OpenAI | None = None

    def _get_client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI(
                api_key=self._api_key,
                base_url=self._base_url,
                timeout=self._timeout_s,
                max_retries=0,
            )
        return self._client

    def complete(self, messages: Sequence[ChatMessage]) -> str:
        if not self._api_key:
            raise LLMNotConfiguredError("OPENAI_API_KEY is missing. The resume AI is not configured.")

        payload = [{"role": m.role, "content": m.content} for m in messages]
        try:
            response = self._get_client().chat.completions.create(
                model=self.model,
                messages=payload,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except openai.APIStatusError as exc:
            body = exc.response.text if exc.response is not None else str(exc)
            logger.error("openai_api_error status=%s body=%s", exc.status_code, body[:500])
            raise UpstreamError(status_code=exc.status_code, body=body, message="OpenAI API error") from exc
        except openai.APIConnectionError as exc:
            logger.error("openai_request_failed model=%s: %s", self.model, exc)
            raise UpstreamError(status_code=502, body=str(exc), message="OpenAI API error") from exc

        content = response.choices[0].message.content if response.choices else ""
        if not content:
            raise ParseError("Empty response from model")
        return content
