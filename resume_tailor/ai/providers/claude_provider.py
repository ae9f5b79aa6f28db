from __future__ import annotations

import logging
from typing import Any, Sequence

import httpx

from resume_tailor.ai.types import ChatMessage
from resume_tailor.core.errors import LLMNotConfiguredError, ParseError, UpstreamError

logger = logging.getLogger(__name__)


class ClaudeProvider:
    provider = "claude"

    def __init__(
        self,
        model: str,
        api_key: str | None = None,
        base_url: str = "https://api.anthropic.com",
        api_version: str = "2023-06-01",
        max_tokens: int = 4000,
        timeout_s: float = 60.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.model = model
        self._api_key = (api_key or "").strip()
        self._url = base_url.rstrip("/") + "/v1/messages"
        self._api_version = api_version
        self._max_tokens = max_tokens
        self._timeout_s = timeout_s
        self._transport = transport

    def _payload(self, messages: Sequence[ChatMessage]) -> dict[str, Any]:
        system = "\n\n".join(m.content for m in messages if m.role == "system")
        payload: dict[str, Any] = {
            "model": self.model,
            "max_tokens": self._max_tokens,
            "messages": [{"role": m.role, "content": m.content} for m in messages if m.role != "system"],
        }
        if system:
            payload["system"] = system
        return payload

    def complete(self, messages: Sequence[ChatMessage]) -> str:
        if not self._api_key:
            raise LLMNotConfiguredError("CLAUDE_API_KEY is missing. The resume AI is not configured.")

        headers = {
            "Content-Type": "application/json",
            "x-api-key": self._api_key,
            "anthropic-version": self._api_version,
        }
        try:
            with httpx.Client(timeout=self._timeout_s, transport=self._transport) as client:
                response = client.post(self._url, headers=headers, json=self._payload(messages))
        except httpx.HTTPError as exc:
            logger.error("claude_request_failed model=%s: %s", self.model, exc)
            raise UpstreamError(status_code=502, body=str(exc)) from exc

        if not response.is_success:
            logger.error("claude_api_error status=%s body=%s", response.status_code, response.text[:500])
            raise UpstreamError(status_code=response.status_code, body=response.text)

        data = response.json()
        blocks = data.get("content") or []
        texts = [block.get("text", "") for block in blocks if block.get("type") == "text"]
        if not texts:
            raise ParseError("Empty response from model")
        return texts[0]
