from __future__ import annotations

import logging
import time
from typing import TypeVar

from pydantic import BaseModel

from resume_tailor.ai.decode import decode_model_json
from resume_tailor.ai.types import AIClient, ChatMessage

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class LLMGateway:
    """Single-prompt access to the configured chat model.

    One user message in, one text block out. Nothing is retried: provider
    errors propagate as `UpstreamError`, undecodable replies as `ParseError`.
    """

    def __init__(self, client: AIClient):
        self._client = client

    @property
    def model(self) -> str:
        return self._client.model

    def complete(self, prompt: str, *, tool: str = "unknown") -> str:
        started = time.perf_counter()
        try:
            text = self._client.complete([ChatMessage(role="user", content=prompt)])
        finally:
            logger.info(
                "llm_complete tool=%s provider=%s model=%s prompt_len=%s latency_ms=%s",
                tool,
                self._client.provider,
                self._client.model,
                len(prompt),
                int((time.perf_counter() - started) * 1000),
            )
        return text

    def complete_json(self, prompt: str, model_cls: type[ModelT], *, tool: str = "unknown") -> ModelT:
        return decode_model_json(self.complete(prompt, tool=tool), model_cls)
