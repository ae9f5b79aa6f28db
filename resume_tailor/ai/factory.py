from resume_tailor.ai.types import AIClient
from resume_tailor.core.config import Settings

from resume_tailor.ai.providers.openai_provider import OpenAIProvider
from resume_tailor.ai.providers.claude_provider import ClaudeProvider


def get_ai_client(settings: Settings) -> AIClient:
    if settings.ai_provider == "claude":
        return ClaudeProvider(
            model=settings.ai_model,
            api_key=settings.claude_api_key,
            base_url=settings.anthropic_base_url,
            api_version=settings.anthropic_version,
            max_tokens=settings.llm_max_tokens,
            timeout_s=settings.llm_timeout_s,
        )

    if settings.ai_provider == "openai":
        return OpenAIProvider(
            model=settings.ai_model,
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            max_tokens=settings.llm_max_tokens,
            timeout_s=settings.llm_timeout_s,
        )

    raise ValueError(f"Unsupported AI_PROVIDER='{settings.ai_provider}'")
