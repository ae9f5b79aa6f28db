from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_MODELS = {
    "claude": "claude-sonnet-4-20250514",
    "openai": "gpt-4o-mini",
}


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    ai_provider: str = "claude"
    ai_model: str = DEFAULT_MODELS["claude"]
    claude_api_key: str | None = None
    anthropic_base_url: str = "https://api.anthropic.com"
    anthropic_version: str = "2023-06-01"
    openai_api_key: str | None = None
    openai_base_url: str | None = None
    llm_max_tokens: int = 4000
    llm_timeout_s: float = 60.0
    profile_db_path: str = "data/profiles.db"
    profile_cache_dir: str = "data/profile_cache"
    pdf_uploads_enabled: bool = False
    max_upload_bytes: int = 10 * 1024 * 1024
    min_upload_text_chars: int = 50
    min_resume_text_chars: int = 100
    rate_limit: str = "30/minute"
    rate_limit_enabled: bool = True
    cors_allowed_origins: tuple[str, ...] = ("*",)
    cors_allow_credentials: bool = True
    log_level: str = "INFO"
    sentry_dsn: str | None = None

    @property
    def llm_api_key(self) -> str | None:
        if self.ai_provider == "openai":
            return self.openai_api_key
        return self.claude_api_key


def load_settings() -> Settings:
    """Build the process settings from the environment (and `.env`, if present)."""
    load_dotenv()

    provider = (_get_env("AI_PROVIDER", "claude") or "claude").strip().lower()
    if provider not in DEFAULT_MODELS:
        raise RuntimeError(f"AI_PROVIDER must be one of: {', '.join(sorted(DEFAULT_MODELS))}.")

    return Settings(
        ai_provider=provider,
        ai_model=(_get_env("AI_MODEL", DEFAULT_MODELS[provider]) or DEFAULT_MODELS[provider]).strip(),
        claude_api_key=_get_env("CLAUDE_API_KEY") or _get_env("ANTHROPIC_API_KEY"),
        anthropic_base_url=_get_env("ANTHROPIC_BASE_URL", "https://api.anthropic.com") or "https://api.anthropic.com",
        anthropic_version=_get_env("ANTHROPIC_VERSION", "2023-06-01") or "2023-06-01",
        openai_api_key=_get_env("OPENAI_API_KEY"),
        openai_base_url=_get_env("OPENAI_BASE_URL"),
        llm_max_tokens=_get_env_int("LLM_MAX_TOKENS", 4000),
        llm_timeout_s=_get_env_float("LLM_TIMEOUT_S", 60.0),
        profile_db_path=_get_env("PROFILE_DB_PATH", "data/profiles.db") or "data/profiles.db",
        profile_cache_dir=_get_env("PROFILE_CACHE_DIR", "data/profile_cache") or "data/profile_cache",
        pdf_uploads_enabled=_get_env_bool("PDF_UPLOADS_ENABLED", False),
        max_upload_bytes=_get_env_int("MAX_UPLOAD_BYTES", 10 * 1024 * 1024),
        min_upload_text_chars=_get_env_int("MIN_UPLOAD_TEXT_CHARS", 50),
        min_resume_text_chars=_get_env_int("MIN_RESUME_TEXT_CHARS", 100),
        rate_limit=_get_env("RATE_LIMIT", "30/minute") or "30/minute",
        rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
        cors_allowed_origins=_get_env_list("CORS_ALLOWED_ORIGINS", ["*"]),
        cors_allow_credentials=_get_env_bool("CORS_ALLOW_CREDENTIALS", True),
        log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
        sentry_dsn=_get_env("SENTRY_DSN"),
    )
