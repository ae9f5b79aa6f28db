from __future__ import annotations

from contextvars import ContextVar

from fastapi import FastAPI
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.types import ASGIApp, Receive, Scope, Send

from resume_tailor.core.config import Settings

limiter = Limiter(key_func=get_remote_address)

_DEFAULT_SETTINGS = Settings()

_request_settings: ContextVar[Settings | None] = ContextVar("rate_limit_settings", default=None)


class RateLimitSettingsMiddleware:
    """Binds the serving app's settings for the duration of each request.

    The limiter is shared by every app in the process, so the limit and the
    on/off switch are looked up per request instead of being stored on it.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        token = _request_settings.set(scope["app"].state.settings)
        try:
            await self.app(scope, receive, send)
        finally:
            _request_settings.reset(token)


def _active_settings() -> Settings:
    return _request_settings.get() or _DEFAULT_SETTINGS


def _current_limit() -> str:
    return _active_settings().rate_limit


def _limits_disabled() -> bool:
    return not _active_settings().rate_limit_enabled


def rate_limit():
    return limiter.limit(_current_limit, exempt_when=_limits_disabled)


def install_rate_limit(app: FastAPI) -> None:
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)
    # Added last so it wraps every other middleware.
    app.add_middleware(RateLimitSettingsMiddleware)
