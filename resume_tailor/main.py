import logging

from fastapi import FastAPI
import sentry_sdk

from resume_tailor.ai.factory import get_ai_client
from resume_tailor.ai.gateway import LLMGateway
from resume_tailor.ai.types import AIClient
from resume_tailor.api.health import router as health_router
from resume_tailor.api.parse import router as parse_router
from resume_tailor.api.profile import router as profile_router
from resume_tailor.api.resume import router as resume_router
from resume_tailor.core.config import Settings, load_settings
from resume_tailor.core.cors import install_cors
from resume_tailor.core.errors import register_error_handlers
from resume_tailor.core.lifespan import lifespan
from resume_tailor.core.rate_limit import install_rate_limit
from resume_tailor.store.profile_store import ProfileStore


def create_app(
    settings: Settings | None = None,
    *,
    ai_client: AIClient | None = None,
    profile_store: ProfileStore | None = None,
) -> FastAPI:
    settings = settings or load_settings()

    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s %(message)s")
    if settings.sentry_dsn:
        sentry_sdk.init(dsn=settings.sentry_dsn)

    app = FastAPI(title="Resume Tailor API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.gateway = LLMGateway(ai_client or get_ai_client(settings))
    app.state.profile_store = profile_store or ProfileStore(settings.profile_db_path, settings.profile_cache_dir)

    install_cors(app, settings)
    install_rate_limit(app)
    register_error_handlers(app)

    app.include_router(health_router, tags=["Health"])
    app.include_router(resume_router, prefix="/api", tags=["Resume"])
    app.include_router(parse_router, prefix="/api", tags=["Parsing"])
    app.include_router(profile_router, prefix="/api", tags=["Profile"])
    return app


app = create_app()
