import logging
from contextlib import asynccontextmanager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    settings = app.state.settings
    store = app.state.profile_store
    store.init()
    logger.info(
        "startup provider=%s model=%s llm_configured=%s pdf_uploads=%s",
        settings.ai_provider,
        settings.ai_model,
        bool(settings.llm_api_key),
        settings.pdf_uploads_enabled,
    )
    yield
    store.close()
