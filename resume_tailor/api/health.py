from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from resume_tailor.api.deps import get_profile_store, get_settings
from resume_tailor.core.config import Settings
from resume_tailor.store.profile_store import ProfileStore

router = APIRouter()


@router.get("/health", summary="Health Check", description="Liveness probe; does not touch the store or the LLM.")
async def health_check():
    return {"status": "healthy"}


@router.get("/health/ready", summary="Readiness Check")
def readiness_check(
    settings: Settings = Depends(get_settings),
    store: ProfileStore = Depends(get_profile_store),
):
    store_ok = store.ping()
    llm_configured = bool(settings.llm_api_key)
    ready = store_ok and llm_configured
    return JSONResponse(
        status_code=200 if ready else 503,
        content={
            "status": "ready" if ready else "degraded",
            "profileStore": store_ok,
            "llmConfigured": llm_configured,
            "provider": settings.ai_provider,
            "model": settings.ai_model,
        },
    )
