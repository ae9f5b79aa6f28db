from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from resume_tailor.ai.gateway import LLMGateway
from resume_tailor.api.deps import get_gateway, get_profile_store
from resume_tailor.core.errors import ValidationError
from resume_tailor.core.rate_limit import rate_limit
from resume_tailor.export.docx_export import (
    DOCX_MEDIA_TYPE,
    content_disposition,
    export_filename,
    export_resume_docx,
)
from resume_tailor.schemas.generation import GenerationResult
from resume_tailor.schemas.migration import upgrade_profile
from resume_tailor.schemas.requests import (
    AtsCheckRequest,
    AtsCheckResponse,
    ExportResumeRequest,
    GenerateResumeRequest,
)
from resume_tailor.services.ats import check_ats
from resume_tailor.services.generation_service import generate_resume, resolve_profile
from resume_tailor.store.profile_store import ProfileStore

router = APIRouter()

PREFLIGHT_PATHS = ("/generate-resume", "/ats-check", "/export-resume", "/parse-resume", "/parse-resume-text")


async def preflight():
    return Response(status_code=200)


for _path in PREFLIGHT_PATHS:
    router.add_api_route(_path, preflight, methods=["OPTIONS"], include_in_schema=False)


@router.post("/generate-resume", response_model=GenerationResult)
@rate_limit()
def generate_resume_endpoint(
    request: Request,
    payload: GenerateResumeRequest,
    gateway: LLMGateway = Depends(get_gateway),
    store: ProfileStore = Depends(get_profile_store),
):
    _ = request
    profile = resolve_profile(payload, store)
    return generate_resume(gateway, payload.job_description, profile)


@router.post("/ats-check", response_model=AtsCheckResponse)
def ats_check(payload: AtsCheckRequest):
    if not payload.resume_text.strip() or not payload.job_description.strip():
        raise ValidationError("Missing required fields")
    return check_ats(payload.resume_text, payload.job_description)


@router.post("/export-resume")
def export_resume(payload: ExportResumeRequest):
    profile = upgrade_profile(payload.user_profile)
    content = export_resume_docx(payload.resume, profile)
    filename = export_filename(profile)
    return Response(
        content=content,
        media_type=DOCX_MEDIA_TYPE,
        headers={"Content-Disposition": content_disposition(filename)},
    )
