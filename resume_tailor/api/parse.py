import json
import logging

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from resume_tailor.ai.gateway import LLMGateway
from resume_tailor.api.deps import get_gateway, get_settings
from resume_tailor.core.config import Settings
from resume_tailor.core.errors import UploadTooLarge, ValidationError
from resume_tailor.core.rate_limit import rate_limit
from resume_tailor.schemas.profile import Profile
from resume_tailor.schemas.requests import ResumeTextRequest
from resume_tailor.services.parse_service import parse_pasted_resume, parse_resume_text, parse_uploaded_resume

logger = logging.getLogger(__name__)

router = APIRouter()

UPLOAD_CHUNK_BYTES = 1024 * 64


async def _read_upload(upload: UploadFile, max_bytes: int) -> bytes:
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await upload.read(UPLOAD_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            raise UploadTooLarge(f"File too large. Maximum allowed size is {max_bytes // (1024 * 1024)} MB.")
        chunks.append(chunk)
    return b"".join(chunks)


@router.post("/parse-resume-text", response_model=Profile)
@rate_limit()
def parse_resume_text_endpoint(
    request: Request,
    payload: ResumeTextRequest,
    gateway: LLMGateway = Depends(get_gateway),
    settings: Settings = Depends(get_settings),
):
    _ = request
    return parse_resume_text(gateway, payload.resume_text, min_chars=settings.min_resume_text_chars)


@router.post("/parse-resume", response_model=Profile)
@rate_limit()
async def parse_resume_endpoint(
    request: Request,
    gateway: LLMGateway = Depends(get_gateway),
    settings: Settings = Depends(get_settings),
):
    content_type = request.headers.get("content-type", "")

    if "application/json" in content_type:
        try:
            body = await request.json()
        except json.JSONDecodeError as exc:
            raise ValidationError("Request body is not valid JSON.") from exc
        text = body.get("resumeText") if isinstance(body, dict) else None
        return await run_in_threadpool(
            parse_pasted_resume,
            gateway,
            text,
            min_chars=settings.min_upload_text_chars,
        )

    form = await request.form()
    upload = form.get("file")
    if not isinstance(upload, UploadFile):
        raise ValidationError("No file uploaded")

    try:
        content = await _read_upload(upload, settings.max_upload_bytes)
    finally:
        await upload.close()

    logger.info(
        "resume_upload_received filename=%s content_type=%s bytes=%s",
        upload.filename or "-",
        upload.content_type or "-",
        len(content),
    )
    return await run_in_threadpool(
        parse_uploaded_resume,
        gateway,
        content,
        upload.content_type or "",
        upload.filename or "",
        min_chars=settings.min_upload_text_chars,
        pdf_enabled=settings.pdf_uploads_enabled,
    )
