from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ResumeTailorError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_error"

    def __init__(self, message: str, *, code: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code

    def payload(self) -> dict[str, Any]:
        return {"error": self.message}


class ValidationError(ResumeTailorError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"


class EmptyExtraction(ValidationError):
    code = "empty_extraction"


class UnsupportedFormat(ResumeTailorError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "unsupported_format"


class UploadTooLarge(ResumeTailorError):
    status_code = 413
    code = "upload_too_large"


class UpstreamError(ResumeTailorError):
    """Non-2xx answer from the LLM provider; status and body are passed through."""

    code = "upstream_error"

    def __init__(self, status_code: int, body: str, *, message: str = "Claude API error"):
        super().__init__(message, status_code=status_code)
        self.body = body

    def payload(self) -> dict[str, Any]:
        return {"error": self.message, "details": self.body}


class LLMNotConfiguredError(ResumeTailorError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "llm_disabled"


class ParseError(ResumeTailorError):
    code = "parse_error"

    def __init__(self, message: str = "Failed to parse AI response", *, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text


class ProfileNotFound(ResumeTailorError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "profile_not_found"


class ProfileSchemaError(ResumeTailorError):
    status_code = 422
    code = "profile_schema_error"


class FormStateError(ResumeTailorError):
    status_code = status.HTTP_409_CONFLICT
    code = "form_state_error"


async def _resume_tailor_error_handler(request: Request, exc: ResumeTailorError) -> JSONResponse:
    log = logger.warning if exc.status_code < 500 else logger.error
    log("request_failed path=%s code=%s status=%s: %s", request.url.path, exc.code, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.payload())


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("request_invalid path=%s errors=%s", request.url.path, len(exc.errors()))
    details = [
        {"loc": list(err.get("loc", ())), "msg": str(err.get("msg", ""))}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Missing required fields", "details": details},
    )


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    _ = request
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("request_crashed path=%s", request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error", "message": str(exc)},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ResumeTailorError, _resume_tailor_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
