from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.datastructures import Headers
from starlette.responses import Response

from resume_tailor.core.config import Settings

ALLOWED_METHODS = ["GET", "OPTIONS", "PATCH", "DELETE", "POST", "PUT"]

ALLOWED_HEADERS = [
    "X-CSRF-Token",
    "X-Requested-With",
    "Accept",
    "Accept-Version",
    "Content-Length",
    "Content-MD5",
    "Content-Type",
    "Date",
    "X-Api-Version",
]

_BODY_HEADERS = {"content-length", "content-type"}


class PreflightCORSMiddleware(CORSMiddleware):
    """Answers every CORS preflight with an empty 200.

    The allow-lists still go out as headers, so the browser decides whether
    a request outside them may proceed.
    """

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers)
        headers = {key: value for key, value in response.headers.items() if key.lower() not in _BODY_HEADERS}
        return Response(status_code=200, headers=headers)


def cors_allowed_origins(settings: Settings) -> list[str]:
    return list(settings.cors_allowed_origins)


def install_cors(app: FastAPI, settings: Settings) -> None:
    app.add_middleware(
        PreflightCORSMiddleware,
        allow_origins=cors_allowed_origins(settings),
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
    )
