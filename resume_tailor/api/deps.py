from __future__ import annotations

from fastapi import Request

from resume_tailor.ai.gateway import LLMGateway
from resume_tailor.core.config import Settings
from resume_tailor.store.profile_store import ProfileStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_gateway(request: Request) -> LLMGateway:
    return request.app.state.gateway


def get_profile_store(request: Request) -> ProfileStore:
    return request.app.state.profile_store
