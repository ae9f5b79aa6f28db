from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from .base import CamelModel, StrList
from .generation import GeneratedResume
from .profile import Profile

FormState = Literal["uploading", "parsing", "editing", "saved"]


class GenerateResumeRequest(CamelModel):
    job_description: str = ""
    user_profile: dict[str, Any] | None = None
    user_id: str = ""


class ResumeTextRequest(CamelModel):
    resume_text: str = ""


class ProfileImportRequest(CamelModel):
    resume_text: str = ""
    save: bool = False


class AtsCheckRequest(CamelModel):
    resume_text: str = ""
    job_description: str = ""


class AtsCheckResponse(CamelModel):
    score: int = Field(ge=0, le=100)
    matched_keywords: StrList = Field(default_factory=list)
    missing_keywords: StrList = Field(default_factory=list)


class ExportResumeRequest(CamelModel):
    resume: GeneratedResume
    user_profile: dict[str, Any] = Field(default_factory=dict)


class SkillsUpdateRequest(CamelModel):
    value: str = ""


class ProfileFormResponse(CamelModel):
    profile: Profile
    state: FormState
    warnings: StrList = Field(default_factory=list)
