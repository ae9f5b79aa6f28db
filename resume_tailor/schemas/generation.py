from __future__ import annotations

import math
from typing import Any

from pydantic import Field, field_validator

from .base import CamelModel, StrList


class GeneratedExperience(CamelModel):
    company: str = ""
    position: str = ""
    period: str = ""
    achievements: StrList = Field(default_factory=list)


class GeneratedEducation(CamelModel):
    degree: str = ""
    field: str = ""
    school: str = ""
    year: str = ""


class GeneratedResume(CamelModel):
    summary: str = ""
    experience: list[GeneratedExperience] = Field(default_factory=list)
    skills: StrList = Field(default_factory=list)
    education: list[GeneratedEducation] = Field(default_factory=list)


class GenerationResult(CamelModel):
    resume: GeneratedResume
    email: str = ""
    ats_score: int = Field(default=0, ge=0, le=100)
    matched_keywords: StrList = Field(default_factory=list)
    missing_keywords: StrList = Field(default_factory=list)

    @field_validator("ats_score", mode="before")
    @classmethod
    def _clamp_score(cls, value: Any) -> int:
        if isinstance(value, str):
            value = value.strip().rstrip("%")
        try:
            score = float(value)
        except (TypeError, OverflowError) as exc:
            raise ValueError("atsScore must be a number") from exc
        if not math.isfinite(score):
            raise ValueError("atsScore must be a finite number")
        return max(0, min(100, int(round(score))))
