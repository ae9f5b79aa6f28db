"""Profile schema versions and the upgrade path applied at the store boundary.

Version 1 is the flat profile (``fullName``, ``experience`` ...). Version 2 is
the expanded profile in :mod:`resume_tailor.schemas.profile`. Documents
without a ``schemaVersion`` are sniffed by their keys.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic import ValidationError as PydanticValidationError

from resume_tailor.core.errors import ProfileSchemaError

from .base import CamelModel, CommaList, StrList
from .profile import (
    PROFILE_SCHEMA_VERSION,
    Address,
    Certification,
    Education,
    OnlinePresence,
    PersonalInfo,
    Profile,
    Skills,
    WorkExperience,
)

LEGACY_SCHEMA_VERSION = 1

_LEGACY_KEYS = {"fullName", "experience", "linkedin", "location"}
_CURRENT_KEYS = {"personalInfo", "workExperience", "onlinePresence", "professionalSummary"}


class LegacyExperience(CamelModel):
    company: str = ""
    position: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    achievements: StrList = Field(default_factory=list)


class LegacyEducation(CamelModel):
    school: str = ""
    degree: str = ""
    field: str = ""
    graduation_year: str = ""


class LegacySkills(CamelModel):
    technical: CommaList = Field(default_factory=list)
    soft: CommaList = Field(default_factory=list)


class LegacyProfile(CamelModel):
    full_name: str = ""
    email: str = ""
    phone: str = ""
    linkedin: str = ""
    location: str = ""
    summary: str = ""
    experience: list[LegacyExperience] = Field(default_factory=list)
    skills: LegacySkills = Field(default_factory=LegacySkills)
    education: list[LegacyEducation] = Field(default_factory=list)
    certifications: StrList = Field(default_factory=list)


def detect_schema_version(document: dict[str, Any]) -> int:
    version = document.get("schemaVersion")
    if version is not None:
        try:
            return int(version)
        except (TypeError, ValueError):
            raise ProfileSchemaError(f"Unrecognized profile schemaVersion '{version}'.") from None
    keys = set(document)
    if keys & _CURRENT_KEYS:
        return PROFILE_SCHEMA_VERSION
    if keys & _LEGACY_KEYS:
        return LEGACY_SCHEMA_VERSION
    return PROFILE_SCHEMA_VERSION


def _split_location(location: str) -> Address:
    parts = [part.strip() for part in (location or "").split(",") if part.strip()]
    if not parts:
        return Address()
    if len(parts) == 1:
        return Address(city=parts[0])
    if len(parts) == 2:
        return Address(city=parts[0], state=parts[1])
    return Address(city=parts[0], state=parts[1], country=", ".join(parts[2:]))


def upgrade_legacy(legacy: LegacyProfile) -> Profile:
    first_name, _, last_name = legacy.full_name.strip().partition(" ")
    return Profile(
        personal_info=PersonalInfo(
            first_name=first_name,
            last_name=last_name.strip(),
            email=legacy.email,
            phone=legacy.phone,
            address=_split_location(legacy.location),
        ),
        online_presence=OnlinePresence(linkedin=legacy.linkedin),
        professional_summary=legacy.summary,
        work_experience=[
            WorkExperience(
                company=exp.company,
                position=exp.position,
                start_date=exp.start_date,
                end_date=exp.end_date,
                current=exp.current,
                achievements=exp.achievements,
            )
            for exp in legacy.experience
        ],
        education=[
            Education(
                institution=edu.school,
                degree=edu.degree,
                field_of_study=edu.field,
                end_date=edu.graduation_year,
            )
            for edu in legacy.education
        ],
        skills=Skills(technical=legacy.skills.technical, soft=legacy.skills.soft),
        certifications=[Certification(name=name) for name in legacy.certifications if name.strip()],
    )


def upgrade_profile(document: dict[str, Any]) -> Profile:
    """Validate a stored or submitted profile, upgrading version 1 documents."""
    if not isinstance(document, dict):
        raise ProfileSchemaError("Profile must be a JSON object.")

    version = detect_schema_version(document)
    try:
        if version == PROFILE_SCHEMA_VERSION:
            return Profile.model_validate(document)
        if version == LEGACY_SCHEMA_VERSION:
            legacy = LegacyProfile.model_validate(document)
            upgraded = upgrade_legacy(legacy)
            updated_at = document.get("updatedAt")
            if isinstance(updated_at, str):
                upgraded.updated_at = updated_at
            return upgraded
    except PydanticValidationError as exc:
        raise ProfileSchemaError(f"Profile document is invalid: {exc.error_count()} field error(s).") from exc

    raise ProfileSchemaError(f"Unsupported profile schemaVersion {version}.")
