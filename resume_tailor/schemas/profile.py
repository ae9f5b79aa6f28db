from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, field_validator, model_validator

from .base import CamelModel, CommaList, StrList

PROFILE_SCHEMA_VERSION = 2

EmploymentType = Literal["Full-time", "Part-time", "Contract", "Freelance", "Internship"]
EMPLOYMENT_TYPES: tuple[str, ...] = ("Full-time", "Part-time", "Contract", "Freelance", "Internship")


class Address(CamelModel):
    city: str = ""
    state: str = ""
    country: str = ""


class PersonalInfo(CamelModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    address: Address = Field(default_factory=Address)

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name.strip(), self.last_name.strip()) if part)


class OnlinePresence(CamelModel):
    linkedin: str = ""
    github: str = ""
    portfolio: str = ""
    website: str = ""


class WorkExperience(CamelModel):
    company: str = ""
    position: str = ""
    employment_type: EmploymentType = "Full-time"
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    achievements: StrList = Field(default_factory=list)

    @field_validator("employment_type", mode="before")
    @classmethod
    def _normalize_employment_type(cls, value: Any) -> str:
        key = str(value or "").strip().lower().replace(" ", "-")
        for option in EMPLOYMENT_TYPES:
            if option.lower() == key:
                return option
        return "Full-time"

    @model_validator(mode="after")
    def _current_has_no_end(self) -> "WorkExperience":
        if self.current:
            self.end_date = ""
        return self


class Education(CamelModel):
    institution: str = ""
    degree: str = ""
    field_of_study: str = ""
    gpa: str = ""
    start_date: str = ""
    end_date: str = ""
    location: str = ""


class Skills(CamelModel):
    technical: CommaList = Field(default_factory=list)
    soft: CommaList = Field(default_factory=list)


class Project(CamelModel):
    name: str = ""
    description: str = ""
    technologies: CommaList = Field(default_factory=list)
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    github_link: str = ""
    live_link: str = ""

    @model_validator(mode="after")
    def _current_has_no_end(self) -> "Project":
        if self.current:
            self.end_date = ""
        return self


class Certification(CamelModel):
    name: str = ""
    issuing_organization: str = ""
    issue_date: str = ""
    expiry_date: str = ""
    credential_id: str = ""
    credential_url: str = ""

    @model_validator(mode="before")
    @classmethod
    def _from_name(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"name": data}
        return data


class Award(CamelModel):
    title: str = ""
    issuer: str = ""
    date: str = ""
    description: str = ""


class Publication(CamelModel):
    title: str = ""
    publisher: str = ""
    date: str = ""
    url: str = ""
    description: str = ""

    @model_validator(mode="before")
    @classmethod
    def _from_title(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"title": data}
        return data


class VolunteerExperience(CamelModel):
    organization: str = ""
    role: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    description: str = ""

    @model_validator(mode="after")
    def _current_has_no_end(self) -> "VolunteerExperience":
        if self.current:
            self.end_date = ""
        return self


class Language(CamelModel):
    language: str = ""
    proficiency: str = "Intermediate"

    @model_validator(mode="before")
    @classmethod
    def _from_name(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"language": data}
        return data


class Membership(CamelModel):
    organization: str = ""
    role: str = ""
    start_date: str = ""
    current: bool = False

    @model_validator(mode="before")
    @classmethod
    def _from_organization(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"organization": data}
        return data


class Profile(CamelModel):
    """Master career profile, one document per user."""

    schema_version: int = PROFILE_SCHEMA_VERSION
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    online_presence: OnlinePresence = Field(default_factory=OnlinePresence)
    professional_summary: str = ""
    work_experience: list[WorkExperience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    skills: Skills = Field(default_factory=Skills)
    projects: list[Project] = Field(default_factory=list)
    certifications: list[Certification] = Field(default_factory=list)
    awards: list[Award] = Field(default_factory=list)
    publications: list[Publication] = Field(default_factory=list)
    volunteer_experience: list[VolunteerExperience] = Field(default_factory=list)
    languages: list[Language] = Field(default_factory=list)
    memberships: list[Membership] = Field(default_factory=list)
    interests: CommaList = Field(default_factory=list)
    updated_at: str = ""

    def to_document(self) -> dict[str, Any]:
        return self.to_wire(exclude={"updated_at"})


# Repeatable form sections and the entry model each one holds.
SECTION_MODELS: dict[str, type[CamelModel]] = {
    "workExperience": WorkExperience,
    "education": Education,
    "projects": Project,
    "certifications": Certification,
    "awards": Award,
    "publications": Publication,
    "volunteerExperience": VolunteerExperience,
    "languages": Language,
    "memberships": Membership,
}

MANDATORY_SECTIONS: dict[str, str] = {
    "workExperience": "You must have at least one work experience",
    "education": "You must have at least one education entry",
}


def empty_work_experience() -> WorkExperience:
    return WorkExperience(achievements=[""])


def blank_profile(*, first_name: str = "", last_name: str = "", email: str = "") -> Profile:
    return Profile(
        personal_info=PersonalInfo(first_name=first_name, last_name=last_name, email=email),
        work_experience=[empty_work_experience()],
        education=[Education()],
    )
