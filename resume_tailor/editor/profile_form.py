from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as PydanticValidationError

from resume_tailor.core.errors import FormStateError, ValidationError
from resume_tailor.schemas.base import CamelModel, split_comma_list
from resume_tailor.schemas.profile import (
    MANDATORY_SECTIONS,
    SECTION_MODELS,
    Address,
    OnlinePresence,
    PersonalInfo,
    Profile,
    WorkExperience,
    blank_profile,
    empty_work_experience,
)
from resume_tailor.schemas.requests import FormState

if TYPE_CHECKING:
    from resume_tailor.store.profile_store import ProfileStore

logger = logging.getLogger(__name__)

SKILL_KINDS = ("technical", "soft")

_TRANSITIONS: dict[str, set[str]] = {
    "uploading": {"parsing", "editing"},
    "parsing": {"editing", "uploading"},
    "editing": {"saved", "editing"},
    "saved": {"editing", "saved"},
}

_SECTION_ATTRS: dict[str, str] = {
    "workExperience": "work_experience",
    "education": "education",
    "projects": "projects",
    "certifications": "certifications",
    "awards": "awards",
    "publications": "publications",
    "volunteerExperience": "volunteer_experience",
    "languages": "languages",
    "memberships": "memberships",
}


class ProfileForm:
    """Editable master profile with a coarse upload/parse/edit/save lifecycle.

    Section edits work on a copy of the profile and return a list of
    user-facing warnings; a rejected edit leaves the profile untouched.
    """

    def __init__(self, profile: Profile | None = None, state: FormState = "uploading"):
        self.profile = profile.model_copy(deep=True) if profile is not None else blank_profile()
        self.state: FormState = state

    @classmethod
    def editing(cls, profile: Profile) -> "ProfileForm":
        return cls(profile, state="editing")

    def _move(self, target: FormState) -> None:
        if target not in _TRANSITIONS[self.state]:
            raise FormStateError(f"Cannot move profile form from '{self.state}' to '{target}'.")
        self.state = target

    # lifecycle

    def begin_parsing(self) -> None:
        self._move("parsing")

    def load_parsed(self, profile: Profile) -> None:
        self._move("editing")
        self.profile = profile.model_copy(deep=True)

    def parse_failed(self) -> None:
        self._move("uploading")

    def start_blank(self) -> None:
        self._move("editing")

    def save(self, store: "ProfileStore", user_id: str) -> Profile:
        if "saved" not in _TRANSITIONS[self.state]:
            raise FormStateError(f"Cannot save profile form while '{self.state}'.")
        self.profile = store.save_profile(user_id, self.profile)
        self.state = "saved"
        logger.info("profile_form_saved user_id=%s", user_id)
        return self.profile

    def _touch(self) -> None:
        if self.state == "saved":
            self.state = "editing"
        elif self.state != "editing":
            raise FormStateError(f"Profile form is not editable while '{self.state}'.")

    # sections

    def _entries(self, section: str) -> list[Any]:
        if section not in SECTION_MODELS:
            raise ValidationError(f"Unknown profile section '{section}'.")
        return getattr(self.profile, _SECTION_ATTRS[section])

    def _entry_index(self, entries: list[Any], index: int) -> int:
        if index < 0 or index >= len(entries):
            raise ValidationError(f"No entry at index {index}.")
        return index

    def _build_entry(self, section: str, data: dict[str, Any]) -> CamelModel:
        model_cls = SECTION_MODELS[section]
        try:
            return model_cls.model_validate(data)
        except PydanticValidationError as exc:
            raise ValidationError(f"Invalid {section} entry: {exc.error_count()} field error(s).") from exc

    def add_entry(self, section: str, data: dict[str, Any] | None = None) -> list[str]:
        entries = self._entries(section)
        self._touch()
        if data:
            entry = self._build_entry(section, data)
        elif section == "workExperience":
            entry = empty_work_experience()
        else:
            entry = SECTION_MODELS[section]()
        entries.append(entry)
        return []

    def update_entry(self, section: str, index: int, fields: dict[str, Any]) -> list[str]:
        entries = self._entries(section)
        position = self._entry_index(entries, index)
        self._touch()
        current = entries[position].to_wire()
        entries[position] = self._build_entry(section, {**current, **fields})
        return []

    def remove_entry(self, section: str, index: int) -> list[str]:
        entries = self._entries(section)
        position = self._entry_index(entries, index)
        if section in MANDATORY_SECTIONS and len(entries) == 1:
            return [MANDATORY_SECTIONS[section]]
        self._touch()
        del entries[position]
        return []

    # achievements

    def _work(self, exp_index: int) -> WorkExperience:
        entries = self.profile.work_experience
        return entries[self._entry_index(entries, exp_index)]

    def add_achievement(self, exp_index: int, text: str = "") -> list[str]:
        exp = self._work(exp_index)
        self._touch()
        exp.achievements.append(text)
        return []

    def update_achievement(self, exp_index: int, ach_index: int, text: str) -> list[str]:
        exp = self._work(exp_index)
        position = self._entry_index(exp.achievements, ach_index)
        self._touch()
        exp.achievements[position] = text
        return []

    def remove_achievement(self, exp_index: int, ach_index: int) -> list[str]:
        exp = self._work(exp_index)
        position = self._entry_index(exp.achievements, ach_index)
        self._touch()
        del exp.achievements[position]
        return []

    # scalar fields

    def update_personal_info(self, fields: dict[str, Any]) -> list[str]:
        self._touch()
        current = self.profile.personal_info.to_wire()
        self.profile.personal_info = self._validate(PersonalInfo, {**current, **fields})
        return []

    def update_address(self, fields: dict[str, Any]) -> list[str]:
        self._touch()
        current = self.profile.personal_info.address.to_wire()
        self.profile.personal_info.address = self._validate(Address, {**current, **fields})
        return []

    def update_online_presence(self, fields: dict[str, Any]) -> list[str]:
        self._touch()
        current = self.profile.online_presence.to_wire()
        self.profile.online_presence = self._validate(OnlinePresence, {**current, **fields})
        return []

    def set_summary(self, text: str) -> list[str]:
        self._touch()
        self.profile.professional_summary = text or ""
        return []

    def set_skills(self, kind: str, raw: str) -> list[str]:
        if kind not in SKILL_KINDS:
            raise ValidationError(f"Unknown skill type '{kind}'.")
        self._touch()
        setattr(self.profile.skills, kind, split_comma_list(raw))
        return []

    def set_project_technologies(self, index: int, raw: str) -> list[str]:
        return self.update_entry("projects", index, {"technologies": split_comma_list(raw)})

    @staticmethod
    def _validate(model_cls: type[CamelModel], data: dict[str, Any]) -> Any:
        try:
            return model_cls.model_validate(data)
        except PydanticValidationError as exc:
            raise ValidationError(f"Invalid {model_cls.__name__} fields: {exc.error_count()} error(s).") from exc

    def review(self) -> list[str]:
        """Non-blocking hints shown next to the form before saving."""
        warnings: list[str] = []
        for i, exp in enumerate(self.profile.work_experience, start=1):
            label = exp.position.strip() or exp.company.strip() or f"Work experience #{i}"
            if not exp.current and exp.start_date.strip() and not exp.end_date.strip():
                warnings.append(f"{label}: add an end date or mark the role as current.")
            if not any(ach.strip() for ach in exp.achievements):
                warnings.append(f"{label}: add at least one achievement.")
        return warnings
