from __future__ import annotations

import logging

from resume_tailor.ai.gateway import LLMGateway
from resume_tailor.core.errors import ValidationError
from resume_tailor.prompts.resume import build_resume_prompt
from resume_tailor.schemas.generation import GenerationResult
from resume_tailor.schemas.migration import upgrade_profile
from resume_tailor.schemas.profile import Profile
from resume_tailor.schemas.requests import GenerateResumeRequest
from resume_tailor.store.profile_store import ProfileStore

logger = logging.getLogger(__name__)


def resolve_profile(payload: GenerateResumeRequest, store: ProfileStore) -> Profile:
    if not payload.job_description.strip():
        raise ValidationError("Missing required fields")

    if payload.user_profile:
        return upgrade_profile(payload.user_profile)

    if payload.user_id.strip():
        profile = store.get_profile(payload.user_id.strip())
        if profile is None:
            raise ValidationError("Please set up your profile first")
        return profile

    raise ValidationError("Missing required fields")


def consistency_warnings(result: GenerationResult, profile: Profile) -> list[str]:
    warnings: list[str] = []
    provided = len(profile.work_experience)
    returned = len(result.resume.experience)
    if returned > provided:
        warnings.append(f"resume lists {returned} roles but the profile has {provided}")
    return warnings


def generate_resume(gateway: LLMGateway, job_description: str, profile: Profile) -> GenerationResult:
    prompt = build_resume_prompt(job_description, profile)
    result = gateway.complete_json(prompt, GenerationResult, tool="generate-resume")
    for warning in consistency_warnings(result, profile):
        logger.warning("generation_inconsistent model=%s: %s", gateway.model, warning)
    return result
