from typing import Any, Callable

from fastapi import APIRouter, Body, Depends, Request
from starlette.concurrency import run_in_threadpool

from resume_tailor.ai.gateway import LLMGateway
from resume_tailor.api.deps import get_gateway, get_profile_store, get_settings
from resume_tailor.core.config import Settings
from resume_tailor.core.errors import ProfileNotFound, ResumeTailorError
from resume_tailor.core.rate_limit import rate_limit
from resume_tailor.editor.profile_form import ProfileForm
from resume_tailor.schemas.migration import upgrade_profile
from resume_tailor.schemas.profile import Profile
from resume_tailor.schemas.requests import ProfileFormResponse, ProfileImportRequest, SkillsUpdateRequest
from resume_tailor.services.parse_service import parse_resume_text
from resume_tailor.store.profile_store import ProfileStore

router = APIRouter()


def _load_form(store: ProfileStore, user_id: str) -> ProfileForm:
    profile = store.get_profile(user_id)
    if profile is None:
        raise ProfileNotFound("Profile not found")
    return ProfileForm.editing(profile)


def _edit(store: ProfileStore, user_id: str, change: Callable[[ProfileForm], list[str]]) -> ProfileFormResponse:
    form = _load_form(store, user_id)
    warnings = change(form)
    if not warnings:
        form.save(store, user_id)
        warnings = form.review()
    return ProfileFormResponse(profile=form.profile, state=form.state, warnings=warnings)


@router.get("/profile/{user_id}", response_model=Profile)
def get_profile(user_id: str, store: ProfileStore = Depends(get_profile_store)):
    profile = store.get_profile(user_id)
    if profile is None:
        raise ProfileNotFound("Profile not found")
    return profile


@router.get("/profile/{user_id}/cached", response_model=Profile)
def get_cached_profile(user_id: str, store: ProfileStore = Depends(get_profile_store)):
    profile = store.get_cached_profile(user_id)
    if profile is None:
        raise ProfileNotFound("Profile not found")
    return profile


@router.put("/profile/{user_id}", response_model=ProfileFormResponse)
def save_profile(
    user_id: str,
    document: dict[str, Any] = Body(...),
    store: ProfileStore = Depends(get_profile_store),
):
    form = ProfileForm.editing(upgrade_profile(document))
    form.save(store, user_id)
    return ProfileFormResponse(profile=form.profile, state=form.state, warnings=form.review())


@router.delete("/profile/{user_id}")
def delete_profile(user_id: str, store: ProfileStore = Depends(get_profile_store)):
    if not store.delete_profile(user_id):
        raise ProfileNotFound("Profile not found")
    return {"status": "deleted"}


@router.post("/profile/{user_id}/import", response_model=ProfileFormResponse)
@rate_limit()
async def import_profile(
    request: Request,
    user_id: str,
    payload: ProfileImportRequest,
    gateway: LLMGateway = Depends(get_gateway),
    store: ProfileStore = Depends(get_profile_store),
    settings: Settings = Depends(get_settings),
):
    _ = request
    form = ProfileForm()
    form.begin_parsing()
    try:
        parsed = await run_in_threadpool(
            parse_resume_text,
            gateway,
            payload.resume_text,
            min_chars=settings.min_resume_text_chars,
        )
    except ResumeTailorError:
        form.parse_failed()
        raise
    form.load_parsed(parsed)
    if payload.save:
        await run_in_threadpool(form.save, store, user_id)
    return ProfileFormResponse(profile=form.profile, state=form.state, warnings=form.review())


@router.patch("/profile/{user_id}/personal-info", response_model=ProfileFormResponse)
def update_personal_info(
    user_id: str,
    fields: dict[str, Any] = Body(...),
    store: ProfileStore = Depends(get_profile_store),
):
    return _edit(store, user_id, lambda form: form.update_personal_info(fields))


@router.patch("/profile/{user_id}/address", response_model=ProfileFormResponse)
def update_address(
    user_id: str,
    fields: dict[str, Any] = Body(...),
    store: ProfileStore = Depends(get_profile_store),
):
    return _edit(store, user_id, lambda form: form.update_address(fields))


@router.patch("/profile/{user_id}/online-presence", response_model=ProfileFormResponse)
def update_online_presence(
    user_id: str,
    fields: dict[str, Any] = Body(...),
    store: ProfileStore = Depends(get_profile_store),
):
    return _edit(store, user_id, lambda form: form.update_online_presence(fields))


@router.put("/profile/{user_id}/skills/{kind}", response_model=ProfileFormResponse)
def update_skills(
    user_id: str,
    kind: str,
    payload: SkillsUpdateRequest,
    store: ProfileStore = Depends(get_profile_store),
):
    return _edit(store, user_id, lambda form: form.set_skills(kind, payload.value))


@router.post("/profile/{user_id}/sections/{section}", response_model=ProfileFormResponse)
def add_section_entry(
    user_id: str,
    section: str,
    entry: dict[str, Any] | None = Body(default=None),
    store: ProfileStore = Depends(get_profile_store),
):
    return _edit(store, user_id, lambda form: form.add_entry(section, entry))


@router.patch("/profile/{user_id}/sections/{section}/{index}", response_model=ProfileFormResponse)
def update_section_entry(
    user_id: str,
    section: str,
    index: int,
    fields: dict[str, Any] = Body(...),
    store: ProfileStore = Depends(get_profile_store),
):
    return _edit(store, user_id, lambda form: form.update_entry(section, index, fields))


@router.delete("/profile/{user_id}/sections/{section}/{index}", response_model=ProfileFormResponse)
def remove_section_entry(
    user_id: str,
    section: str,
    index: int,
    store: ProfileStore = Depends(get_profile_store),
):
    return _edit(store, user_id, lambda form: form.remove_entry(section, index))


@router.post("/profile/{user_id}/experience/{exp_index}/achievements", response_model=ProfileFormResponse)
def add_achievement(
    user_id: str,
    exp_index: int,
    text: str = Body(default="", embed=True),
    store: ProfileStore = Depends(get_profile_store),
):
    return _edit(store, user_id, lambda form: form.add_achievement(exp_index, text))


@router.put("/profile/{user_id}/experience/{exp_index}/achievements/{ach_index}", response_model=ProfileFormResponse)
def update_achievement(
    user_id: str,
    exp_index: int,
    ach_index: int,
    text: str = Body(..., embed=True),
    store: ProfileStore = Depends(get_profile_store),
):
    return _edit(store, user_id, lambda form: form.update_achievement(exp_index, ach_index, text))


@router.delete("/profile/{user_id}/experience/{exp_index}/achievements/{ach_index}", response_model=ProfileFormResponse)
def remove_achievement(
    user_id: str,
    exp_index: int,
    ach_index: int,
    store: ProfileStore = Depends(get_profile_store),
):
    return _edit(store, user_id, lambda form: form.remove_achievement(exp_index, ach_index))


@router.put("/profile/{user_id}/summary", response_model=ProfileFormResponse)
def update_summary(
    user_id: str,
    text: str = Body(..., embed=True),
    store: ProfileStore = Depends(get_profile_store),
):
    return _edit(store, user_id, lambda form: form.set_summary(text))


@router.put("/profile/{user_id}/projects/{index}/technologies", response_model=ProfileFormResponse)
def update_project_technologies(
    user_id: str,
    index: int,
    payload: SkillsUpdateRequest,
    store: ProfileStore = Depends(get_profile_store),
):
    return _edit(store, user_id, lambda form: form.set_project_technologies(index, payload.value))
