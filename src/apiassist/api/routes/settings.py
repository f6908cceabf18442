"""User settings routes."""

from fastapi import APIRouter
from pydantic import BaseModel

from apiassist.dependencies import UserSettingsService
from apiassist.models.enums import CodeStyle, DocFormat

router = APIRouter(prefix="/settings", tags=["Settings"])


class SettingsUpdate(BaseModel):
    default_repo: str | None = None
    default_branch: str | None = None
    preferred_languages: list[str] | None = None
    code_style: CodeStyle | None = None
    doc_format: DocFormat | None = None
    alert_severity_threshold: str | None = None


@router.get("")
async def get_settings(settings_service: UserSettingsService) -> dict:
    return settings_service.current.model_dump(mode="json")


@router.patch("")
async def update_settings(body: SettingsUpdate, settings_service: UserSettingsService) -> dict:
    updated = await settings_service.update(**body.model_dump(exclude_none=True))
    return updated.model_dump(mode="json")


@router.post("/save")
async def save_settings(settings_service: UserSettingsService) -> dict:
    status = await settings_service.save()
    return {
        "settings": settings_service.current.model_dump(mode="json"),
        "status": status.model_dump(mode="json"),
    }


@router.post("/languages/{language}/toggle")
async def toggle_language(language: str, settings_service: UserSettingsService) -> dict:
    updated = await settings_service.toggle_language(language)
    return updated.model_dump(mode="json")
