"""Transient status message routes."""

from fastapi import APIRouter

from apiassist.dependencies import Notifier

router = APIRouter(prefix="/status", tags=["Status"])


@router.get("")
async def list_status(notifier: Notifier) -> list[dict]:
    return [m.model_dump(mode="json") for m in notifier.visible()]


@router.delete("/{status_id}")
async def dismiss_status(status_id: str, notifier: Notifier) -> dict:
    """Dismiss a message; dismissing one that is already gone is not an error."""
    return {"status_id": status_id, "dismissed": notifier.dismiss(status_id)}
