"""Activity log routes."""

from fastapi import APIRouter, Query

from apiassist.dependencies import ActivityLog, Notifier
from apiassist.errors.exceptions import ValidationError
from apiassist.models.enums import ActivityKind
from apiassist.services.event_log import ALL_KINDS

router = APIRouter(prefix="/activity", tags=["Activity"])

_KINDS = {ALL_KINDS, *(k.value for k in ActivityKind)}


@router.get("")
async def list_activity(
    event_log: ActivityLog,
    kind: str = Query(ALL_KINDS),
    search: str = Query(""),
) -> dict:
    if kind not in _KINDS:
        raise ValidationError(f"Unknown activity kind '{kind}'", details={"allowed": sorted(_KINDS)})
    entries = event_log.entries(kind=kind, search=search)
    return {
        "total": len(event_log),
        "count": len(entries),
        "entries": [e.model_dump(mode="json") for e in entries],
    }


@router.delete("")
async def clear_activity(event_log: ActivityLog, notifier: Notifier) -> dict:
    removed = await event_log.clear()
    status = notifier.info("Cleared", "Activity log cleared.")
    return {"removed": removed, "status": status.model_dump(mode="json")}
