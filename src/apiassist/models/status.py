"""Pydantic model for transient status messages."""

from pydantic import BaseModel, ConfigDict, Field

from apiassist.models.enums import StatusKind


class StatusMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    kind: StatusKind
    title: str
    message: str
    expires_at: float = Field(exclude=True)
