"""Pydantic model for Activity Log entries."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from apiassist.models.enums import ActivityKind


class ActivityEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    kind: ActivityKind
    timestamp: datetime
    summary: str
    detail: str = ""

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match over summary and detail."""
        q = query.lower()
        return q in self.summary.lower() or q in self.detail.lower()
