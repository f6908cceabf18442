"""State record repository."""

from typing import Any

from apiassist.db.models.state_record import StateRecordRow
from apiassist.repositories.base import KeyedRepository


class StateRecordRepository(KeyedRepository[StateRecordRow]):
    model_class = StateRecordRow
    key_field = "key"

    async def put(self, key: str, value: Any) -> StateRecordRow:
        """Replace the whole document stored under ``key``."""
        return await self.upsert(key, value=value)
