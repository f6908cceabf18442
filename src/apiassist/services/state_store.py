"""Durable whole-document storage for the activity log and user settings."""

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from apiassist.errors.exceptions import PersistenceError
from apiassist.repositories.state_record_repo import StateRecordRepository

logger = logging.getLogger(__name__)

ACTIVITY_LOG_KEY = "activity_log"
SETTINGS_KEY = "settings"


class StateStore:
    """Reads and rewrites named JSON documents.

    Reads never fail: any storage error is logged and reported as an absent
    record. Writes raise ``PersistenceError`` so callers can decide whether a
    failure is worth surfacing.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def read(self, key: str) -> Any | None:
        try:
            async with self._session_factory() as session:
                row = await StateRecordRepository(session).get(key)
                return row.value if row is not None else None
        except (SQLAlchemyError, ValueError) as exc:
            logger.warning("Could not read state record %s: %s", key, exc)
            return None

    async def write(self, key: str, value: Any) -> None:
        try:
            async with self._session_factory() as session:
                await StateRecordRepository(session).put(key, value)
                await session.commit()
        except (SQLAlchemyError, TypeError, ValueError) as exc:
            logger.error("Could not write state record %s: %s", key, exc)
            raise PersistenceError(f"Could not save {key}") from exc
