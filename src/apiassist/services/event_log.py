"""Append-only, persisted activity log.

Entries are kept newest first. Every mutation rewrites the whole log through
the StateStore; a failed write is logged and the in-memory log stays
authoritative for the rest of the process.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from pydantic import ValidationError

from apiassist.errors.exceptions import PersistenceError
from apiassist.models.activity import ActivityEntry
from apiassist.models.enums import ActivityKind
from apiassist.services.id_generator import generate_id
from apiassist.services.state_store import ACTIVITY_LOG_KEY, StateStore

logger = logging.getLogger(__name__)

ALL_KINDS = "all"


class EventLog:
    def __init__(self, store: StateStore, entries: list[ActivityEntry] | None = None):
        self._store = store
        self._entries: list[ActivityEntry] = list(entries or [])

    @classmethod
    async def load(cls, store: StateStore) -> EventLog:
        """Read the persisted log once; missing or corrupt data yields an empty log."""
        raw = await store.read(ACTIVITY_LOG_KEY)
        if raw is None:
            return cls(store)
        if not isinstance(raw, list):
            logger.warning("Ignoring stored activity log of type %s", type(raw).__name__)
            return cls(store)

        entries: list[ActivityEntry] = []
        for item in raw:
            try:
                entries.append(ActivityEntry.model_validate(item))
            except ValidationError:
                logger.warning("Skipping unreadable activity entry")
        return cls(store, entries)

    def __len__(self) -> int:
        return len(self._entries)

    async def append(self, kind: ActivityKind, summary: str, detail: str = "") -> ActivityEntry:
        entry = ActivityEntry(
            id=generate_id("act_"),
            kind=kind,
            timestamp=datetime.now(timezone.utc),
            summary=summary,
            detail=detail,
        )
        self._entries.insert(0, entry)
        logger.info("Activity recorded: %s (%s)", entry.kind, entry.id)
        await self._persist()
        return entry

    def entries(self, kind: str | ActivityKind = ALL_KINDS, search: str = "") -> list[ActivityEntry]:
        """Filtered view of the log, newest first. Never mutates the log."""
        selected = [e for e in self._entries if kind == ALL_KINDS or e.kind == kind]
        if search.strip():
            selected = [e for e in selected if e.matches(search)]
        return selected

    async def clear(self) -> int:
        removed = len(self._entries)
        self._entries = []
        logger.info("Activity log cleared (%d entries)", removed)
        await self._persist()
        return removed

    async def _persist(self) -> None:
        payload = [entry.model_dump(mode="json") for entry in self._entries]
        try:
            await self._store.write(ACTIVITY_LOG_KEY, payload)
        except PersistenceError:
            logger.warning("Activity log kept in memory only; persistence failed")
