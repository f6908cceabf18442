"""Transient, auto-expiring user notifications.

Each message schedules its own removal on the running event loop when it is
enqueued. Expiry is also checked on every read, so a message never outlives
its deadline even when no loop was available to run the timer.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import time
from collections.abc import Callable

from apiassist.models.enums import StatusKind
from apiassist.models.status import StatusMessage

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 5.0


class StatusNotifier:
    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._counter = itertools.count(1)
        self._messages: dict[str, StatusMessage] = {}
        self._timers: dict[str, asyncio.TimerHandle] = {}

    def enqueue(self, kind: StatusKind, title: str, message: str) -> StatusMessage:
        status = StatusMessage(
            id=f"status-{next(self._counter)}",
            kind=kind,
            title=title,
            message=message,
            expires_at=self._clock() + self.ttl_seconds,
        )
        self._messages[status.id] = status
        self._schedule_removal(status.id)

        log = logger.warning if kind == StatusKind.ERROR else logger.info
        log("Status %s [%s] %s: %s", status.id, kind, title, message)
        return status

    def success(self, title: str, message: str) -> StatusMessage:
        return self.enqueue(StatusKind.SUCCESS, title, message)

    def error(self, title: str, message: str) -> StatusMessage:
        return self.enqueue(StatusKind.ERROR, title, message)

    def info(self, title: str, message: str) -> StatusMessage:
        return self.enqueue(StatusKind.INFO, title, message)

    def dismiss(self, status_id: str) -> bool:
        """Remove a message. Returns False if it was already gone."""
        timer = self._timers.pop(status_id, None)
        if timer is not None:
            timer.cancel()
        return self._messages.pop(status_id, None) is not None

    def visible(self) -> list[StatusMessage]:
        """Messages still on screen, in insertion order."""
        now = self._clock()
        for status_id in [m.id for m in self._messages.values() if m.expires_at <= now]:
            self.dismiss(status_id)
        return list(self._messages.values())

    def _schedule_removal(self, status_id: str) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._timers[status_id] = loop.call_later(self.ttl_seconds, self.dismiss, status_id)
