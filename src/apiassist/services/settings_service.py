"""User settings: loaded once at startup, persisted whole on every change."""

from __future__ import annotations

import logging

from pydantic import ValidationError as PydanticValidationError

from apiassist.errors.exceptions import PersistenceError, ValidationError
from apiassist.models.status import StatusMessage
from apiassist.models.user_settings import UserSettings
from apiassist.services.state_store import SETTINGS_KEY, StateStore
from apiassist.services.status_notifier import StatusNotifier

logger = logging.getLogger(__name__)


class SettingsService:
    def __init__(self, store: StateStore, notifier: StatusNotifier, current: UserSettings | None = None):
        self._store = store
        self._notifier = notifier
        self._current = current or UserSettings()

    @classmethod
    async def load(cls, store: StateStore, notifier: StatusNotifier) -> SettingsService:
        raw = await store.read(SETTINGS_KEY)
        return cls(store, notifier, UserSettings.from_stored(raw))

    @property
    def current(self) -> UserSettings:
        return self._current

    async def update(self, **changes) -> UserSettings:
        """Apply field changes and persist the whole structure.

        Raises:
            ValidationError: if any change is invalid; nothing is applied.
        """
        try:
            updated = UserSettings.model_validate({**self._current.model_dump(), **changes})
        except PydanticValidationError as exc:
            raise ValidationError("Invalid settings", details=exc.errors(include_url=False, include_context=False)) from exc
        self._current = updated
        try:
            await self._write()
        except PersistenceError:
            logger.warning("Settings changed in memory only; persistence failed")
        return updated

    async def toggle_language(self, language: str) -> UserSettings:
        languages = set(self._current.preferred_languages)
        languages.symmetric_difference_update({language})
        return await self.update(preferred_languages=languages)

    async def save(self) -> StatusMessage:
        """Explicit save; the outcome is reported as a status message."""
        try:
            await self._write()
        except PersistenceError:
            return self._notifier.error("Save Failed", "Could not save settings.")
        return self._notifier.success("Settings Saved", "Your preferences have been saved.")

    async def _write(self) -> None:
        await self._store.write(SETTINGS_KEY, self._current.model_dump(mode="json"))
