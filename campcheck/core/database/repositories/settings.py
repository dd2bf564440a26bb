"""
Settings repository.

Settings are a single record stored under ``SETTINGS_ID``.
"""

from __future__ import annotations

from ..entities.settings import SETTINGS_ID, AppSettings
from ..store import Collection, RecordStore


class SettingsRepository:
    """Reads and writes the singleton settings record."""

    collection = Collection.settings

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    async def get(self) -> AppSettings:
        """Return the stored settings, or the defaults if none were saved yet."""
        settings = await self.store.get_by_id(self.collection, SETTINGS_ID)
        return settings if settings is not None else AppSettings()

    async def update(self, settings: AppSettings) -> None:
        """Save ``settings`` as the singleton, whatever identifier it carries."""
        existing = await self.store.get_by_id(self.collection, SETTINGS_ID)
        await self.store.update(
            self.collection,
            AppSettings(
                id=SETTINGS_ID,
                dark_mode=settings.dark_mode,
                notifications=settings.notifications,
                created_at=existing.created_at if existing is not None else None,
            ),
        )
