"""
Application context.

``CampCheckApp`` owns the record store for a session: it builds the store
from the configuration, runs the one-time ``init`` step and hands out the
repository bundle. A store that cannot be opened is fatal for the session
and surfaces as ``StoreInitializationError`` from ``open``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from campcheck.backup import (
    ImportSummary,
    clear_all_data,
    export_backup_file,
    import_backup,
    import_backup_file,
)
from campcheck.core.config import Settings, get_settings
from campcheck.core.database import RecordStore
from campcheck.core.database.repositories import RepoBundle, build_repos
from campcheck.core.logging_config import setup_logging
from campcheck.core.models.enums import ImportMode

logger = logging.getLogger(__name__)


class CampCheckApp:
    """One open CampCheck data set."""

    def __init__(self, store: RecordStore, settings: Optional[Settings] = None) -> None:
        self.store = store
        self.settings = settings or get_settings()
        self.repos: RepoBundle = build_repos(store)

    @classmethod
    async def open(cls, settings: Optional[Settings] = None, configure_logging: bool = True) -> "CampCheckApp":
        """Create the store from ``settings`` and initialise it.

        Args:
            settings: Configuration; defaults to the environment-derived settings
            configure_logging: Also run ``setup_logging`` with the configured values

        Raises:
            StoreInitializationError: The database could not be opened
        """
        settings = settings or get_settings()
        if configure_logging:
            setup_logging(
                log_level=settings.log_level,
                log_format=settings.log_format,
                enable_file=settings.enable_file_logging,
                log_file_dir=settings.log_file_dir,
            )
        app = cls(RecordStore.from_url(settings.database_url), settings)
        await app.store.init()
        logger.info("CampCheck data set opened")
        return app

    async def close(self) -> None:
        await self.store.close()

    async def __aenter__(self) -> "CampCheckApp":
        await self.store.init()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # Settings screen actions

    async def export_to_file(self, directory: Union[str, Path, None] = None) -> Path:
        return await export_backup_file(self.repos, directory or self.settings.backup_dir)

    async def import_from_file(self, path: Union[str, Path], mode: Union[ImportMode, str] = ImportMode.replace) -> ImportSummary:
        return await import_backup_file(self.repos, path, mode)

    async def import_from_text(self, text: str, mode: Union[ImportMode, str] = ImportMode.replace) -> ImportSummary:
        """Import backup text pasted from the clipboard."""
        return await import_backup(self.repos, text, mode)

    async def clear_all_data(self) -> None:
        await clear_all_data(self.repos)
