"""
Application settings entity.

There is exactly one settings row, always stored under ``SETTINGS_ID``.
"""

from __future__ import annotations

from typing import Optional

from sqlmodel import Field

from ..base import TimestampedRecord

SETTINGS_ID = 1


class AppSettings(TimestampedRecord, table=True):
    """Singleton user preferences.

    Table: settings
    """

    __tablename__ = "settings"

    id: Optional[int] = Field(default=SETTINGS_ID, primary_key=True, sa_column_kwargs={"autoincrement": False})
    dark_mode: bool = Field(default=False)
    notifications: bool = Field(default=True)

    def __repr__(self) -> str:
        return f"AppSettings(dark_mode={self.dark_mode}, notifications={self.notifications})"
