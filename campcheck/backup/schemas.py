"""
Backup document schemas.

Pydantic models for the JSON backup format. Keys are camelCase on the wire
(``isConsumable``, ``checklistItems``) and snake_case in Python. Records keep
their original ``id`` so that the importer can translate references.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from campcheck.core.models.enums import EquipmentStatus

BACKUP_VERSION = "1.0.0"


class BackupModel(BaseModel):
    """Common configuration for every backup schema."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class BackupRecord(BackupModel):
    """Identifier and timestamps carried by every exported record."""

    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class EquipmentRecord(BackupRecord):
    type: str = ""
    name: str
    quantity: int = Field(ge=1)
    category: str
    is_consumable: bool = False
    status: EquipmentStatus = EquipmentStatus.normal
    memo: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def _accept_legacy_status(cls, value):
        return EquipmentStatus.from_value(value)


class ModuleRecord(BackupRecord):
    name: str
    sort_order: int = 0


class ChecklistRecord(BackupRecord):
    name: str
    start_date: str
    end_date: str


class ChecklistItemRecord(BackupRecord):
    checklist_id: int
    equipment_id: int
    quantity: int = 1
    is_checked: bool = False


class SettingsRecord(BackupModel):
    dark_mode: bool = False
    notifications: bool = True


class BackupDocument(BackupModel):
    """The full export: format version, export time and every collection."""

    version: str = BACKUP_VERSION
    export_date: datetime
    equipment: List[EquipmentRecord] = Field(default_factory=list)
    modules: List[ModuleRecord] = Field(default_factory=list)
    checklists: List[ChecklistRecord] = Field(default_factory=list)
    checklist_items: List[ChecklistItemRecord] = Field(default_factory=list)
    settings: SettingsRecord = Field(default_factory=SettingsRecord)
