"""Unit tests for the backup document schemas."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from campcheck.backup.schemas import (
    BACKUP_VERSION,
    BackupDocument,
    ChecklistItemRecord,
    EquipmentRecord,
    SettingsRecord,
)
from campcheck.core.models.enums import EquipmentStatus


class TestEquipmentRecord:
    def test_reads_camel_case_keys(self):
        record = EquipmentRecord.model_validate(
            {
                "id": 3,
                "type": "Lantern",
                "name": "LED lantern",
                "quantity": 2,
                "category": "Lighting",
                "isConsumable": False,
                "status": "needs-replacement",
                "createdAt": "2024-11-18T09:30:00.000Z",
            }
        )

        assert record.id == 3
        assert record.is_consumable is False
        assert record.status is EquipmentStatus.needs_replacement
        assert record.created_at == datetime(2024, 11, 18, 9, 30, tzinfo=timezone.utc)

    def test_legacy_status_codes(self):
        record = EquipmentRecord.model_validate({"name": "Stove", "quantity": 1, "category": "Cookware", "status": "red"})

        assert record.status is EquipmentStatus.needs_purchase

    def test_rejects_zero_quantity(self):
        with pytest.raises(ValidationError):
            EquipmentRecord.model_validate({"name": "Stove", "quantity": 0, "category": "Cookware"})


class TestBackupDocument:
    def test_dumps_camel_case(self):
        document = BackupDocument(
            export_date=datetime(2024, 11, 18, tzinfo=timezone.utc),
            checklist_items=[ChecklistItemRecord(id=1, checklist_id=2, equipment_id=3, quantity=1, is_checked=True)],
            settings=SettingsRecord(dark_mode=True),
        )

        data = json.loads(document.model_dump_json(by_alias=True))

        assert data["version"] == BACKUP_VERSION
        assert data["exportDate"].startswith("2024-11-18T00:00:00")
        assert data["checklistItems"][0]["checklistId"] == 2
        assert data["checklistItems"][0]["isChecked"] is True
        assert data["settings"] == {"darkMode": True, "notifications": True}
        assert data["equipment"] == []
