"""
Export and import of the full data set.

Export collects every collection through the repositories into a
``BackupDocument``. Import re-inserts the records through the repositories
in dependency order, letting the store assign fresh identifiers:

1. equipment (identifiers are not translated)
2. modules (old id -> new id recorded)
3. checklists (old id -> new id recorded)
4. checklist items, re-pointed through the checklist translation; items
   whose checklist did not come across are dropped
5. settings

Backups carry no module-equipment links, so module contents are not
restored. A failed import is not rolled back; whatever was written before
the failure stays.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from campcheck.core.config import get_settings
from campcheck.core.database.entities import AppSettings, Checklist, ChecklistItem, Equipment, Module
from campcheck.core.database.repositories import RepoBundle
from campcheck.core.errors import BackupExportError, BackupFormatError, BackupImportError
from campcheck.core.models.enums import ImportMode

from .schemas import (
    BACKUP_VERSION,
    BackupDocument,
    ChecklistItemRecord,
    ChecklistRecord,
    EquipmentRecord,
    ModuleRecord,
    SettingsRecord,
)

logger = logging.getLogger(__name__)

BACKUP_FILE_PREFIX = "campcheck-backup"


class IdTranslation:
    """Old-identifier to new-identifier table for one import run."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._mapping: Dict[int, int] = {}

    def record(self, old_id: Optional[int], new_id: int) -> None:
        if old_id is not None:
            self._mapping[old_id] = new_id

    def get(self, old_id: int) -> Optional[int]:
        return self._mapping.get(old_id)

    def as_dict(self) -> Dict[int, int]:
        return dict(self._mapping)

    def __len__(self) -> int:
        return len(self._mapping)


@dataclass
class ImportSummary:
    """Counts of what an import wrote."""

    mode: ImportMode
    equipment: int = 0
    modules: int = 0
    checklists: int = 0
    checklist_items: int = 0
    dropped_checklist_items: int = 0
    settings_applied: bool = False
    module_ids: Dict[int, int] = field(default_factory=dict)
    checklist_ids: Dict[int, int] = field(default_factory=dict)


# ----------------------------------------------------------------------
# Export
# ----------------------------------------------------------------------


async def _collect(repos: RepoBundle) -> BackupDocument:
    equipment, modules, checklists, settings = await asyncio.gather(
        repos.equipment.list(),
        repos.modules.list(),
        repos.checklists.list(),
        repos.settings.get(),
    )

    checklist_items = []
    for checklist in checklists:
        checklist_items.extend(await repos.checklist_items.list_for_checklist(checklist.id))

    return BackupDocument(
        version=BACKUP_VERSION,
        export_date=datetime.now(timezone.utc),
        equipment=[EquipmentRecord.model_validate(item.model_dump()) for item in equipment],
        modules=[ModuleRecord.model_validate(module.model_dump()) for module in modules],
        checklists=[ChecklistRecord.model_validate(checklist.model_dump()) for checklist in checklists],
        checklist_items=[ChecklistItemRecord.model_validate(item.model_dump()) for item in checklist_items],
        settings=SettingsRecord.model_validate(settings.model_dump()),
    )


async def export_backup(repos: RepoBundle) -> BackupDocument:
    """Collect every collection into a backup document.

    Raises:
        BackupExportError: Anything went wrong; the cause is chained
    """
    try:
        document = await _collect(repos)
    except Exception as exc:
        logger.exception("Export failed")
        raise BackupExportError() from exc
    logger.info(
        f"Exported {len(document.equipment)} equipment, {len(document.modules)} modules, "
        f"{len(document.checklists)} checklists, {len(document.checklist_items)} checklist items"
    )
    return document


def dump_backup(document: BackupDocument) -> str:
    """Serialize a backup document to pretty-printed JSON text."""
    return document.model_dump_json(by_alias=True, indent=2)


def backup_filename(day: Optional[date] = None) -> str:
    """File name for a backup taken on ``day`` (default: today, UTC)."""
    day = day or datetime.now(timezone.utc).date()
    return f"{BACKUP_FILE_PREFIX}-{day.isoformat()}.json"


async def export_backup_file(repos: RepoBundle, directory: Union[str, Path, None] = None) -> Path:
    """Export to ``<directory>/campcheck-backup-<YYYY-MM-DD>.json``.

    Args:
        repos: Repositories to export
        directory: Target directory; defaults to the configured backup directory

    Returns:
        Path of the written file
    """
    try:
        document = await _collect(repos)
        target_dir = Path(directory if directory is not None else get_settings().backup_dir)
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / backup_filename(document.export_date.date())
        await asyncio.to_thread(path.write_text, dump_backup(document), encoding="utf-8")
    except Exception as exc:
        logger.exception("Export failed")
        raise BackupExportError() from exc
    logger.info(f"Backup written to {path}")
    return path


# ----------------------------------------------------------------------
# Import
# ----------------------------------------------------------------------


def parse_backup(text: Union[str, bytes]) -> Dict[str, Any]:
    """Parse backup text and check that it looks like a backup.

    Only ``version`` and ``equipment`` are required; individual records are
    validated as they are imported.

    Raises:
        BackupFormatError: Not JSON, not an object, or required fields missing
    """
    try:
        payload = json.loads(text)
    except ValueError as exc:
        raise BackupFormatError(f"Backup is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise BackupFormatError("Backup must be a JSON object")
    if not payload.get("version") or payload.get("equipment") is None:
        raise BackupFormatError("Not a valid backup file: 'version' and 'equipment' are required")
    for key in ("equipment", "modules", "checklists", "checklistItems"):
        if payload.get(key) is not None and not isinstance(payload[key], list):
            raise BackupFormatError(f"Backup field '{key}' must be a list")
    return payload


async def clear_all_data(repos: RepoBundle) -> None:
    """Delete every checklist, module and piece of equipment.

    The repository cascades remove checklist items and module links.
    Settings are kept.
    """
    equipment, modules, checklists = await asyncio.gather(
        repos.equipment.list(),
        repos.modules.list(),
        repos.checklists.list(),
    )
    for checklist in checklists:
        await repos.checklists.delete(checklist.id)
    for module in modules:
        await repos.modules.delete(module.id)
    for item in equipment:
        await repos.equipment.delete(item.id)
    logger.info(
        f"Cleared {len(checklists)} checklists, {len(modules)} modules and {len(equipment)} equipment records"
    )


async def _restore(repos: RepoBundle, payload: Dict[str, Any], summary: ImportSummary) -> None:
    for raw in payload["equipment"]:
        record = EquipmentRecord.model_validate(raw)
        await repos.equipment.create(Equipment(**record.model_dump(exclude={"id"})))
        summary.equipment += 1

    module_ids = IdTranslation("modules")
    for raw in payload.get("modules") or []:
        record = ModuleRecord.model_validate(raw)
        new_id = await repos.modules.create(Module(**record.model_dump(exclude={"id"})))
        module_ids.record(record.id, new_id)
        summary.modules += 1

    checklist_ids = IdTranslation("checklists")
    for raw in payload.get("checklists") or []:
        record = ChecklistRecord.model_validate(raw)
        new_id = await repos.checklists.create(Checklist(**record.model_dump(exclude={"id"})))
        checklist_ids.record(record.id, new_id)
        summary.checklists += 1

    for raw in payload.get("checklistItems") or []:
        record = ChecklistItemRecord.model_validate(raw)
        new_checklist_id = checklist_ids.get(record.checklist_id)
        if new_checklist_id is None:
            logger.debug(f"Dropping checklist item {record.id}: checklist {record.checklist_id} was not imported")
            summary.dropped_checklist_items += 1
            continue
        data = record.model_dump(exclude={"id", "checklist_id"})
        await repos.checklist_items.create(ChecklistItem(checklist_id=new_checklist_id, **data))
        summary.checklist_items += 1

    if payload.get("settings"):
        record = SettingsRecord.model_validate(payload["settings"])
        await repos.settings.update(AppSettings(dark_mode=record.dark_mode, notifications=record.notifications))
        summary.settings_applied = True

    summary.module_ids = module_ids.as_dict()
    summary.checklist_ids = checklist_ids.as_dict()


async def import_backup(
    repos: RepoBundle,
    text: Union[str, bytes],
    mode: Union[ImportMode, str] = ImportMode.replace,
) -> ImportSummary:
    """Import backup text, e.g. file contents or text pasted from the clipboard.

    The document is checked before anything is deleted. In ``replace`` mode
    all equipment, modules and checklists are purged first; ``merge`` keeps
    them and adds the imported records.

    Raises:
        BackupImportError: Anything went wrong; the cause is chained.
            Records written before the failure are kept.
    """
    try:
        import_mode = ImportMode(mode)
        payload = parse_backup(text)
        if import_mode is ImportMode.replace:
            await clear_all_data(repos)
        summary = ImportSummary(mode=import_mode)
        await _restore(repos, payload, summary)
    except Exception as exc:
        logger.exception("Import failed")
        raise BackupImportError() from exc
    logger.info(
        f"Imported ({summary.mode.value}) {summary.equipment} equipment, {summary.modules} modules, "
        f"{summary.checklists} checklists, {summary.checklist_items} checklist items "
        f"({summary.dropped_checklist_items} dropped)"
    )
    return summary


async def import_backup_file(
    repos: RepoBundle,
    path: Union[str, Path],
    mode: Union[ImportMode, str] = ImportMode.replace,
) -> ImportSummary:
    """Import a backup file written by ``export_backup_file``.

    Raises:
        BackupImportError: The file cannot be read or the import failed
    """
    try:
        text = await asyncio.to_thread(Path(path).read_text, encoding="utf-8")
    except OSError as exc:
        logger.exception(f"Cannot read backup file {path}")
        raise BackupImportError() from exc
    return await import_backup(repos, text, mode)
