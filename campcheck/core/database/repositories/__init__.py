"""
Database repository layer.

Each module provides typed data access for its entities on top of the
``RecordStore``:

- base: AsyncBaseRepository and the cascade-delete helper
- equipment: equipment records
- modules: modules and module-equipment links
- checklists: checklists and checklist items
- settings: the singleton settings record
- bundle: RepoBundle wiring all repositories to one store
"""

from .base import AsyncBaseRepository
from .bundle import RepoBundle, build_repos
from .checklists import ChecklistItemRepository, ChecklistRepository
from .equipment import EquipmentRepository
from .modules import ModuleEquipmentRepository, ModuleRepository
from .settings import SettingsRepository

__all__ = [
    "AsyncBaseRepository",
    "ChecklistItemRepository",
    "ChecklistRepository",
    "EquipmentRepository",
    "ModuleEquipmentRepository",
    "ModuleRepository",
    "RepoBundle",
    "SettingsRepository",
    "build_repos",
]
