"""
Database entity models.

One module per business domain:

- equipment: trackable gear items
- modules: reusable equipment bundles and their equipment links
- checklists: dated packing lists and their items
- settings: the singleton application settings record
"""

from .checklists import Checklist, ChecklistItem
from .equipment import Equipment
from .modules import Module, ModuleEquipment
from .settings import SETTINGS_ID, AppSettings

__all__ = [
    "SETTINGS_ID",
    "AppSettings",
    "Checklist",
    "ChecklistItem",
    "Equipment",
    "Module",
    "ModuleEquipment",
]
