"""
Repository bundle for dependency injection.

This module provides a convenience bundle of all repository instances
sharing one record store.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..store import RecordStore
from .checklists import ChecklistItemRepository, ChecklistRepository
from .equipment import EquipmentRepository
from .modules import ModuleEquipmentRepository, ModuleRepository
from .settings import SettingsRepository


@dataclass(frozen=True)
class RepoBundle:
    """Convenience bundle of all repositories for dependency injection."""

    equipment: EquipmentRepository
    modules: ModuleRepository
    module_equipment: ModuleEquipmentRepository
    checklists: ChecklistRepository
    checklist_items: ChecklistItemRepository
    settings: SettingsRepository


def build_repos(store: RecordStore) -> RepoBundle:
    """Build a RepoBundle over ``store``.

    Args:
        store: Record store shared by all repositories

    Returns:
        Bundle containing all repository instances
    """
    return RepoBundle(
        equipment=EquipmentRepository(store),
        modules=ModuleRepository(store),
        module_equipment=ModuleEquipmentRepository(store),
        checklists=ChecklistRepository(store),
        checklist_items=ChecklistItemRepository(store),
        settings=SettingsRepository(store),
    )
