"""
Module and module-equipment link repositories.

Modules are listed by ``sort_order``. The link repository keeps the
(module, equipment) pairs unique and only links records that exist.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from campcheck.core.errors import RecordValidationError

from ..entities.equipment import Equipment
from ..entities.modules import Module, ModuleEquipment
from ..store import Collection, RecordStore
from .base import AsyncBaseRepository

logger = logging.getLogger(__name__)


class ModuleRepository(AsyncBaseRepository[Module]):
    """Repository for module records."""

    collection = Collection.modules
    entity_name = "Module"

    def __init__(self, store: RecordStore) -> None:
        super().__init__(store, Module)

    async def list(self) -> List[Module]:
        """List modules by ascending ``sort_order``; ties keep insertion order."""
        modules = await self.store.get_all(self.collection)
        return sorted(modules, key=lambda module: (module.sort_order, module.id))

    async def get_by_name(self, name: str) -> Optional[Module]:
        """Get a module by its unique name."""
        matches = await self.store.get_by_index(self.collection, "name", name)
        return matches[0] if matches else None

    async def next_sort_order(self) -> int:
        """Sort order that places a new module after all existing ones; 1 for the first module."""
        modules = await self.store.get_all(self.collection)
        return max((module.sort_order for module in modules), default=0) + 1

    async def delete(self, module_id: int) -> None:
        """Delete a module and its equipment links; the equipment itself stays."""
        await self._delete_with_dependents(module_id, Collection.module_equipment, "moduleId")

    def _validate(self, module: Module) -> None:
        if not module.name:
            raise RecordValidationError("Module name is required")


class ModuleEquipmentRepository(AsyncBaseRepository[ModuleEquipment]):
    """Repository for the module-equipment link table."""

    collection = Collection.module_equipment
    entity_name = "ModuleEquipment"

    def __init__(self, store: RecordStore) -> None:
        super().__init__(store, ModuleEquipment)

    async def link(self, module_id: int, equipment_id: int) -> int:
        """Link a piece of equipment to a module.

        Raises:
            RecordValidationError: The module or the equipment does not exist
            ConstraintViolationError: The pair is already linked

        Returns:
            Identifier of the link row
        """
        return await self.create(ModuleEquipment(module_id=module_id, equipment_id=equipment_id))

    async def get_link(self, module_id: int, equipment_id: int) -> Optional[ModuleEquipment]:
        """Get the link row for a pair, if any."""
        rows = await self.store.get_by_index(self.collection, "moduleEquipment", (module_id, equipment_id))
        return rows[0] if rows else None

    async def list_links(self, module_id: int) -> List[ModuleEquipment]:
        """List the link rows of a module."""
        return await self.store.get_by_index(self.collection, "moduleId", module_id)

    async def list_modules_for_equipment(self, equipment_id: int) -> List[ModuleEquipment]:
        """List the link rows that point at a piece of equipment."""
        return await self.store.get_by_index(self.collection, "equipmentId", equipment_id)

    async def list_equipment(self, module_id: int) -> List[Equipment]:
        """Resolve the equipment linked to a module, skipping rows that no longer exist."""
        equipment: List[Equipment] = []
        for row in await self.list_links(module_id):
            item = await self.store.get_by_id(Collection.equipment, row.equipment_id)
            if item is not None:
                equipment.append(item)
        return equipment

    async def delete_link(self, module_id: int, equipment_id: int) -> None:
        """Remove the link between a module and a piece of equipment, if present."""
        row = await self.get_link(module_id, equipment_id)
        if row is not None:
            await self.store.delete(self.collection, row.id)

    async def set_equipment(self, module_id: int, equipment_ids: Iterable[int]) -> None:
        """Make the module's links match ``equipment_ids`` exactly.

        Links outside the set are removed first, then missing ones are added.
        """
        target = list(dict.fromkeys(equipment_ids))
        current = {row.equipment_id for row in await self.list_links(module_id)}
        for equipment_id in current.difference(target):
            await self.delete_link(module_id, equipment_id)
        added = [equipment_id for equipment_id in target if equipment_id not in current]
        for equipment_id in added:
            await self.link(module_id, equipment_id)
        logger.debug(f"Module {module_id} links: +{len(added)} -{len(current.difference(target))}")

    async def _check_references(self, link: ModuleEquipment) -> None:
        if await self.store.get_by_id(Collection.modules, link.module_id) is None:
            raise RecordValidationError(f"Module {link.module_id} does not exist")
        if await self.store.get_by_id(Collection.equipment, link.equipment_id) is None:
            raise RecordValidationError(f"Equipment {link.equipment_id} does not exist")
