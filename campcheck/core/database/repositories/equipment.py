"""
Equipment repository.

Deleting equipment removes its module links first. Checklist items that
reference the equipment are kept and end up with a dangling
``equipment_id``.
"""

from __future__ import annotations

from typing import List

from campcheck.core.errors import RecordValidationError
from campcheck.core.models.enums import EquipmentStatus

from ..entities.equipment import Equipment
from ..store import Collection, RecordStore
from .base import AsyncBaseRepository


class EquipmentRepository(AsyncBaseRepository[Equipment]):
    """Repository for equipment records."""

    collection = Collection.equipment
    entity_name = "Equipment"

    def __init__(self, store: RecordStore) -> None:
        super().__init__(store, Equipment)

    async def delete(self, equipment_id: int) -> None:
        """Delete equipment and every module link that references it."""
        await self._delete_with_dependents(equipment_id, Collection.module_equipment, "equipmentId")

    async def list_by_category(self, category: str) -> List[Equipment]:
        """List equipment in one category."""
        return await self.store.get_by_index(self.collection, "category", category)

    async def list_by_status(self, status: EquipmentStatus | str) -> List[Equipment]:
        """List equipment with the given condition status."""
        return await self.store.get_by_index(self.collection, "status", EquipmentStatus.from_value(status))

    def _validate(self, equipment: Equipment) -> None:
        if not equipment.name:
            raise RecordValidationError("Equipment name is required")
        if isinstance(equipment.quantity, bool) or not isinstance(equipment.quantity, int) or equipment.quantity < 1:
            raise RecordValidationError(f"Equipment quantity must be a positive integer, got {equipment.quantity!r}")
        try:
            equipment.status = EquipmentStatus.from_value(equipment.status)
        except ValueError as exc:
            raise RecordValidationError(f"Unknown equipment status: {equipment.status!r}") from exc
