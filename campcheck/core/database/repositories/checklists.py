"""
Checklist and checklist item repositories.

Deleting a checklist deletes its items first. Items copy the equipment
quantity when they are created; afterwards quantity and check state are
edited independently of the equipment.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional, Tuple

from campcheck.core.errors import RecordValidationError

from ..entities.checklists import Checklist, ChecklistItem
from ..store import Collection, RecordStore
from .base import AsyncBaseRepository, require_id

logger = logging.getLogger(__name__)


class ChecklistRepository(AsyncBaseRepository[Checklist]):
    """Repository for checklist records."""

    collection = Collection.checklists
    entity_name = "Checklist"

    def __init__(self, store: RecordStore) -> None:
        super().__init__(store, Checklist)

    async def create_from_module(self, checklist: Checklist, module_id: Optional[int] = None) -> int:
        """Create a checklist, pre-filled with the equipment of a module.

        Each piece of equipment linked to the module becomes one unchecked
        item carrying the equipment's current quantity. Without a module the
        checklist starts empty.

        Args:
            checklist: The checklist to create
            module_id: Module whose equipment seeds the items

        Raises:
            RecordValidationError: ``module_id`` names a module that does not exist

        Returns:
            Identifier of the new checklist
        """
        if module_id is not None and await self.store.get_by_id(Collection.modules, module_id) is None:
            raise RecordValidationError(f"Module {module_id} does not exist")

        checklist_id = await self.create(checklist)
        if module_id is None:
            return checklist_id

        links = await self.store.get_by_index(Collection.module_equipment, "moduleId", module_id)
        created = 0
        for link in links:
            equipment = await self.store.get_by_id(Collection.equipment, link.equipment_id)
            if equipment is None:
                continue
            await self.store.add(
                Collection.checklist_items,
                ChecklistItem(
                    checklist_id=checklist_id,
                    equipment_id=equipment.id,
                    quantity=equipment.quantity,
                    is_checked=False,
                ),
            )
            created += 1
        logger.debug(f"Checklist {checklist_id} created from module {module_id} with {created} item(s)")
        return checklist_id

    async def delete(self, checklist_id: int) -> None:
        """Delete a checklist together with all of its items."""
        await self._delete_with_dependents(checklist_id, Collection.checklist_items, "checklistId")

    def _validate(self, checklist: Checklist) -> None:
        if not checklist.name:
            raise RecordValidationError("Checklist name is required")
        _require_date(checklist.start_date, "start date")
        _require_date(checklist.end_date, "end date")


def _require_date(value: str, label: str) -> None:
    """Reject an empty or non ``YYYY-MM-DD`` checklist date."""
    if not value:
        raise RecordValidationError(f"Checklist {label} is required")
    try:
        date.fromisoformat(value)
    except (TypeError, ValueError):
        raise RecordValidationError(f"Checklist {label} must be a YYYY-MM-DD date, got {value!r}") from None


class ChecklistItemRepository(AsyncBaseRepository[ChecklistItem]):
    """Repository for checklist items."""

    collection = Collection.checklist_items
    entity_name = "ChecklistItem"

    def __init__(self, store: RecordStore) -> None:
        super().__init__(store, ChecklistItem)

    async def list_for_checklist(self, checklist_id: int) -> List[ChecklistItem]:
        """List the items of one checklist."""
        return await self.store.get_by_index(self.collection, "checklistId", checklist_id)

    async def list_for_equipment(self, equipment_id: int) -> List[ChecklistItem]:
        """List items, across checklists, that point at a piece of equipment."""
        return await self.store.get_by_index(self.collection, "equipmentId", equipment_id)

    async def set_checked(self, item_id: int, checked: bool) -> Optional[ChecklistItem]:
        """Tick or untick an item.

        Returns:
            The updated item, or None if it does not exist
        """
        require_id(item_id, self.entity_name)
        item = await self.get_by_id(item_id)
        if item is None:
            return None
        item.is_checked = checked
        await self.update(item)
        return item

    async def count_checked(self, checklist_id: int) -> Tuple[int, int]:
        """Packing progress of a checklist.

        Returns:
            ``(checked, total)`` item counts; ``(0, 0)`` for an empty or unknown checklist
        """
        items = await self.list_for_checklist(checklist_id)
        return sum(1 for item in items if item.is_checked), len(items)

    def _validate(self, item: ChecklistItem) -> None:
        if isinstance(item.quantity, bool) or not isinstance(item.quantity, int) or item.quantity < 0:
            raise RecordValidationError(f"Checklist item quantity must be a non-negative integer, got {item.quantity!r}")

    async def _check_references(self, item: ChecklistItem) -> None:
        if await self.store.get_by_id(Collection.checklists, item.checklist_id) is None:
            raise RecordValidationError(f"Checklist {item.checklist_id} does not exist")
