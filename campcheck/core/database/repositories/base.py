"""
Base repository interfaces and utilities.

This module provides the foundational repository pattern used across all
repository implementations. Repositories are built only on ``RecordStore``
primitives; they add typing, validation and cascade rules.
"""

from __future__ import annotations

import logging
from typing import ClassVar, Generic, List, Optional, Type, TypeVar

from sqlmodel import SQLModel

from campcheck.core.errors import RecordValidationError

from ..store import Collection, RecordStore

logger = logging.getLogger(__name__)

# Generic type for SQLModel entities
EntityType = TypeVar("EntityType", bound=SQLModel)


def require_id(entity_id: Optional[int], what: str) -> int:
    """Return ``entity_id`` or raise if it is missing.

    Raises:
        RecordValidationError: ``entity_id`` is None (``0`` is never assigned by the store either)
    """
    if not entity_id:
        raise RecordValidationError(f"{what} ID is required")
    return entity_id


class AsyncBaseRepository(Generic[EntityType]):
    """Base async repository with the CRUD operations every entity shares."""

    collection: ClassVar[Collection]
    entity_name: ClassVar[str]

    def __init__(self, store: RecordStore, model: Type[EntityType]) -> None:
        """Initialize repository with the record store and SQLModel entity class.

        Args:
            store: Initialised record store
            model: SQLModel entity class for this repository
        """
        self.store = store
        self.model = model

    async def create(self, entity: EntityType) -> int:
        """Create a new record.

        Args:
            entity: SQLModel instance to persist; its ``id`` is ignored

        Returns:
            Identifier assigned by the store
        """
        self._validate(entity)
        await self._check_references(entity)
        return await self.store.add(self.collection, entity)

    async def get_by_id(self, entity_id: int) -> Optional[EntityType]:
        """Get a record by its identifier.

        Returns:
            Entity instance or None if not found
        """
        return await self.store.get_by_id(self.collection, entity_id)

    async def list(self) -> List[EntityType]:
        """List every record of this entity."""
        return await self.store.get_all(self.collection)

    async def update(self, entity: EntityType) -> None:
        """Replace a stored record with ``entity``.

        Raises:
            RecordValidationError: ``entity`` has no identifier or invalid fields
        """
        require_id(entity.id, self.entity_name)
        self._validate(entity)
        await self.store.update(self.collection, entity)

    async def delete(self, entity_id: int) -> None:
        """Delete a record; absent identifiers are ignored.

        Raises:
            RecordValidationError: ``entity_id`` is missing
        """
        require_id(entity_id, self.entity_name)
        await self.store.delete(self.collection, entity_id)

    def _validate(self, entity: EntityType) -> None:
        """Check field values before a write. Subclasses override."""

    async def _check_references(self, entity: EntityType) -> None:
        """Check that the owners referenced by a new record exist. Subclasses override."""

    async def _delete_with_dependents(self, entity_id: int, dependents: Collection, index_name: str) -> None:
        """Delete ``entity_id`` after every dependent row found through ``index_name``.

        Dependents are deleted one at a time, before the owner.

        Args:
            entity_id: Identifier of the owning record
            dependents: Collection holding the dependent rows
            index_name: Index of ``dependents`` keyed by the owner identifier
        """
        require_id(entity_id, self.entity_name)
        rows = await self.store.get_by_index(dependents, index_name, entity_id)
        for row in rows:
            await self.store.delete(dependents, row.id)
        await self.store.delete(self.collection, entity_id)
        logger.debug(
            f"Deleted {self.entity_name} {entity_id} with {len(rows)} dependent row(s) from '{dependents.value}'"
        )
