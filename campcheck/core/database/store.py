"""
Record store: the storage engine under the domain repositories.

``RecordStore`` is a small keyed object store on top of async SQLAlchemy.
Records live in named collections and get auto-assigned integer
identifiers; an identifier is never handed out again after its record is
deleted. Records can be looked up through per-collection secondary indexes.
Every call runs in its own transaction; there is no transaction spanning
calls.

The store must be constructed and then initialised once with ``init()``.
Any operation issued before that raises ``StoreNotInitializedError``.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional, Tuple, Type, Union

from sqlalchemy.engine import Connection
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlmodel import SQLModel, select

from campcheck.core.errors import (
    ConstraintViolationError,
    RecordValidationError,
    StorageError,
    StoreInitializationError,
    StoreNotInitializedError,
    UnknownCollectionError,
    UnknownIndexError,
)

from .base import Base, utc_now
from .entities import AppSettings, Checklist, ChecklistItem, Equipment, Module, ModuleEquipment
from .utils import create_engine, create_sessionmaker

logger = logging.getLogger(__name__)

# Bump only together with a one-time setup step in ``_ensure_schema``.
SCHEMA_VERSION = 1


class Collection(str, Enum):
    """Names of the record collections."""

    equipment = "equipment"
    modules = "modules"
    module_equipment = "moduleEquipment"
    checklists = "checklists"
    checklist_items = "checklistItems"
    settings = "settings"


@dataclass(frozen=True)
class CollectionSpec:
    """Entity class and secondary indexes of one collection.

    Each index maps its name to the entity attributes it covers; an index
    over several attributes is queried with a tuple value.
    """

    model: Type[SQLModel]
    indexes: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    auto_increment: bool = True


COLLECTIONS: Dict[Collection, CollectionSpec] = {
    Collection.equipment: CollectionSpec(
        Equipment,
        {"category": ("category",), "status": ("status",)},
    ),
    Collection.modules: CollectionSpec(
        Module,
        {"name": ("name",), "sortOrder": ("sort_order",)},
    ),
    Collection.module_equipment: CollectionSpec(
        ModuleEquipment,
        {
            "moduleId": ("module_id",),
            "equipmentId": ("equipment_id",),
            "moduleEquipment": ("module_id", "equipment_id"),
        },
    ),
    Collection.checklists: CollectionSpec(Checklist),
    Collection.checklist_items: CollectionSpec(
        ChecklistItem,
        {"checklistId": ("checklist_id",), "equipmentId": ("equipment_id",)},
    ),
    Collection.settings: CollectionSpec(AppSettings, auto_increment=False),
}

Record = Union[SQLModel, Mapping[str, Any]]


def _ensure_schema(connection: Connection) -> None:
    """Create the collections once; an existing schema is left alone."""
    tables = [spec.model.__table__ for spec in COLLECTIONS.values()]
    if connection.dialect.name != "sqlite":
        Base.metadata.create_all(connection, tables=tables, checkfirst=True)
        return

    current = connection.exec_driver_sql("PRAGMA user_version").scalar() or 0
    if current >= SCHEMA_VERSION:
        return
    Base.metadata.create_all(connection, tables=tables, checkfirst=True)
    connection.exec_driver_sql(f"PRAGMA user_version = {SCHEMA_VERSION}")
    logger.info(f"Database schema created at version {SCHEMA_VERSION}")


class RecordStore:
    """Async keyed record store over a SQLAlchemy engine."""

    def __init__(self, engine: AsyncEngine) -> None:
        """Create a store bound to ``engine``; call ``init()`` before use.

        Args:
            engine: Async SQLAlchemy engine of the on-device database
        """
        self.engine = engine
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        # Operations queue behind each other instead of sharing a connection.
        self._lock = asyncio.Lock()

    @classmethod
    def from_url(cls, db_url: str) -> "RecordStore":
        """Build a store for a database URL."""
        return cls(create_engine(db_url))

    @property
    def is_initialized(self) -> bool:
        return self._session_factory is not None

    async def init(self) -> None:
        """Open the database and establish the schema.

        Calling ``init`` again on an initialised store does nothing.

        Raises:
            StoreInitializationError: The database could not be opened or set up
        """
        if self.is_initialized:
            return
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(_ensure_schema)
        except (SQLAlchemyError, OSError) as exc:
            logger.exception("Failed to initialize the record store")
            raise StoreInitializationError(str(exc)) from exc
        self._session_factory = create_sessionmaker(self.engine)
        logger.debug(f"Record store ready: {self.engine.url.render_as_string(hide_password=True)}")

    async def close(self) -> None:
        """Release the engine's connections; the store needs ``init()`` again afterwards."""
        self._session_factory = None
        await self.engine.dispose()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def add(self, collection: Union[Collection, str], record: Record) -> int:
        """Insert a record and return its identifier.

        Auto-increment collections ignore any identifier on ``record``.
        ``created_at`` and ``updated_at`` are stamped here.

        Args:
            collection: Target collection
            record: Entity instance or mapping of attribute values

        Returns:
            Identifier of the new record
        """
        spec = self._spec(collection)
        self._require_initialized()
        data = self._to_data(spec, record)
        if spec.auto_increment:
            data.pop("id", None)
        now = utc_now()
        data["created_at"] = now
        data["updated_at"] = now
        row = spec.model(**data)
        async with self._transaction("add", collection) as session:
            session.add(row)
            await session.flush()
            new_id = row.id
        return new_id

    async def get_all(self, collection: Union[Collection, str]) -> List[Any]:
        """Return every record of a collection."""
        spec = self._spec(collection)
        stmt = select(spec.model).order_by(spec.model.id)
        async with self._transaction("get_all", collection) as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def get_by_id(self, collection: Union[Collection, str], record_id: int) -> Optional[Any]:
        """Return the record with ``record_id`` or None if there is none."""
        spec = self._spec(collection)
        async with self._transaction("get_by_id", collection) as session:
            return await session.get(spec.model, record_id)

    async def update(self, collection: Union[Collection, str], record: Record) -> None:
        """Replace the stored record that has the same identifier.

        Acts as an upsert: a record whose identifier is not stored yet is
        inserted under that identifier. ``updated_at`` is re-stamped.

        Raises:
            RecordValidationError: ``record`` has no identifier
        """
        spec = self._spec(collection)
        self._require_initialized()
        data = self._to_data(spec, record)
        if data.get("id") is None:
            raise RecordValidationError(f"A '{Collection(collection).value}' record needs an id to be updated")
        now = utc_now()
        if data.get("created_at") is None:
            data["created_at"] = now
        data["updated_at"] = now
        row = spec.model(**data)
        async with self._transaction("update", collection) as session:
            await session.merge(row)

    async def delete(self, collection: Union[Collection, str], record_id: int) -> None:
        """Remove a record; deleting an absent identifier is not an error."""
        spec = self._spec(collection)
        async with self._transaction("delete", collection) as session:
            row = await session.get(spec.model, record_id)
            if row is not None:
                await session.delete(row)

    async def get_by_index(self, collection: Union[Collection, str], index_name: str, value: Any) -> List[Any]:
        """Return the records whose indexed attribute(s) equal ``value``.

        Args:
            collection: Collection to search
            index_name: Name of the secondary index, e.g. ``"moduleId"``
            value: Value to match; a tuple for composite indexes

        Raises:
            UnknownIndexError: The collection has no such index
            RecordValidationError: A composite index got something other than
                a tuple or list of one value per attribute
        """
        spec = self._spec(collection)
        attributes = spec.indexes.get(index_name)
        if attributes is None:
            raise UnknownIndexError(Collection(collection).value, index_name)
        if len(attributes) > 1:
            if not isinstance(value, (tuple, list)):
                raise RecordValidationError(f"Index '{index_name}' expects a tuple of {len(attributes)} values, got {value!r}")
            values = tuple(value)
        else:
            values = (value,)
        if len(values) != len(attributes):
            raise RecordValidationError(f"Index '{index_name}' expects {len(attributes)} values, got {len(values)}")

        stmt = select(spec.model)
        for attribute, expected in zip(attributes, values):
            stmt = stmt.where(getattr(spec.model, attribute) == expected)
        stmt = stmt.order_by(spec.model.id)

        async with self._transaction("get_by_index", collection) as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _spec(collection: Union[Collection, str]) -> CollectionSpec:
        try:
            return COLLECTIONS[Collection(collection)]
        except ValueError:
            raise UnknownCollectionError(str(collection)) from None

    def _require_initialized(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            raise StoreNotInitializedError()
        return self._session_factory

    @staticmethod
    def _to_data(spec: CollectionSpec, record: Record) -> Dict[str, Any]:
        raw = record.model_dump() if isinstance(record, SQLModel) else dict(record)
        return {key: value for key, value in raw.items() if key in spec.model.model_fields}

    @asynccontextmanager
    async def _transaction(self, operation: str, collection: Union[Collection, str]) -> AsyncIterator[AsyncSession]:
        """Run one operation in its own session and transaction.

        Unique index violations become ``ConstraintViolationError``; other
        SQLAlchemy failures become ``StorageError`` with the cause chained.
        """
        session_factory = self._require_initialized()
        name = Collection(collection).value
        async with self._lock:
            async with session_factory() as session:
                try:
                    async with session.begin():
                        yield session
                except IntegrityError as exc:
                    raise ConstraintViolationError(name, str(exc.orig)) from exc
                except SQLAlchemyError as exc:
                    logger.error(f"Storage operation '{operation}' on '{name}' failed: {exc}")
                    raise StorageError(operation, name, str(exc)) from exc
