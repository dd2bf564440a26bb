"""Unit tests for the record store.

Runs against in-memory SQLite to cover identifiers, timestamps, index
lookups and the init lifecycle.
"""

from __future__ import annotations

import asyncio

import pytest

from campcheck.core.database import COLLECTIONS, Collection, RecordStore
from campcheck.core.database.entities import SETTINGS_ID, AppSettings, Equipment, ModuleEquipment
from campcheck.core.database.utils import is_memory_url
from campcheck.core.errors import (
    ConstraintViolationError,
    RecordValidationError,
    StoreInitializationError,
    StoreNotInitializedError,
    UnknownCollectionError,
    UnknownIndexError,
)
from campcheck.core.models.enums import EquipmentStatus


class TestInitLifecycle:
    async def test_operations_before_init_fail(self):
        store = RecordStore.from_url("sqlite+aiosqlite://")

        assert store.is_initialized is False
        with pytest.raises(StoreNotInitializedError):
            await store.get_all(Collection.equipment)
        with pytest.raises(StoreNotInitializedError):
            await store.add(Collection.equipment, {"name": "Lantern", "category": "Lighting"})
        with pytest.raises(StoreNotInitializedError):
            await store.delete(Collection.equipment, 1)
        await store.engine.dispose()

    async def test_init_is_idempotent(self, store: RecordStore):
        await store.init()

        assert store.is_initialized is True
        assert await store.get_all(Collection.equipment) == []

    async def test_schema_survives_reopen(self, tmp_path):
        url = f"sqlite+aiosqlite:///{tmp_path / 'campcheck.db'}"
        first = RecordStore.from_url(url)
        await first.init()
        await first.add(Collection.modules, {"name": "Winter Kit", "sort_order": 1})
        await first.close()

        second = RecordStore.from_url(url)
        await second.init()
        modules = await second.get_all(Collection.modules)
        await second.close()

        assert [module.name for module in modules] == ["Winter Kit"]

    async def test_unavailable_database_fails_init(self, tmp_path):
        store = RecordStore.from_url(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'dir' / 'campcheck.db'}")

        with pytest.raises(StoreInitializationError):
            await store.init()
        assert store.is_initialized is False
        await store.engine.dispose()

    async def test_close_requires_init_again(self):
        store = RecordStore.from_url("sqlite+aiosqlite://")
        await store.init()
        await store.close()

        with pytest.raises(StoreNotInitializedError):
            await store.get_all(Collection.checklists)


class TestAdd:
    async def test_assigns_increasing_ids(self, store: RecordStore, tent: Equipment, gas_canister: Equipment):
        first = await store.add(Collection.equipment, tent)
        second = await store.add(Collection.equipment, gas_canister)

        assert isinstance(first, int)
        assert second > first

    async def test_ignores_incoming_id(self, store: RecordStore, tent: Equipment):
        tent.id = 99

        new_id = await store.add(Collection.equipment, tent)

        assert new_id != 99
        assert await store.get_by_id(Collection.equipment, 99) is None

    async def test_deleted_id_is_not_reused(self, store: RecordStore, tent: Equipment, gas_canister: Equipment):
        await store.add(Collection.equipment, tent)
        deleted_id = await store.add(Collection.equipment, gas_canister)
        await store.add(Collection.checklist_items, {"checklist_id": 1, "equipment_id": deleted_id})
        await store.delete(Collection.equipment, deleted_id)

        new_id = await store.add(Collection.equipment, {"name": "Lantern", "category": "Lighting"})

        assert new_id > deleted_id
        [item] = await store.get_all(Collection.checklist_items)
        assert await store.get_by_id(Collection.equipment, item.equipment_id) is None

    async def test_link_ids_are_not_reused(self, store: RecordStore):
        deleted_id = await store.add(Collection.module_equipment, ModuleEquipment(module_id=1, equipment_id=2))
        await store.delete(Collection.module_equipment, deleted_id)

        new_id = await store.add(Collection.module_equipment, ModuleEquipment(module_id=1, equipment_id=2))

        assert new_id != deleted_id

    async def test_stamps_timestamps(self, store: RecordStore, tent: Equipment):
        new_id = await store.add(Collection.equipment, tent)

        stored = await store.get_by_id(Collection.equipment, new_id)
        assert stored.created_at is not None
        assert stored.updated_at is not None

    async def test_accepts_mappings(self, store: RecordStore):
        new_id = await store.add(Collection.checklists, {"name": "Weekend", "start_date": "2024-05-04", "end_date": "2024-05-05", "unknown": 1})

        stored = await store.get_by_id(Collection.checklists, new_id)
        assert stored.name == "Weekend"

    async def test_unique_index_violation(self, store: RecordStore):
        await store.add(Collection.module_equipment, ModuleEquipment(module_id=1, equipment_id=2))

        with pytest.raises(ConstraintViolationError):
            await store.add(Collection.module_equipment, ModuleEquipment(module_id=1, equipment_id=2))

    async def test_unknown_collection(self, store: RecordStore):
        with pytest.raises(UnknownCollectionError):
            await store.add("tents", {"name": "x"})


class TestReadOperations:
    async def test_get_by_id_missing_returns_none(self, store: RecordStore):
        assert await store.get_by_id(Collection.equipment, 12345) is None

    async def test_get_all_returns_every_record(self, store: RecordStore, tent: Equipment, gas_canister: Equipment):
        await store.add(Collection.equipment, tent)
        await store.add(Collection.equipment, gas_canister)

        names = {item.name for item in await store.get_all("equipment")}

        assert names == {"2-person tent", "Gas canister"}

    async def test_concurrent_reads(self, store: RecordStore, tent: Equipment):
        await store.add(Collection.equipment, tent)

        equipment, modules, checklists = await asyncio.gather(
            store.get_all(Collection.equipment),
            store.get_all(Collection.modules),
            store.get_all(Collection.checklists),
        )

        assert len(equipment) == 1
        assert modules == []
        assert checklists == []


class TestUpdate:
    async def test_replaces_record(self, store: RecordStore, tent: Equipment):
        new_id = await store.add(Collection.equipment, tent)
        stored = await store.get_by_id(Collection.equipment, new_id)
        stored.quantity = 2
        stored.memo = "Spare pegs inside"

        await store.update(Collection.equipment, stored)

        updated = await store.get_by_id(Collection.equipment, new_id)
        assert updated.quantity == 2
        assert updated.memo == "Spare pegs inside"
        assert updated.created_at == stored.created_at
        assert updated.updated_at >= stored.updated_at

    async def test_requires_id(self, store: RecordStore, tent: Equipment):
        with pytest.raises(RecordValidationError):
            await store.update(Collection.equipment, tent)

        assert await store.get_all(Collection.equipment) == []

    async def test_upserts_unknown_id(self, store: RecordStore):
        await store.update(Collection.settings, AppSettings(id=SETTINGS_ID, dark_mode=True))

        stored = await store.get_by_id(Collection.settings, SETTINGS_ID)
        assert stored.dark_mode is True
        assert stored.created_at is not None


class TestDelete:
    async def test_removes_record(self, store: RecordStore, tent: Equipment):
        new_id = await store.add(Collection.equipment, tent)

        await store.delete(Collection.equipment, new_id)

        assert await store.get_by_id(Collection.equipment, new_id) is None

    async def test_absent_id_is_not_an_error(self, store: RecordStore):
        await store.delete(Collection.equipment, 404)


class TestGetByIndex:
    async def test_single_field_index(self, store: RecordStore, tent: Equipment, gas_canister: Equipment):
        await store.add(Collection.equipment, tent)
        await store.add(Collection.equipment, gas_canister)

        cookware = await store.get_by_index(Collection.equipment, "category", "Cookware")
        to_buy = await store.get_by_index(Collection.equipment, "status", EquipmentStatus.needs_purchase)

        assert [item.name for item in cookware] == ["Gas canister"]
        assert [item.name for item in to_buy] == ["Gas canister"]

    async def test_composite_index(self, store: RecordStore):
        await store.add(Collection.module_equipment, ModuleEquipment(module_id=1, equipment_id=2))
        await store.add(Collection.module_equipment, ModuleEquipment(module_id=1, equipment_id=3))

        rows = await store.get_by_index(Collection.module_equipment, "moduleEquipment", (1, 3))
        by_module = await store.get_by_index(Collection.module_equipment, "moduleId", 1)

        assert [(row.module_id, row.equipment_id) for row in rows] == [(1, 3)]
        assert len(by_module) == 2

    async def test_no_match(self, store: RecordStore):
        assert await store.get_by_index(Collection.checklist_items, "checklistId", 7) == []

    async def test_unknown_index(self, store: RecordStore):
        with pytest.raises(UnknownIndexError):
            await store.get_by_index(Collection.checklists, "name", "July Trip")

    async def test_composite_index_needs_every_value(self, store: RecordStore):
        with pytest.raises(RecordValidationError):
            await store.get_by_index(Collection.module_equipment, "moduleEquipment", (1,))

    @pytest.mark.parametrize("value", [1, "12", None])
    async def test_composite_index_rejects_scalars(self, store: RecordStore, value):
        await store.add(Collection.module_equipment, ModuleEquipment(module_id=1, equipment_id=2))

        with pytest.raises(RecordValidationError):
            await store.get_by_index(Collection.module_equipment, "moduleEquipment", value)

    async def test_composite_index_accepts_lists(self, store: RecordStore):
        await store.add(Collection.module_equipment, ModuleEquipment(module_id=1, equipment_id=2))

        rows = await store.get_by_index(Collection.module_equipment, "moduleEquipment", [1, 2])

        assert [(row.module_id, row.equipment_id) for row in rows] == [(1, 2)]


class TestSchema:
    def test_collections_and_indexes(self):
        assert set(COLLECTIONS) == set(Collection)
        assert set(COLLECTIONS[Collection.module_equipment].indexes) == {"moduleId", "equipmentId", "moduleEquipment"}
        assert set(COLLECTIONS[Collection.checklist_items].indexes) == {"checklistId", "equipmentId"}
        assert set(COLLECTIONS[Collection.modules].indexes) == {"name", "sortOrder"}
        assert set(COLLECTIONS[Collection.equipment].indexes) == {"category", "status"}
        assert COLLECTIONS[Collection.settings].auto_increment is False

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("sqlite+aiosqlite://", True),
            ("sqlite+aiosqlite:///:memory:", True),
            ("sqlite+aiosqlite:///campcheck.db", False),
        ],
    )
    def test_is_memory_url(self, url, expected):
        assert is_memory_url(url) is expected
