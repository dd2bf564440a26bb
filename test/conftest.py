from __future__ import annotations

from typing import AsyncGenerator

import pytest

from campcheck.core.config import get_settings
from campcheck.core.database import RecordStore
from campcheck.core.database.entities import Checklist, Equipment, Module
from campcheck.core.database.repositories import RepoBundle, build_repos
from campcheck.core.models.enums import EquipmentStatus

IN_MEMORY_URL = "sqlite+aiosqlite://"


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Keep tests away from a developer's .env and working directory."""
    for name in (
        "CAMPCHECK_DATABASE_URL",
        "CAMPCHECK_BACKUP_DIR",
        "CAMPCHECK_LOG_LEVEL",
        "CAMPCHECK_LOG_FORMAT",
        "CAMPCHECK_LOG_FILE_DIR",
        "CAMPCHECK_ENABLE_FILE_LOGGING",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
async def store() -> AsyncGenerator[RecordStore, None]:
    """Initialised record store over an in-memory SQLite database."""
    record_store = RecordStore.from_url(IN_MEMORY_URL)
    await record_store.init()
    try:
        yield record_store
    finally:
        await record_store.close()


@pytest.fixture
def repos(store: RecordStore) -> RepoBundle:
    return build_repos(store)


@pytest.fixture
def tent() -> Equipment:
    return Equipment(
        type="Dome tent",
        name="2-person tent",
        quantity=1,
        category="Tent/Tarp",
        is_consumable=False,
        status=EquipmentStatus.normal,
    )


@pytest.fixture
def gas_canister() -> Equipment:
    return Equipment(
        type="Butane",
        name="Gas canister",
        quantity=4,
        category="Cookware",
        is_consumable=True,
        status=EquipmentStatus.needs_purchase,
        memo="Buy before July",
    )


@pytest.fixture
def summer_kit() -> Module:
    return Module(name="Summer Kit", sort_order=0)


@pytest.fixture
def july_trip() -> Checklist:
    return Checklist(name="July Trip", start_date="2024-07-01", end_date="2024-07-03")
