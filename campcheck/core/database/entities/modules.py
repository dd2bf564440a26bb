"""
Module entity models.

A module is a named, reusable bundle of equipment (e.g. "Summer Kit").
``ModuleEquipment`` is the many-to-many link table between modules and
equipment. Link rows have no lifecycle of their own: the repositories
delete them whenever either side is deleted.
"""

from __future__ import annotations

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from ..base import Base, TimestampedRecord


class ModuleBase(Base):
    """Base fields for modules."""

    name: str = Field(unique=True, index=True)
    sort_order: int = Field(default=0, index=True, description="Ascending display order")


class Module(ModuleBase, TimestampedRecord, table=True):
    """Persistent module record.

    Table: modules
    """

    __tablename__ = "modules"
    __table_args__ = {"sqlite_autoincrement": True}

    def __repr__(self) -> str:
        return f"Module(id={self.id}, name={self.name!r}, sort_order={self.sort_order})"


class ModuleEquipment(TimestampedRecord, table=True):
    """Link between a module and one piece of equipment.

    The (module_id, equipment_id) pair is unique.

    Table: module_equipment
    """

    __tablename__ = "module_equipment"
    __table_args__ = (
        UniqueConstraint("module_id", "equipment_id", name="uq_module_equipment"),
        {"sqlite_autoincrement": True},
    )

    module_id: int = Field(index=True)
    equipment_id: int = Field(index=True)

    def __repr__(self) -> str:
        return f"ModuleEquipment(id={self.id}, module_id={self.module_id}, equipment_id={self.equipment_id})"
