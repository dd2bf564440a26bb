"""
Equipment entity models.

This module contains the database entity for a single piece of trackable
camping gear: what it is, how many there are, and its condition.
"""

from __future__ import annotations

from typing import Optional

from sqlmodel import Field

from campcheck.core.models.enums import EquipmentStatus

from ..base import Base, TimestampedRecord


class EquipmentBase(Base):
    """Base fields for equipment."""

    type: str = Field(default="", description="Free-text kind of gear, e.g. 'Dome tent'")
    name: str = Field(description="Display name")
    quantity: int = Field(default=1, description="Number of units owned")
    category: str = Field(index=True, description="Category label, see DEFAULT_CATEGORIES")
    is_consumable: bool = Field(default=False, description="Used up on trips (gas, charcoal)")
    status: EquipmentStatus = Field(default=EquipmentStatus.normal, index=True)
    memo: Optional[str] = Field(default=None)


class Equipment(EquipmentBase, TimestampedRecord, table=True):
    """Persistent equipment record.

    Table: equipment
    """

    __tablename__ = "equipment"
    __table_args__ = {"sqlite_autoincrement": True}

    def __repr__(self) -> str:
        return f"Equipment(id={self.id}, name={self.name!r}, quantity={self.quantity})"
