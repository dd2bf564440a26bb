"""
Checklist entity models.

A checklist is a dated packing list. Its items point at equipment and carry
their own quantity and check state. Items are deleted with their checklist;
an item whose equipment was deleted keeps its dangling ``equipment_id``.
"""

from __future__ import annotations

from sqlmodel import Field

from ..base import Base, TimestampedRecord


class ChecklistBase(Base):
    """Base fields for checklists."""

    name: str
    start_date: str = Field(description="Trip start as YYYY-MM-DD")
    end_date: str = Field(description="Trip end as YYYY-MM-DD")


class Checklist(ChecklistBase, TimestampedRecord, table=True):
    """Persistent checklist record.

    Table: checklists
    """

    __tablename__ = "checklists"
    __table_args__ = {"sqlite_autoincrement": True}

    def __repr__(self) -> str:
        return f"Checklist(id={self.id}, name={self.name!r}, {self.start_date}..{self.end_date})"


class ChecklistItem(TimestampedRecord, table=True):
    """One line of a checklist.

    Table: checklist_items
    """

    __tablename__ = "checklist_items"
    __table_args__ = {"sqlite_autoincrement": True}

    checklist_id: int = Field(index=True)
    equipment_id: int = Field(index=True)
    quantity: int = Field(default=1, description="Copied from the equipment at creation")
    is_checked: bool = Field(default=False)

    def __repr__(self) -> str:
        return (
            f"ChecklistItem(id={self.id}, checklist_id={self.checklist_id}, "
            f"equipment_id={self.equipment_id}, is_checked={self.is_checked})"
        )
