"""Domain enums for equipment and backup handling."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class EquipmentStatus(str, Enum):
    """
    Condition of a piece of equipment.

    Older backups stored traffic-light codes; ``from_value`` maps them.
    """

    normal = "normal"
    needs_replacement = "needs-replacement"
    needs_purchase = "needs-purchase"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @classmethod
    def from_value(cls, value: str | EquipmentStatus) -> EquipmentStatus:
        """Parse a status value, accepting the legacy ``green``/``yellow``/``red`` codes."""
        if isinstance(value, cls):
            return value
        legacy: Optional[EquipmentStatus] = _LEGACY_STATUS_CODES.get(str(value))
        if legacy is not None:
            return legacy
        return cls(value)


_STATUS_LABELS = {
    EquipmentStatus.normal: "Normal",
    EquipmentStatus.needs_replacement: "Needs replacement",
    EquipmentStatus.needs_purchase: "Needs purchase",
}

_LEGACY_STATUS_CODES = {
    "green": EquipmentStatus.normal,
    "yellow": EquipmentStatus.needs_replacement,
    "red": EquipmentStatus.needs_purchase,
}


class ImportMode(str, Enum):
    """How an import treats data already in the store."""

    merge = "merge"  # Additive: existing records are kept.
    replace = "replace"  # Destructive: purge everything, then insert.
