"""Domain reference data shared by the database layer and the backup serializer."""

from .categories import DEFAULT_CATEGORIES
from .enums import EquipmentStatus, ImportMode

__all__ = [
    "DEFAULT_CATEGORIES",
    "EquipmentStatus",
    "ImportMode",
]
