"""Default equipment categories.

The list seeds the category picker; ``Equipment.category`` is a plain string,
so user-defined categories are accepted as well.
"""

from __future__ import annotations

from typing import Tuple

DEFAULT_CATEGORIES: Tuple[str, ...] = (
    "Tent/Tarp",
    "Bedding",
    "Cookware",
    "Lighting",
    "Fire/Heating",
    "Table/Chair",
    "Storage",
    "Clothing",
    "Hygiene",
    "Safety/First Aid",
    "Recreation",
    "Electronics",
    "Other",
)


def is_default_category(category: str) -> bool:
    """Return True if ``category`` is one of the built-in categories."""
    return category in DEFAULT_CATEGORIES
