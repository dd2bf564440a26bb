"""Unit tests for domain enums and reference data."""

from __future__ import annotations

import pytest

from campcheck.core.models import DEFAULT_CATEGORIES, EquipmentStatus, ImportMode
from campcheck.core.models.categories import is_default_category


class TestEquipmentStatus:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("normal", EquipmentStatus.normal),
            ("needs-replacement", EquipmentStatus.needs_replacement),
            ("needs-purchase", EquipmentStatus.needs_purchase),
            ("green", EquipmentStatus.normal),
            ("yellow", EquipmentStatus.needs_replacement),
            ("red", EquipmentStatus.needs_purchase),
            (EquipmentStatus.needs_purchase, EquipmentStatus.needs_purchase),
        ],
    )
    def test_from_value(self, raw, expected):
        assert EquipmentStatus.from_value(raw) is expected

    def test_from_value_rejects_unknown(self):
        with pytest.raises(ValueError):
            EquipmentStatus.from_value("broken")

    def test_labels(self):
        assert EquipmentStatus.normal.label == "Normal"
        assert EquipmentStatus.needs_replacement.label == "Needs replacement"
        assert EquipmentStatus.needs_purchase.label == "Needs purchase"


class TestCategories:
    def test_default_categories(self):
        assert DEFAULT_CATEGORIES[0] == "Tent/Tarp"
        assert DEFAULT_CATEGORIES[-1] == "Other"
        assert len(DEFAULT_CATEGORIES) == len(set(DEFAULT_CATEGORIES))

    def test_is_default_category(self):
        assert is_default_category("Cookware")
        assert not is_default_category("Fishing")


def test_import_modes():
    assert ImportMode("merge") is ImportMode.merge
    assert ImportMode("replace") is ImportMode.replace
