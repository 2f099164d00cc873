"""Load-time normalization tests"""

import pytest

from questsmith.core.blueprint.enums import RewardType
from questsmith.core.blueprint.normalize import (
    coerce_enum,
    extract_type_name,
    migrate_npc_id,
    normalize_hex,
    strip_ui_prefix,
)


class TestStripUiPrefix:
    def test_prefixed(self):
        assert strip_ui_prefix("System.Windows.Controls.ComboBoxItem: Thursday") == "Thursday"

    def test_plain(self):
        assert strip_ui_prefix(" Monday ") == "Monday"

    def test_none(self):
        assert strip_ui_prefix(None) == ""


class TestExtractTypeName:
    def test_display_name(self):
        assert extract_type_name("Apartment Building (ApartmentBuilding)") == "ApartmentBuilding"

    def test_plain(self):
        assert extract_type_name("NorthApartments") == "NorthApartments"


class TestNormalizeHex:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("#abc", "#FFAABBCC"),
            ("#8abc", "#88AABBCC"),
            ("2d2013", "#FF2D2013"),
            ("#80ff0000", "#80FF0000"),
        ],
    )
    def test_expansion(self, value, expected):
        assert normalize_hex(value) == expected

    @pytest.mark.parametrize("value", [None, "", "#12345", "#GGGGGG"])
    def test_fallback(self, value):
        assert normalize_hex(value, "#FF000000") == "#FF000000"


class TestMigrateNpcId:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("BobbyCooley", "bobby_cooley"),
            ("bobby_cooley", "bobby_cooley"),
            ("Bobby Cooley", "bobby_cooley"),
            ("", ""),
        ],
    )
    def test_migrate(self, value, expected):
        assert migrate_npc_id(value) == expected


class TestCoerceEnum:
    def test_value_and_name(self):
        assert coerce_enum(RewardType, "Money", RewardType.XP) is RewardType.MONEY
        assert coerce_enum(RewardType, "ITEM", RewardType.XP) is RewardType.ITEM

    def test_missing_uses_default(self):
        assert coerce_enum(RewardType, None, RewardType.XP) is RewardType.XP

    def test_ordinal(self):
        assert coerce_enum(RewardType, 2, RewardType.XP) is RewardType.ITEM
        assert coerce_enum(RewardType, 9, RewardType.XP) is None

    def test_bool_rejected(self):
        assert coerce_enum(RewardType, True, RewardType.XP) is None

    def test_unknown(self):
        assert coerce_enum(RewardType, "Gold", RewardType.XP) is None
