"""Identifier sanitizer tests"""

import pytest

from questsmith.core.codegen.identifiers import (
    IdentifierStyle,
    ensure_unique,
    is_valid_class_name,
    is_valid_npc_id,
    make_identifier,
    normalize_class_name,
    normalize_namespace,
    normalize_npc_id,
)


class TestMakeIdentifier:
    """Sanitizing free text"""

    @pytest.mark.parametrize("candidate", [None, "", "   "])
    def test_blank_uses_fallback(self, candidate):
        assert make_identifier(candidate, "Fallback") == "Fallback"

    def test_raw_replaces_invalid_characters(self):
        assert make_identifier("go home", "x") == "go_home"

    def test_raw_strips_trailing_underscores(self):
        assert make_identifier("done!", "x") == "done"

    def test_raw_leading_digit_prefixed(self):
        assert make_identifier("9lives", "x") == "_9lives"

    def test_raw_nothing_valid_uses_fallback(self):
        assert make_identifier("!!!", "fallback") == "fallback"

    def test_pascal(self):
        assert make_identifier("my quest", "X", IdentifierStyle.PASCAL) == "MyQuest"
        assert make_identifier("myQuest", "X", IdentifierStyle.PASCAL) == "MyQuest"

    def test_camel(self):
        assert make_identifier("go_home", "x", IdentifierStyle.CAMEL) == "goHome"
        assert make_identifier("Go Home", "x", IdentifierStyle.CAMEL) == "goHome"

    def test_styled_leading_digit_uses_fallback(self):
        assert (
            make_identifier("1st step", "objective1", IdentifierStyle.CAMEL)
            == "objective1"
        )

    def test_keyword_escaped(self):
        assert make_identifier("class", "x") == "@class"
        assert make_identifier("event", "x", IdentifierStyle.CAMEL) == "@event"


class TestEnsureUnique:
    """Collision-free naming within one pass"""

    def test_first_use_keeps_base(self):
        used: set[str] = set()
        assert ensure_unique("goHome", used, 1) == "goHome"
        assert "gohome" in used

    def test_collision_appends_index(self):
        used: set[str] = set()
        ensure_unique("goHome", used, 1)
        assert ensure_unique("goHome", used, 2) == "goHome2"

    def test_case_insensitive(self):
        used: set[str] = set()
        ensure_unique("goHome", used, 1)
        assert ensure_unique("GoHome", used, 2) == "GoHome2"

    def test_suffix_collision_extends(self):
        used: set[str] = set()
        ensure_unique("go", used, 1)
        ensure_unique("go2", used, 1)
        assert ensure_unique("go", used, 2) == "go2_1"

    def test_empty_base(self):
        assert ensure_unique("", set(), 3) == "item3"


class TestNamespaces:
    def test_blank_uses_default(self):
        assert normalize_namespace("", "Schedule1Mods.Quests") == "Schedule1Mods.Quests"

    def test_segments_sanitized(self):
        assert normalize_namespace("Acme Mods.Quests", "D") == "Acme_Mods.Quests"

    def test_empty_segments_dropped(self):
        assert normalize_namespace("Acme..Quests", "D") == "Acme.Quests"


class TestEditorHelpers:
    """Validation helpers used by the editor"""

    @pytest.mark.parametrize("value", ["bobby_cooley", "kyle", "npc_2"])
    def test_valid_npc_ids(self, value):
        assert is_valid_npc_id(value)

    @pytest.mark.parametrize("value", ["BobbyCooley", "_bobby", "bobby_", "a__b", ""])
    def test_invalid_npc_ids(self, value):
        assert not is_valid_npc_id(value)

    def test_normalize_npc_id(self):
        assert normalize_npc_id("Bobby Cooley") == "bobby_cooley"
        assert normalize_npc_id("BobbyCooley") == "bobby_cooley"

    def test_class_names(self):
        assert is_valid_class_name("DeliveryRun")
        assert not is_valid_class_name("deliveryRun")
        assert normalize_class_name("delivery run") == "DeliveryRun"
        assert normalize_class_name("2nd run") == "Class2ndRun"
