"""Entry field naming tests"""

from questsmith.core.blueprint.models import QuestBlueprint, QuestObjective
from questsmith.core.codegen.naming import all_names, name_at


def _quest(*names: str) -> QuestBlueprint:
    return QuestBlueprint(objectives=tuple(QuestObjective(name=n) for n in names))


class TestEntryNames:
    def test_camel_cased(self):
        assert all_names(_quest("go_home", "Find The Stash")) == ["goHome", "findTheStash"]

    def test_duplicates_made_unique(self):
        assert all_names(_quest("go_home", "go_home")) == ["goHome", "goHome2"]

    def test_case_insensitive_duplicates(self):
        names = all_names(_quest("goHome", "GoHome"))
        assert len({n.lower() for n in names}) == 2

    def test_blank_names_fall_back_to_position(self):
        assert all_names(_quest("", "  ", "x")) == ["objective1", "objective2", "x"]

    def test_name_at_matches_all_names(self):
        quest = _quest("a", "a", "b", "a")
        names = all_names(quest)
        assert [name_at(quest, i) for i in range(4)] == names

    def test_name_at_out_of_range(self):
        assert name_at(_quest("a"), 4) == "objective5"

    def test_repeatable(self):
        quest = _quest("go", "go", "stay")
        assert all_names(quest) == all_names(quest)

    def test_no_objectives(self):
        assert all_names(QuestBlueprint(objectives=())) == []
