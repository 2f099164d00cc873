"""Quest class generation tests"""

from dataclasses import replace

import pytest

from questsmith.core.blueprint.enums import DataFieldType, RewardType
from questsmith.core.blueprint.models import (
    DataClassField,
    QuestBlueprint,
    QuestObjective,
    QuestReward,
)
from questsmith.core.codegen.options import GeneratorOptions
from questsmith.core.codegen.quest_generator import (
    default_value,
    generate_quest,
    icon_resource_name,
    quest_class_name,
    quest_identifier,
    reward_statement,
)


def _between(source: str, start: str, end: str) -> str:
    return source[source.index(start) : source.index(end)]


class TestGenerateQuest:
    """Whole-class output"""

    def test_none_raises(self):
        with pytest.raises(TypeError, match="Blueprint cannot be null"):
            generate_quest(None)

    def test_class_and_namespace(self, go_home_quest):
        source = generate_quest(go_home_quest)
        assert "namespace Schedule1Mods.Quests" in source
        assert "public class GoHomeQuest : Quest" in source
        assert 'public const string QuestIdentifier = "go_home_quest";' in source

    def test_banner_and_aliases(self, go_home_quest):
        source = generate_quest(go_home_quest)
        assert source.startswith("// ===")
        assert "// Schedule1ModdingTool generated quest blueprint" in source
        assert "using S1Quests = Il2CppScheduleOne.Quests;" in source
        assert source.index("#endif") < source.index("using System;")

    def test_deterministic(self, go_home_quest):
        assert generate_quest(go_home_quest) == generate_quest(go_home_quest)

    def test_duplicate_objective_names(self, go_home_quest):
        source = generate_quest(go_home_quest)
        assert "private QuestEntry goHome;" in source
        assert "private QuestEntry goHome2;" in source

    def test_handler_field_declared_and_used(self, go_home_quest):
        source = generate_quest(go_home_quest)
        assert "private Action _OnDealCompletedHandler;" in source
        assert "npc.Customer.OnDealCompleted += _OnDealCompletedHandler;" in source

    def test_blank_class_name_uses_default(self):
        source = generate_quest(QuestBlueprint())
        assert "public class GeneratedQuest : Quest" in source
        assert 'QuestIdentifier = "GeneratedQuest";' in source

    def test_indent_option(self, go_home_quest):
        source = generate_quest(go_home_quest, GeneratorOptions(indent_size=2))
        assert "\n  public class GoHomeQuest : Quest\n" in source

    def test_source_comments_off(self, go_home_quest):
        source = generate_quest(
            go_home_quest, GeneratorOptions(emit_source_comments=False)
        )
        assert "Generated from:" not in source

    def test_custom_namespace_sanitized(self, go_home_quest):
        quest = replace(go_home_quest, namespace="My Mods.Quests")
        assert "namespace My_Mods.Quests" in generate_quest(quest)


class TestLifecycle:
    """OnCreated and OnLoaded"""

    def test_on_created_skips_when_loaded(self, go_home_quest):
        body = _between(
            generate_quest(go_home_quest), "void OnCreated()", "void OnLoaded()"
        )
        assert "if (QuestEntries.Count > 0)" in body
        assert 'goHome = AddEntry("Head home");' in body
        assert "goHome.Begin();" in body

    def test_start_triggered_entry_starts_inactive(self, go_home_quest, deal_trigger):
        objective = replace(go_home_quest.objectives[1], start_triggers=(deal_trigger,))
        quest = replace(
            go_home_quest, objectives=(go_home_quest.objectives[0], objective)
        )
        body = _between(generate_quest(quest), "void OnCreated()", "void OnLoaded()")
        assert "goHome2.SetState(QuestState.Inactive);" in body
        assert "goHome2.Begin();" not in body

    def test_auto_start_disabled(self):
        quest = QuestBlueprint(
            objectives=(QuestObjective(name="wait", title="Wait", auto_start=False),)
        )
        source = generate_quest(quest)
        assert "wait.SetState(QuestState.Inactive);" in source
        assert "wait.Begin();" not in source

    def test_poi_position(self):
        quest = QuestBlueprint(
            objectives=(
                QuestObjective(
                    name="visit",
                    title="Visit",
                    has_location=True,
                    location_x=10,
                    location_y=0.5,
                    location_z=-2,
                ),
            )
        )
        source = generate_quest(quest)
        assert 'visit = AddEntry("Visit", new Vector3(10f, 0.5f, -2f));' in source
        assert "visit.POIPosition = new Vector3(10f, 0.5f, -2f);" in source

    def test_on_loaded_never_sets_state(self, go_home_quest):
        body = _between(
            generate_quest(go_home_quest), "void OnLoaded()", "void SubscribeToTriggers()"
        )
        assert "if (QuestEntries.Count == 0)" in body
        assert "SetState" not in body
        assert ".Begin()" not in body

    def test_no_objectives(self):
        source = generate_quest(QuestBlueprint(objectives=()))
        assert 'var defaultEntry = AddEntry("Describe your first objective");' in source
        assert "// No objectives defined, nothing to rebuild" in source
        assert "private QuestEntry" not in source


class TestOptionalSections:
    def test_create_internal_only_when_needed(self, go_home_quest):
        assert "CreateInternal" not in generate_quest(go_home_quest)
        source = generate_quest(replace(go_home_quest, track_on_begin=False))
        assert "S1Quest.TrackOnBegin = false;" in source
        assert "S1Quest.AutoCompleteOnAllEntriesComplete" not in source

    def test_rewards(self, go_home_quest):
        quest = replace(go_home_quest, rewards=(QuestReward(RewardType.MONEY, 250),))
        source = generate_quest(quest)
        assert "Money.ChangeCashBalance(250f);" in source
        assert "GrantQuestRewards();" in source

    def test_rewards_disabled(self, go_home_quest):
        quest = replace(
            go_home_quest,
            quest_rewards=False,
            rewards=(QuestReward(RewardType.MONEY, 250),),
        )
        assert "GrantQuestRewards" not in generate_quest(quest)

    def test_custom_icon(self, go_home_quest):
        quest = replace(
            go_home_quest,
            custom_icon=True,
            icon_file_name="icons/home.png",
            mod_name="HomeMod",
        )
        source = generate_quest(quest)
        assert "protected override Sprite? QuestIcon => LoadCustomIcon();" in source
        assert 'GetManifestResourceStream("HomeMod.Resources.home.png");' in source

    def test_custom_icon_without_file(self, go_home_quest):
        source = generate_quest(replace(go_home_quest, custom_icon=True))
        body = _between(source, "LoadCustomIcon()\n", "void SubscribeToTriggers()")
        assert "return null;" in body
        assert "GetManifestResourceStream" not in body

    def test_data_class(self, go_home_quest):
        quest = replace(
            go_home_quest,
            generate_data_class=True,
            data_class_fields=(
                DataClassField("visits", DataFieldType.INT, "3"),
                DataClassField("completed", DataFieldType.BOOL, "true"),
                DataClassField("", DataFieldType.STRING, "ignored"),
            ),
        )
        source = generate_quest(quest)
        assert "public bool Completed { get; set; }" in source
        assert "public int visits { get; set; } = 3;" in source
        assert "public bool completed2 { get; set; } = true;" in source
        assert '[SaveableField("GoHomeQuestData")]' in source
        assert "ignored" not in source


class TestHelpers:
    @pytest.mark.parametrize(
        "field_type, text, expected",
        [
            (DataFieldType.BOOL, "TRUE", "true"),
            (DataFieldType.BOOL, "yes", "false"),
            (DataFieldType.INT, "-4", "-4"),
            (DataFieldType.INT, "4.5", "0"),
            (DataFieldType.INT, "-2147483648", "-2147483648"),
            (DataFieldType.INT, "3000000000", "0"),
            (DataFieldType.FLOAT, "1.5", "1.5f"),
            (DataFieldType.FLOAT, "abc", "0f"),
            (DataFieldType.FLOAT, "inf", "0f"),
            (DataFieldType.FLOAT, "nan", "0f"),
            (DataFieldType.STRING, 'say "hi"', '"say \\"hi\\""'),
            (DataFieldType.STRING, "", "string.Empty"),
            (DataFieldType.LIST_STRING, "a, b\nc", 'new List<string> { "a", "b", "c" }'),
            (DataFieldType.LIST_STRING, "", "new List<string>()"),
        ],
    )
    def test_default_value(self, field_type, text, expected):
        assert default_value(DataClassField("x", field_type, text)) == expected

    def test_reward_statements(self):
        assert reward_statement(QuestReward(RewardType.XP, 50)) == "// XP reward: 50"
        assert reward_statement(QuestReward(RewardType.ITEM)).startswith("// Item reward skipped")
        assert (
            reward_statement(QuestReward(RewardType.ITEM, item_id="cuke", quantity=2))
            == '// Item reward: "cuke" x2'
        )

    def test_names(self):
        quest = QuestBlueprint(class_name="delivery run")
        assert quest_class_name(quest) == "DeliveryRun"
        assert quest_identifier(quest) == "DeliveryRun"
        assert quest_identifier(replace(quest, quest_id=" run ")) == "run"

    def test_icon_resource_name(self):
        quest = QuestBlueprint(mod_name="Pack", icon_file_name="C:\\icons\\a.png")
        assert icon_resource_name(quest) == "Pack.Resources.a.png"
