"""SubscribeToTriggers() emission tests"""

from questsmith.core.blueprint.enums import FinishType, TriggerTarget, TriggerType
from questsmith.core.blueprint.models import QuestBlueprint, QuestObjective, QuestTrigger
from questsmith.core.codegen import trigger_subscription
from questsmith.core.codegen.code_builder import CodeBuilder
from questsmith.core.codegen.trigger_collector import collect


def _render(quest: QuestBlueprint) -> str:
    builder = CodeBuilder()
    trigger_subscription.emit(builder, quest, collect(quest))
    return builder.build()


class TestNpcSubscription:
    """NPC instance events"""

    def test_resolves_npc_and_attaches_to_component(self, go_home_quest):
        source = _render(go_home_quest)
        assert 'var npc = NPC.All.FirstOrDefault(n => n.ID == "bobby_cooley");' in source
        assert "_OnDealCompletedHandler ??= () =>" in source
        assert "npc.Customer.OnDealCompleted -= _OnDealCompletedHandler;" in source
        assert "npc.Customer.OnDealCompleted += _OnDealCompletedHandler;" in source

    def test_objective_action_guarded_by_entry(self, go_home_quest):
        source = _render(go_home_quest)
        assert "if (this.goHome != null)" in source
        assert "this.goHome.Complete();" in source

    def test_entries_named_like_callback_locals(self):
        """Entry fields stay reachable when a local or lambda parameter shares their name"""
        objectives = tuple(
            QuestObjective(
                name=name,
                title=name,
                finish_triggers=(
                    QuestTrigger(
                        trigger_type=TriggerType.NPC_EVENT_TRIGGER,
                        target_action="NPCRelationship.OnChanged",
                        target_npc_id="kyle",
                        trigger_target=TriggerTarget.OBJECTIVE_FINISH,
                        objective_index=index,
                    ),
                ),
            )
            for index, name in enumerate(("npc", "delta"))
        )
        source = _render(QuestBlueprint(objectives=objectives))
        assert "this.npc.Complete();" in source
        assert "this.delta.Complete();" in source
        assert "if (npc != null)" not in source
        assert "if (delta != null)" not in source

    def test_missing_npc_logged_at_runtime(self, go_home_quest):
        source = _render(go_home_quest)
        assert "if (npc == null)" in source
        assert "NPC 'bobby_cooley' not found" in source

    def test_subscription_wrapped_in_try(self, go_home_quest):
        source = _render(go_home_quest)
        assert "catch (Exception ex)" in source
        assert "Failed to subscribe to objective trigger" in source

    def test_blank_npc_id_skipped(self):
        quest = QuestBlueprint(
            quest_triggers=(
                QuestTrigger(
                    trigger_type=TriggerType.NPC_EVENT_TRIGGER,
                    target_action="NPC.OnDeath",
                ),
            )
        )
        source = _render(quest)
        assert "// Trigger skipped (NPC.OnDeath): no target NPC id" in source
        assert "NPC.All" not in source

    def test_relationship_event_arity(self):
        quest = QuestBlueprint(
            quest_triggers=(
                QuestTrigger(
                    trigger_type=TriggerType.NPC_EVENT_TRIGGER,
                    target_action="NPCRelationship.OnUnlocked",
                    target_npc_id="kyle",
                ),
            )
        )
        source = _render(quest)
        assert "_OnUnlockedHandler ??= (type, notify) =>" in source
        assert "npc.Relationship.OnUnlocked += _OnUnlockedHandler;" in source


class TestQuestSubscription:
    """Events on other quests and their entries"""

    def test_quest_event(self):
        quest = QuestBlueprint(
            quest_triggers=(
                QuestTrigger(
                    trigger_type=TriggerType.QUEST_EVENT_TRIGGER,
                    target_action="Quest.OnComplete",
                    target_quest_id="intro",
                ),
            )
        )
        source = _render(quest)
        assert 'QuestManager.GetQuestByIdentifier("intro");' in source
        assert "targetQuest.OnComplete += _OnCompleteHandler;" in source
        assert "Begin();" in source

    def test_specific_entry(self):
        quest = QuestBlueprint(
            quest_triggers=(
                QuestTrigger(
                    trigger_type=TriggerType.QUEST_EVENT_TRIGGER,
                    target_action="QuestEntry.OnComplete",
                    target_quest_id="intro",
                    target_quest_entry_index=2,
                ),
            )
        )
        assert "targetQuest.QuestEntries[2].OnComplete += " in _render(quest)

    def test_every_entry(self):
        quest = QuestBlueprint(
            quest_triggers=(
                QuestTrigger(
                    trigger_type=TriggerType.QUEST_EVENT_TRIGGER,
                    target_action="QuestEntry.OnBegin",
                    target_quest_id="intro",
                ),
            )
        )
        source = _render(quest)
        assert "foreach (var targetEntry in targetQuest.QuestEntries)" in source
        assert "targetEntry.OnBegin += _OnBeginHandler;" in source

    def test_blank_quest_id_skipped(self):
        quest = QuestBlueprint(
            quest_triggers=(
                QuestTrigger(
                    trigger_type=TriggerType.QUEST_EVENT_TRIGGER,
                    target_action="Quest.OnFail",
                ),
            )
        )
        assert "// Trigger skipped (Quest.OnFail): no target quest id" in _render(quest)


class TestStaticSubscription:
    """Class-level events"""

    def test_inline_lambda(self):
        quest = QuestBlueprint(
            quest_triggers=(QuestTrigger(target_action="TimeManager.OnSleepEnd"),)
        )
        source = _render(quest)
        assert "TimeManager.OnSleepEnd += (minutes) =>" in source
        assert "??=" not in source

    def test_player_death_uses_local_player(self):
        quest = QuestBlueprint(
            quest_triggers=(QuestTrigger(target_action="Player.OnDeath"),)
        )
        source = _render(quest)
        assert "if (Player.Local != null)" in source
        assert "Player.Local.OnDeath += () =>" in source

    def test_malformed_action_skipped(self):
        quest = QuestBlueprint(quest_triggers=(QuestTrigger(target_action="OnDayPass"),))
        assert "// Trigger skipped (OnDayPass): expected Class.Event" in _render(quest)

    def test_finish_trigger_calls_finish_type(self):
        quest = QuestBlueprint(
            quest_finish_triggers=(
                QuestTrigger(
                    target_action="TimeManager.OnWeekPass",
                    trigger_target=TriggerTarget.QUEST_FINISH,
                    finish_type=FinishType.FAIL,
                ),
            )
        )
        source = _render(quest)
        assert "TimeManager.OnWeekPass += () =>" in source
        assert "Fail();" in source

    def test_objective_start(self):
        quest = QuestBlueprint(
            objectives=(
                QuestObjective(
                    name="wait",
                    start_triggers=(
                        QuestTrigger(
                            target_action="TimeManager.OnDayPass",
                            trigger_target=TriggerTarget.OBJECTIVE_START,
                            objective_index=0,
                        ),
                    ),
                ),
            )
        )
        source = _render(quest)
        assert "// Objective trigger: TimeManager.OnDayPass -> wait.Begin()" in source
        assert "wait.Begin();" in source


class TestNoTriggers:
    def test_placeholder_comment(self):
        source = _render(QuestBlueprint())
        assert "private void SubscribeToTriggers()" in source
        assert "// No triggers configured for this quest" in source
