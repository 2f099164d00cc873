"""SubscribeToTriggers() emitter

Each trigger becomes one guarded subscription block. Where the event lives
depends on the trigger type:

- NPC instance events resolve the NPC by id at runtime and attach to
  ``npc``, ``npc.Customer``, ``npc.Dealer`` or ``npc.Relationship``.
- Quest instance events resolve another quest by id and attach to it or
  to its entries.
- Static events attach to ``Class.Event`` directly, except
  ``Player.OnDeath`` which lives on ``Player.Local``.

Lookup misses and subscription failures are logged by the generated code
at runtime; they never stop generation.
"""

from typing import Optional

from questsmith.core.blueprint.enums import TriggerType
from questsmith.core.blueprint.models import QuestBlueprint, QuestTrigger
from questsmith.core.codegen.code_builder import CodeBuilder
from questsmith.core.codegen.formatting import (
    escape_interpolated,
    escape_string,
    string_literal,
)
from questsmith.core.codegen.identifiers import make_identifier
from questsmith.core.codegen.naming import all_names
from questsmith.core.codegen.trigger_catalog import (
    ComponentKind,
    EventSignature,
    KnownEvent,
    signature_for,
)
from questsmith.core.codegen.trigger_collector import (
    HandlerDescriptor,
    TriggerCategory,
    find_handler,
    quest_start_triggers,
)
from questsmith.core.logging import get_logger

logger = get_logger(__name__)


def emit(
    builder: CodeBuilder,
    quest: QuestBlueprint,
    handlers: list[HandlerDescriptor],
) -> None:
    """Write the SubscribeToTriggers() method for ``quest``."""
    builder.append_source_comment(
        "Quest.QuestTriggers, Quest.QuestFinishTriggers, "
        "Quest.Objectives[].StartTriggers, Quest.Objectives[].FinishTriggers"
    )
    builder.append_doc_comment("Subscribes to triggers for this quest and its objectives.")
    builder.open_block("private void SubscribeToTriggers()")

    if not quest.has_any_triggers:
        builder.append_comment("No triggers configured for this quest")
        builder.close_block()
        builder.append_line()
        return

    start_triggers = quest_start_triggers(quest)
    if start_triggers:
        builder.append_source_comment("Quest.QuestTriggers[] (TriggerTarget = QuestStart)")
        for position, trigger in enumerate(start_triggers):
            handler = find_handler(handlers, TriggerCategory.QUEST_START, position)
            _append_subscription(builder, trigger, handler, "Begin()")

    if quest.quest_finish_triggers:
        builder.append_source_comment("Quest.QuestFinishTriggers[]")
        for position, trigger in enumerate(quest.quest_finish_triggers):
            handler = find_handler(handlers, TriggerCategory.QUEST_FINISH, position)
            _append_subscription(
                builder, trigger, handler, trigger.finish_type.method_call
            )

    entry_names = all_names(quest)
    for index, objective in enumerate(quest.objectives):
        entry = entry_names[index]
        if objective.start_triggers:
            builder.append_source_comment(f"Objectives[{index}].StartTriggers[]")
        for position, trigger in enumerate(objective.start_triggers):
            handler = find_handler(
                handlers, TriggerCategory.OBJECTIVE_START, position, index
            )
            _append_subscription(builder, trigger, handler, "Begin()", entry)

        if objective.finish_triggers:
            builder.append_source_comment(f"Objectives[{index}].FinishTriggers[]")
        for position, trigger in enumerate(objective.finish_triggers):
            handler = find_handler(
                handlers, TriggerCategory.OBJECTIVE_FINISH, position, index
            )
            _append_subscription(builder, trigger, handler, "Complete()", entry)

    builder.close_block()
    builder.append_line()


def _append_subscription(
    builder: CodeBuilder,
    trigger: QuestTrigger,
    handler: Optional[HandlerDescriptor],
    action_method: str,
    entry: Optional[str] = None,
) -> None:
    action = trigger.target_action.strip()
    if not action:
        return

    skip_reason = _unresolvable_reason(trigger)
    if skip_reason:
        builder.append_comment(f"Trigger skipped ({escape_string(action)}): {skip_reason}")
        builder.append_line()
        logger.debug("Skipping trigger %s: %s", action, skip_reason)
        return

    if entry is None:
        builder.append_comment(
            f"Trigger: {escape_string(action)} -> {trigger.trigger_target.value}"
        )
        failure = "trigger"
    else:
        builder.append_comment(
            f"Objective trigger: {escape_string(action)} -> {entry}.{action_method}"
        )
        failure = "objective trigger"

    field_name = handler.field_name if handler else None
    builder.open_block("try")
    if trigger.trigger_type is TriggerType.NPC_EVENT_TRIGGER:
        _npc_subscription(builder, trigger, field_name, action_method, entry)
    elif trigger.trigger_type is TriggerType.QUEST_EVENT_TRIGGER:
        _quest_subscription(builder, trigger, field_name, action_method, entry)
    else:
        _static_subscription(builder, trigger, action_method, entry)
    builder.close_block()
    builder.open_block("catch (Exception ex)")
    builder.append_line(
        f'MelonLogger.Warning($"Failed to subscribe to {failure} '
        f'{escape_interpolated(action)}: {{ex.Message}}");'
    )
    builder.close_block()
    builder.append_line()


def _unresolvable_reason(trigger: QuestTrigger) -> Optional[str]:
    if trigger.trigger_type is TriggerType.NPC_EVENT_TRIGGER:
        if not trigger.target_npc_id.strip():
            return "no target NPC id"
    elif trigger.trigger_type is TriggerType.QUEST_EVENT_TRIGGER:
        if not trigger.target_quest_id.strip():
            return "no target quest id"
    elif len(trigger.target_action.strip().split(".")) != 2:
        return "expected Class.Event"
    return None


# === Callback shapes ===


def _append_callback(
    builder: CodeBuilder, header: str, action_method: str, entry: Optional[str]
) -> None:
    builder.append_line(header)
    builder.open_block()
    if entry is not None:
        builder.open_block(f"if (this.{entry} != null)")
        builder.append_line(f"this.{entry}.{action_method};")
        builder.close_block()
    else:
        builder.append_line(f"{action_method};")
    builder.close_block(";")


def _attach(
    builder: CodeBuilder,
    event_path: str,
    signature: EventSignature,
    field_name: Optional[str],
    action_method: str,
    entry: Optional[str],
) -> None:
    """Attach through the handler field when there is one, else inline."""
    lambda_params = signature.lambda_parameters
    if field_name:
        _append_callback(
            builder, f"{field_name} ??= {lambda_params} =>", action_method, entry
        )
        # detach first: at most one live subscription per handler
        builder.append_line(f"{event_path} -= {field_name};")
        builder.append_line(f"{event_path} += {field_name};")
    else:
        _append_callback(
            builder, f"{event_path} += {lambda_params} =>", action_method, entry
        )


# === Per trigger type ===


def _npc_subscription(
    builder: CodeBuilder,
    trigger: QuestTrigger,
    field_name: Optional[str],
    action_method: str,
    entry: Optional[str],
) -> None:
    npc_id = trigger.target_npc_id.strip()
    component = ComponentKind.from_component(trigger.component)
    event_path = f"{component.member_path}.{_member(trigger.event_name)}"

    builder.append_line(
        f"var npc = NPC.All.FirstOrDefault(n => n.ID == {string_literal(npc_id)});"
    )
    builder.open_block("if (npc == null)")
    builder.append_line(
        f"MelonLogger.Warning($\"[Quest] NPC '{escape_interpolated(npc_id)}' not found "
        f"when subscribing to trigger '{escape_interpolated(trigger.target_action)}'\");"
    )
    builder.close_block()
    builder.open_block("else")
    _attach(
        builder,
        event_path,
        signature_for(trigger.target_action),
        field_name,
        action_method,
        entry,
    )
    builder.close_block()


def _quest_subscription(
    builder: CodeBuilder,
    trigger: QuestTrigger,
    field_name: Optional[str],
    action_method: str,
    entry: Optional[str],
) -> None:
    quest_id = trigger.target_quest_id.strip()
    signature = signature_for(trigger.target_action)

    builder.append_line(
        "var targetQuest = QuestManager.GetQuestByIdentifier("
        f"{string_literal(quest_id)});"
    )
    builder.open_block("if (targetQuest == null)")
    builder.append_line(
        f"MelonLogger.Warning($\"[Quest] Quest '{escape_interpolated(quest_id)}' not found "
        f"when subscribing to trigger '{escape_interpolated(trigger.target_action)}'\");"
    )
    builder.close_block()
    builder.open_block("else")

    if trigger.component == "QuestEntry":
        entry_index = trigger.target_quest_entry_index
        if entry_index is not None:
            event_path = f"targetQuest.QuestEntries[{entry_index}].{_member(trigger.event_name)}"
            _attach(builder, event_path, signature, field_name, action_method, entry)
        else:
            builder.open_block("foreach (var targetEntry in targetQuest.QuestEntries)")
            _attach(
                builder,
                f"targetEntry.{_member(trigger.event_name)}",
                signature,
                field_name,
                action_method,
                entry,
            )
            builder.close_block()
    else:
        _attach(
            builder,
            f"targetQuest.{_member(trigger.event_name)}",
            signature,
            field_name,
            action_method,
            entry,
        )

    builder.close_block()


def _static_subscription(
    builder: CodeBuilder,
    trigger: QuestTrigger,
    action_method: str,
    entry: Optional[str],
) -> None:
    action = trigger.target_action.strip()
    event = KnownEvent.lookup(action)

    # Player.OnDeath is an instance event on the local player
    if event is KnownEvent.PLAYER_DEATH:
        builder.open_block("if (Player.Local != null)")
        _append_callback(builder, "Player.Local.OnDeath += () =>", action_method, entry)
        builder.close_block()
        return

    class_name, event_name = action.split(".")
    event_path = f"{_member(class_name)}.{_member(event_name)}"
    signature = signature_for(action)
    _append_callback(
        builder,
        f"{event_path} += {signature.lambda_parameters} =>",
        action_method,
        entry,
    )


def _member(name: str) -> str:
    return make_identifier(name, "OnTriggered")
