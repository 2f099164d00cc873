"""Quest class generator

Composes a complete ``Quest`` subclass from a ``QuestBlueprint``:

    banner -> alias block -> usings -> namespace -> class
        QuestIdentifier, data model, property overrides, CreateInternal,
        entry fields, OnCreated, OnLoaded, rewards, icon loader,
        trigger handler fields, SubscribeToTriggers

Entry field names come from ``naming.all_names`` and handler field names
from ``trigger_collector.collect``; both are computed once per call and
reused by every section that references them.
"""

import math
import re
from typing import Optional

from questsmith.core.blueprint.enums import DataFieldType, RewardType
from questsmith.core.blueprint.models import (
    DataClassField,
    QuestBlueprint,
    QuestObjective,
    QuestReward,
)
from questsmith.core.codegen import header, trigger_subscription
from questsmith.core.codegen.code_builder import CodeBuilder
from questsmith.core.codegen.formatting import (
    bool_literal,
    escape_interpolated,
    escape_string,
    float_literal,
    format_vector3,
    string_list_literal,
    string_literal,
)
from questsmith.core.codegen.identifiers import (
    IdentifierStyle,
    ensure_unique,
    make_identifier,
    normalize_namespace,
)
from questsmith.core.codegen.naming import all_names
from questsmith.core.codegen.options import GeneratorOptions
from questsmith.core.codegen.trigger_collector import HandlerDescriptor, collect
from questsmith.core.codegen.usings import UsingsBuilder, emit_quest_alias_block
from questsmith.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CLASS_NAME = "GeneratedQuest"

_CSHARP_TYPES = {
    DataFieldType.BOOL: "bool",
    DataFieldType.INT: "int",
    DataFieldType.FLOAT: "float",
    DataFieldType.STRING: "string",
    DataFieldType.LIST_STRING: "List<string>",
}

_EMPTY_DEFAULTS = {
    DataFieldType.BOOL: "false",
    DataFieldType.INT: "0",
    DataFieldType.FLOAT: "0f",
    DataFieldType.STRING: "string.Empty",
    DataFieldType.LIST_STRING: "new List<string>()",
}

_LIST_SEPARATORS = re.compile(r"[,\r\n]")
_INT_TEXT = re.compile(r"^[+-]?\d+$")
_INT32_MIN, _INT32_MAX = -(2**31), 2**31 - 1


def quest_class_name(quest: QuestBlueprint) -> str:
    return make_identifier(quest.class_name, DEFAULT_CLASS_NAME, IdentifierStyle.PASCAL)


def quest_identifier(quest: QuestBlueprint) -> str:
    """Runtime identifier; the class name when no quest id is set."""
    return quest.quest_id.strip() or quest_class_name(quest)


def generate_quest(
    quest: QuestBlueprint, options: Optional[GeneratorOptions] = None
) -> str:
    """Generate the C# source for one quest blueprint."""
    if quest is None:
        raise TypeError("Blueprint cannot be null")
    options = options or GeneratorOptions()

    builder = CodeBuilder(options.indent_size, options.emit_source_comments)
    class_name = quest_class_name(quest)
    namespace = normalize_namespace(quest.namespace, options.default_quest_namespace)

    header.emit(
        builder,
        "quest",
        quest.mod_name,
        quest.mod_version,
        quest.mod_author,
        quest.game_developer,
        quest.game_name,
    )
    emit_quest_alias_block(builder)
    UsingsBuilder().add_quest_usings().emit(builder)

    builder.open_block(f"namespace {namespace}")
    _emit_class(builder, quest, class_name)
    builder.close_block()

    logger.debug("Generated quest class %s.%s", namespace, class_name)
    return builder.build()


def _emit_class(builder: CodeBuilder, quest: QuestBlueprint, class_name: str) -> None:
    entry_names = all_names(quest)
    handlers = collect(quest)

    builder.append_source_comment("Quest.QuestTitle")
    builder.append_doc_comment(
        f'Auto-generated quest blueprint for "{escape_string(quest.quest_title)}".',
        "Customize the body to wire in game-specific logic.",
    )
    builder.open_block(f"public class {class_name} : Quest")

    builder.append_source_comment("Quest.QuestId (or Quest.ClassName if QuestId is empty)")
    builder.append_line(
        f"public const string QuestIdentifier = {string_literal(quest_identifier(quest))};"
    )
    builder.append_line()

    if quest.generate_data_class:
        _emit_data_class(builder, quest, class_name)

    _emit_properties(builder, quest)
    _emit_create_internal(builder, quest)
    _emit_entry_fields(builder, quest, entry_names)
    _emit_on_created(builder, quest, entry_names)
    _emit_on_loaded(builder, quest, entry_names)

    if quest.grants_rewards:
        _emit_rewards(builder, quest.rewards)
        _emit_on_completed(builder)

    if quest.custom_icon:
        _emit_icon_loader(builder, quest)

    _emit_handler_fields(builder, handlers)
    trigger_subscription.emit(builder, quest, handlers)

    builder.close_block()


# === Data model ===


def _emit_data_class(
    builder: CodeBuilder, quest: QuestBlueprint, class_name: str
) -> None:
    builder.append_source_comment("Quest.GenerateDataClass, Quest.DataClassFields[]")
    builder.append_line("[Serializable]")
    builder.open_block("public class QuestDataModel")
    builder.append_line("public bool Completed { get; set; }")

    used = {"completed"}
    written = 0
    for index, data_field in enumerate(quest.data_class_fields):
        if not data_field.field_name.strip():
            continue
        name = ensure_unique(
            make_identifier(data_field.field_name, "Field"), used, index + 1
        )
        type_name = _CSHARP_TYPES[data_field.field_type]
        if data_field.comment.strip():
            builder.append_doc_comment(escape_string(data_field.comment))
        builder.append_source_comment(
            f"DataClassFields[{index}] - {escape_string(data_field.field_name)} ({type_name})"
        )
        builder.append_line(
            f"public {type_name} {name} {{ get; set; }} = {default_value(data_field)};"
        )
        written += 1

    if written == 0:
        builder.append_comment("Add additional quest-specific fields here")

    builder.close_block()
    builder.append_line()
    builder.append_line(f'[SaveableField("{escape_string(class_name)}Data")]')
    builder.append_line("private QuestDataModel _data = new QuestDataModel();")
    builder.append_line()


def default_value(data_field: DataClassField) -> str:
    """Initializer expression for a data field, re-parsed against its type."""
    text = data_field.default_value.strip()
    field_type = data_field.field_type
    if not text:
        return _EMPTY_DEFAULTS[field_type]

    if field_type is DataFieldType.BOOL:
        lowered = text.lower()
        return lowered if lowered in ("true", "false") else "false"
    if field_type is DataFieldType.INT:
        if not _INT_TEXT.match(text):
            return "0"
        number = int(text)
        return str(number) if _INT32_MIN <= number <= _INT32_MAX else "0"
    if field_type is DataFieldType.FLOAT:
        try:
            number = float(text)
        except ValueError:
            return "0f"
        return float_literal(number) if math.isfinite(number) else "0f"
    if field_type is DataFieldType.STRING:
        return string_literal(data_field.default_value)

    items = [item.strip() for item in _LIST_SEPARATORS.split(text)]
    return string_list_literal(item for item in items if item)


# === Properties ===


def _emit_properties(builder: CodeBuilder, quest: QuestBlueprint) -> None:
    builder.append_source_comment("Quest.QuestTitle")
    builder.append_line(
        f"protected override string Title => {string_literal(quest.quest_title)};"
    )
    builder.append_source_comment("Quest.QuestDescription")
    builder.append_line(
        "protected override string Description => "
        f"{string_literal(quest.quest_description)};"
    )
    builder.append_source_comment("Quest.AutoBegin")
    builder.append_line(
        f"protected override bool AutoBegin => {bool_literal(quest.auto_begin)};"
    )
    if quest.custom_icon:
        builder.append_source_comment("Quest.CustomIcon")
        builder.append_line("protected override Sprite? QuestIcon => LoadCustomIcon();")
    builder.append_line()


def _emit_create_internal(builder: CodeBuilder, quest: QuestBlueprint) -> None:
    if quest.track_on_begin and quest.auto_complete_on_all_entries_complete:
        return

    builder.append_source_comment(
        "Quest.TrackOnBegin, Quest.AutoCompleteOnAllEntriesComplete"
    )
    builder.append_doc_comment(
        "Quest initialization - sets tracking and auto-complete behavior",
        "Called during quest construction, before base initialization",
    )
    builder.open_block("internal override void CreateInternal()")
    if not quest.track_on_begin:
        builder.append_line("S1Quest.TrackOnBegin = false;")
    if not quest.auto_complete_on_all_entries_complete:
        builder.append_line("S1Quest.AutoCompleteOnAllEntriesComplete = false;")
    builder.append_line()
    builder.append_line("base.CreateInternal();")
    builder.close_block()
    builder.append_line()


# === Entries and lifecycle ===


def _emit_entry_fields(
    builder: CodeBuilder, quest: QuestBlueprint, entry_names: list[str]
) -> None:
    if not quest.objectives:
        return

    builder.append_source_comment("Quest.Objectives[] - one field per objective")
    builder.append_comment("Quest entry fields for objectives")
    for index, objective in enumerate(quest.objectives):
        builder.append_source_comment(
            f'Objectives[{index}].Name = "{escape_string(objective.name)}"'
        )
        builder.append_line(f"private QuestEntry {entry_names[index]};")
    builder.append_line()


def _objective_label(objective: QuestObjective) -> str:
    return f'"{escape_string(objective.title)}" ({escape_string(objective.name)})'


def _objective_position(objective: QuestObjective) -> str:
    return format_vector3(
        objective.location_x, objective.location_y, objective.location_z
    )


def _emit_on_created(
    builder: CodeBuilder, quest: QuestBlueprint, entry_names: list[str]
) -> None:
    builder.append_source_comment("Quest.Objectives[]")
    builder.append_doc_comment(
        "Called when the quest is created. Sets up objectives, POI positions, "
        "and activates entries.",
        "Only creates entries if they don't already exist (e.g., from save data).",
    )
    builder.open_block("protected override void OnCreated()")
    builder.append_line("base.OnCreated();")
    builder.append_line()

    builder.append_comment("Skip entry creation if quest was loaded from save data")
    builder.open_block("if (QuestEntries.Count > 0)")
    builder.append_line("SubscribeToTriggers();")
    builder.append_line("return;")
    builder.close_block()
    builder.append_line()

    if not quest.objectives:
        builder.append_comment("Define at least one objective so the quest has progress steps.")
        builder.append_line('var defaultEntry = AddEntry("Describe your first objective");')
        builder.append_line("defaultEntry.Begin();")
        builder.append_line()

    for index, objective in enumerate(quest.objectives):
        entry = entry_names[index]
        builder.append_source_comment(f"Quest.Objectives[{index}]")
        builder.append_comment(f"Objective {_objective_label(objective)}")

        if objective.has_location and objective.create_poi:
            builder.append_line(
                f"{entry} = AddEntry({string_literal(objective.title)}, "
                f"{_objective_position(objective)});"
            )
        else:
            builder.append_line(f"{entry} = AddEntry({string_literal(objective.title)});")

        if objective.has_start_triggers:
            builder.append_line(f"{entry}.SetState(QuestState.Inactive);")
            builder.append_comment("Entry will be activated by start trigger")
        elif objective.auto_start:
            builder.append_line(f"{entry}.Begin();")
        else:
            builder.append_line(f"{entry}.SetState(QuestState.Inactive);")
            builder.append_comment("Entry starts inactive (AutoStart is disabled)")
        builder.append_line()

    builder.append_line("SubscribeToTriggers();")
    builder.close_block()
    builder.append_line()


def _emit_on_loaded(
    builder: CodeBuilder, quest: QuestBlueprint, entry_names: list[str]
) -> None:
    """OnLoaded recreates entries only; their state comes from the save."""
    builder.append_source_comment("Quest.Objectives[] (rebuild logic for save/load)")
    builder.append_doc_comment(
        "Called after quest data has been loaded from save files.",
        "Rebuilds quest entries if they were cleared during load.",
    )
    builder.open_block("protected override void OnLoaded()")
    builder.append_line("base.OnLoaded();")
    builder.append_line()

    if not quest.objectives:
        builder.append_comment("No objectives defined, nothing to rebuild")
    else:
        builder.append_comment("Rebuild entries if they were cleared during load")
        builder.open_block("if (QuestEntries.Count == 0)")
        for index, objective in enumerate(quest.objectives):
            entry = entry_names[index]
            builder.append_source_comment(f"Quest.Objectives[{index}]")
            builder.append_comment(f"Rebuild objective {_objective_label(objective)}")
            builder.append_line(f"{entry} = AddEntry({string_literal(objective.title)});")
            if objective.has_location:
                builder.append_line(
                    f"{entry}.POIPosition = {_objective_position(objective)};"
                )
            builder.append_comment(
                "Entry state will be restored from save data by the base game loader"
            )
            builder.append_line()
        builder.append_line("SubscribeToTriggers();")
        builder.close_block()

    builder.close_block()
    builder.append_line()


# === Rewards ===


def reward_statement(reward: QuestReward) -> str:
    if reward.reward_type is RewardType.MONEY:
        return f"Money.ChangeCashBalance({float_literal(reward.amount)});"
    if reward.reward_type is RewardType.XP:
        return f"// XP reward: {reward.amount}"
    if not reward.item_id.strip():
        return "// Item reward skipped: no item id"
    return f"// Item reward: {string_literal(reward.item_id)} x{reward.quantity}"


def _emit_rewards(builder: CodeBuilder, rewards: tuple[QuestReward, ...]) -> None:
    builder.append_source_comment("Quest.QuestRewards, Quest.QuestRewardsList[]")
    builder.open_block("private void GrantQuestRewards()")
    for reward in rewards:
        builder.append_line(reward_statement(reward))
    builder.close_block()
    builder.append_line()


def _emit_on_completed(builder: CodeBuilder) -> None:
    builder.open_block("protected override void OnCompleted()")
    builder.append_line("base.OnCompleted();")
    builder.append_line("GrantQuestRewards();")
    builder.close_block()
    builder.append_line()


# === Icon ===


def icon_resource_name(quest: QuestBlueprint) -> str:
    """Manifest resource name of the embedded icon file."""
    file_name = re.split(r"[\\/]", quest.icon_file_name.strip())[-1]
    return f"{quest.mod_name}.Resources.{file_name}"


def _emit_icon_loader(builder: CodeBuilder, quest: QuestBlueprint) -> None:
    builder.append_source_comment("Quest.CustomIcon, Quest.IconFileName")
    builder.open_block("private Sprite? LoadCustomIcon()")

    if not quest.icon_file_name.strip():
        builder.append_comment(
            "No icon file specified. Add a resource and select it in the quest settings."
        )
        builder.append_line("return null;")
        builder.close_block()
        builder.append_line()
        return

    builder.open_block("try")
    builder.append_line("var assembly = Assembly.GetExecutingAssembly();")
    builder.append_line()
    builder.append_line(
        "using var stream = assembly.GetManifestResourceStream("
        f"{string_literal(icon_resource_name(quest))});"
    )
    builder.open_block("if (stream != null)")
    builder.append_line("byte[] data = new byte[stream.Length];")
    builder.append_line("stream.Read(data, 0, data.Length);")
    builder.append_line("return ImageUtils.LoadImageRaw(data);")
    builder.close_block()
    builder.close_block()
    builder.open_block("catch (Exception ex)")
    builder.append_line(
        "MelonLogger.Msg($\"Failed to load quest icon "
        f"'{escape_interpolated(quest.icon_file_name)}': {{ex.Message}}\");"
    )
    builder.close_block()
    builder.append_line()
    builder.append_line("return null;")
    builder.close_block()
    builder.append_line()


# === Trigger handler fields ===


def _emit_handler_fields(
    builder: CodeBuilder, handlers: list[HandlerDescriptor]
) -> None:
    if not handlers:
        return

    builder.append_source_comment(
        "Quest.QuestTriggers, Quest.QuestFinishTriggers, Quest.Objectives[].StartTriggers, "
        "Quest.Objectives[].FinishTriggers"
    )
    builder.append_comment("Trigger event handlers")
    for handler in handlers:
        builder.append_line(f"private {handler.delegate_type} {handler.field_name};")
    builder.append_line()
