"""Advisory blueprint validation

Reports problems the editor should surface. Nothing here blocks
generation: warnings describe the fallback the generator will apply.
"""

from dataclasses import dataclass, field
from typing import Optional

from questsmith.core.blueprint.models import NpcBlueprint, QuestBlueprint
from questsmith.core.codegen.identifiers import is_valid_npc_id
from questsmith.core.codegen.trigger_catalog import KnownEvent


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def error(self, message: str) -> None:
        self.is_valid = False
        self.errors.append(message)

    def warn(self, message: str) -> None:
        self.warnings.append(message)


def validate_quest(blueprint: Optional[QuestBlueprint]) -> ValidationResult:
    result = ValidationResult()
    if blueprint is None:
        result.error("Blueprint cannot be null")
        return result

    if not blueprint.class_name.strip():
        result.warn("Class name is empty, will use default 'GeneratedQuest'")
    if not blueprint.quest_title.strip():
        result.warn("Quest title is empty")
    if not blueprint.quest_id.strip():
        result.warn("Quest ID is empty, will use class name")
    if not blueprint.objectives:
        result.warn("Quest has no objectives")

    triggers = list(blueprint.quest_triggers) + list(blueprint.quest_finish_triggers)
    for objective in blueprint.objectives:
        triggers += list(objective.start_triggers) + list(objective.finish_triggers)
    for trigger in triggers:
        action = trigger.target_action.strip()
        if action and KnownEvent.lookup(action) is None:
            result.warn(f"Unknown trigger event '{action}'")

    return result


def validate_npc(blueprint: Optional[NpcBlueprint]) -> ValidationResult:
    result = ValidationResult()
    if blueprint is None:
        result.error("Blueprint cannot be null")
        return result

    if not blueprint.class_name.strip():
        result.warn("Class name is empty, will use default 'GeneratedNpc'")
    if not blueprint.npc_id.strip():
        result.warn("NPC ID is empty")
    elif not is_valid_npc_id(blueprint.npc_id):
        result.warn(f"NPC ID '{blueprint.npc_id}' is not in lower_snake_case")
    if not blueprint.first_name.strip() and not blueprint.last_name.strip():
        result.warn("NPC has no name")

    return result
