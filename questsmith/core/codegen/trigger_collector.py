"""Trigger handler collection

Walks a quest's triggers in a fixed order (quest start, quest finish, then
per objective its start and finish triggers) and assigns every instance
event trigger a class-unique handler field name. Static triggers subscribe
with inline lambdas and get no field.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from questsmith.core.blueprint.enums import TriggerTarget, TriggerType
from questsmith.core.blueprint.models import QuestBlueprint, QuestTrigger
from questsmith.core.codegen.identifiers import ensure_unique, make_identifier
from questsmith.core.codegen.trigger_catalog import signature_for
from questsmith.core.logging import get_logger

logger = get_logger(__name__)

_INSTANCE_TRIGGERS = (TriggerType.NPC_EVENT_TRIGGER, TriggerType.QUEST_EVENT_TRIGGER)


class TriggerCategory(str, Enum):
    QUEST_START = "QuestStart"
    QUEST_FINISH = "QuestFinish"
    OBJECTIVE_START = "ObjectiveStart"
    OBJECTIVE_FINISH = "ObjectiveFinish"


@dataclass(frozen=True)
class HandlerDescriptor:
    """A trigger paired with its handler field and activation call.

    ``position`` is the trigger's index inside the list it came from, which
    together with ``category`` and ``objective_index`` locates it again.
    """

    trigger: QuestTrigger
    field_name: str
    action_method: str
    category: TriggerCategory
    position: int
    objective_index: Optional[int] = None

    @property
    def delegate_type(self) -> str:
        return signature_for(self.trigger.target_action).delegate_type

    def matches(
        self,
        category: TriggerCategory,
        position: int,
        objective_index: Optional[int] = None,
    ) -> bool:
        return (
            self.category is category
            and self.position == position
            and self.objective_index == objective_index
        )


def needs_handler_field(trigger: QuestTrigger) -> bool:
    return trigger.trigger_type in _INSTANCE_TRIGGERS and bool(
        trigger.target_action.strip()
    )


def quest_start_triggers(quest: QuestBlueprint) -> list[QuestTrigger]:
    return [
        t for t in quest.quest_triggers if t.trigger_target is TriggerTarget.QUEST_START
    ]


def find_handler(
    handlers: list[HandlerDescriptor],
    category: TriggerCategory,
    position: int,
    objective_index: Optional[int] = None,
) -> Optional[HandlerDescriptor]:
    for handler in handlers:
        if handler.matches(category, position, objective_index):
            return handler
    return None


class _Collector:
    def __init__(self) -> None:
        self.handlers: list[HandlerDescriptor] = []
        self._used_names: set[str] = set()
        self._index = 0

    def _field_name(self, trigger: QuestTrigger) -> str:
        self._index += 1
        base = f"_{make_identifier(trigger.event_name, 'trigger').lstrip('@')}Handler"
        return ensure_unique(base, self._used_names, self._index)

    def add(
        self,
        trigger: QuestTrigger,
        action_method: str,
        category: TriggerCategory,
        position: int,
        objective_index: Optional[int] = None,
    ) -> None:
        if not needs_handler_field(trigger):
            return
        self.handlers.append(
            HandlerDescriptor(
                trigger=trigger,
                field_name=self._field_name(trigger),
                action_method=action_method,
                category=category,
                position=position,
                objective_index=objective_index,
            )
        )


def collect(quest: QuestBlueprint) -> list[HandlerDescriptor]:
    """Ordered handler descriptors for every trigger that needs a field."""
    if quest is None:
        raise TypeError("quest blueprint must not be None")

    collector = _Collector()

    for position, trigger in enumerate(quest_start_triggers(quest)):
        collector.add(trigger, "Begin()", TriggerCategory.QUEST_START, position)

    for position, trigger in enumerate(quest.quest_finish_triggers):
        collector.add(
            trigger,
            trigger.finish_type.method_call,
            TriggerCategory.QUEST_FINISH,
            position,
        )

    for index, objective in enumerate(quest.objectives):
        for position, trigger in enumerate(objective.start_triggers):
            collector.add(
                trigger, "Begin()", TriggerCategory.OBJECTIVE_START, position, index
            )
        for position, trigger in enumerate(objective.finish_triggers):
            collector.add(
                trigger, "Complete()", TriggerCategory.OBJECTIVE_FINISH, position, index
            )

    logger.debug("Collected %d trigger handler(s)", len(collector.handlers))
    return collector.handlers
