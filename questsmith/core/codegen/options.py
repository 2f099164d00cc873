"""Per-call generator options."""

from dataclasses import dataclass

from questsmith.core.blueprint.models import (
    DEFAULT_NPC_NAMESPACE,
    DEFAULT_QUEST_NAMESPACE,
)


@dataclass(frozen=True)
class GeneratorOptions:
    indent_size: int = 4
    emit_source_comments: bool = True  # "Generated from:" provenance lines
    default_quest_namespace: str = DEFAULT_QUEST_NAMESPACE
    default_npc_namespace: str = DEFAULT_NPC_NAMESPACE
