"""Generation Service: blueprint snapshot in, C# source out

Dispatches on blueprint kind, builds generator options from settings and
logs what was produced. Generation itself stays in core.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Optional, Union

from questsmith.config import Settings, settings
from questsmith.core.blueprint.models import NpcBlueprint, QuestBlueprint
from questsmith.core.codegen.npc_generator import generate_npc, npc_class_name
from questsmith.core.codegen.options import GeneratorOptions
from questsmith.core.codegen.quest_generator import generate_quest, quest_class_name
from questsmith.core.codegen.validation import (
    ValidationResult,
    validate_npc,
    validate_quest,
)

logger = logging.getLogger(__name__)

Blueprint = Union[QuestBlueprint, NpcBlueprint]


@dataclass(frozen=True)
class GenerationResult:
    class_name: str
    kind: str  # "quest" | "npc"
    source: str
    warnings: list[str] = field(default_factory=list)


def options_from_settings(config: Settings) -> GeneratorOptions:
    return GeneratorOptions(
        indent_size=config.INDENT_SIZE,
        emit_source_comments=config.EMIT_SOURCE_COMMENTS,
        default_quest_namespace=config.DEFAULT_QUEST_NAMESPACE,
        default_npc_namespace=config.DEFAULT_NPC_NAMESPACE,
    )


class GenerationService:
    """Entry point for quest and NPC code generation"""

    def __init__(self, options: Optional[GeneratorOptions] = None):
        self._options = options or options_from_settings(settings)

    @property
    def options(self) -> GeneratorOptions:
        return self._options

    # === Generation ===

    def generate(self, blueprint: Blueprint) -> GenerationResult:
        """Generate source for a quest or NPC blueprint.

        Raises:
            TypeError: blueprint is None or not a blueprint type.
        """
        if blueprint is None:
            raise TypeError("Blueprint cannot be null")

        started = time.perf_counter()
        if isinstance(blueprint, QuestBlueprint):
            kind = "quest"
            class_name = quest_class_name(blueprint)
            source = generate_quest(blueprint, self._options)
        elif isinstance(blueprint, NpcBlueprint):
            kind = "npc"
            class_name = npc_class_name(blueprint)
            source = generate_npc(blueprint, self._options)
        else:
            raise TypeError(
                f"Unsupported blueprint type: {type(blueprint).__name__}"
            )
        elapsed_ms = (time.perf_counter() - started) * 1000

        validation = self.validate(blueprint)
        for warning in validation.warnings:
            logger.warning("%s %s: %s", kind, class_name, warning)

        logger.info(
            "Generated %s %s (%d chars, %.1f ms)",
            kind,
            class_name,
            len(source),
            elapsed_ms,
        )
        return GenerationResult(
            class_name=class_name,
            kind=kind,
            source=source,
            warnings=list(validation.warnings),
        )

    # === Validation ===

    def validate(self, blueprint: Optional[Blueprint]) -> ValidationResult:
        """Advisory check; never blocks generation."""
        if isinstance(blueprint, NpcBlueprint):
            return validate_npc(blueprint)
        if blueprint is None or isinstance(blueprint, QuestBlueprint):
            return validate_quest(blueprint)
        raise TypeError(f"Unsupported blueprint type: {type(blueprint).__name__}")
