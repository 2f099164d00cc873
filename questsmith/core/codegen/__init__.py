"""Code generation engine

Public API:
- Generators: generate_quest, generate_npc (blueprint snapshot -> C# source)
- Validation: validate_quest, validate_npc, ValidationResult
- Building blocks: CodeBuilder, UsingsBuilder, make_identifier, ensure_unique
- Triggers: collect, HandlerDescriptor, available_triggers, validate_trigger
- Errors: CodeGenerationError, UnbalancedBlockError, BlueprintLoadError
"""

from questsmith.core.codegen.code_builder import CodeBuilder
from questsmith.core.codegen.errors import (
    BlueprintLoadError,
    CodeGenerationError,
    UnbalancedBlockError,
)
from questsmith.core.codegen.identifiers import (
    IdentifierStyle,
    ensure_unique,
    make_identifier,
)
from questsmith.core.codegen.npc_generator import generate_npc
from questsmith.core.codegen.options import GeneratorOptions
from questsmith.core.codegen.quest_generator import generate_quest
from questsmith.core.codegen.trigger_catalog import (
    KnownEvent,
    available_triggers,
    validate_trigger,
)
from questsmith.core.codegen.trigger_collector import HandlerDescriptor, collect
from questsmith.core.codegen.usings import UsingsBuilder
from questsmith.core.codegen.validation import (
    ValidationResult,
    validate_npc,
    validate_quest,
)

__all__ = [
    # generators
    "generate_npc",
    "generate_quest",
    "GeneratorOptions",
    # validation
    "ValidationResult",
    "validate_npc",
    "validate_quest",
    # building blocks
    "CodeBuilder",
    "IdentifierStyle",
    "UsingsBuilder",
    "ensure_unique",
    "make_identifier",
    # triggers
    "HandlerDescriptor",
    "KnownEvent",
    "available_triggers",
    "collect",
    "validate_trigger",
    # errors
    "BlueprintLoadError",
    "CodeGenerationError",
    "UnbalancedBlockError",
]
