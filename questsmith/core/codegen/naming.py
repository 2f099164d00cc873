"""Entry field naming

Field names for objective entries are referenced from several independently
emitted methods (field declarations, OnCreated, OnLoaded, trigger
subscriptions). They are always recomputed from the objective list with the
same sanitize-then-uniquify pass, so every section agrees on every name.
"""

from questsmith.core.blueprint.models import QuestBlueprint
from questsmith.core.codegen.identifiers import (
    IdentifierStyle,
    ensure_unique,
    make_identifier,
)


def all_names(quest: QuestBlueprint) -> list[str]:
    """One entry field name per objective, in objective order."""
    used: set[str] = set()
    names = []
    for index, objective in enumerate(quest.objectives, start=1):
        base = make_identifier(
            objective.name, f"objective{index}", IdentifierStyle.CAMEL
        )
        names.append(ensure_unique(base, used, index))
    return names


def name_at(quest: QuestBlueprint, index: int) -> str:
    """Entry field name for the objective at zero-based ``index``."""
    names = all_names(quest)
    if 0 <= index < len(names):
        return names[index]
    return f"objective{index + 1}"
