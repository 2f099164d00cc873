"""Using-directive set for generated files."""

from typing import Optional

from questsmith.core.codegen.code_builder import CodeBuilder

QUEST_USINGS = (
    "System",
    "System.Collections",
    "System.Collections.Generic",
    "System.Reflection",
    "System.Linq",
    "S1API.Quests",
    "S1API.Quests.Constants",
    "S1API.Saveables",
    "S1API.Internal.Utils",
    "S1API.Entities",
    "S1API.GameTime",
    "S1API.Console",
    "S1API.Money",
    "UnityEngine",
    "MelonLoader",
)

NPC_USINGS = (
    "System",
    "S1API.Entities",
    "S1API.Entities.Schedule",
    "S1API.GameTime",
    "S1API.Economy",
    "S1API.Products",
    "S1API.Properties",
    "S1API.Map",
    "S1API.Map.Buildings",
    "UnityEngine",
)

# Base-game quest types differ per runtime flavor
S1QUESTS_ALIAS_BLOCK = (
    "#if (IL2CPPMELON)",
    "using S1Quests = Il2CppScheduleOne.Quests;",
    "#elif (MONOMELON || MONOBEPINEX || IL2CPPBEPINEX)",
    "using S1Quests = ScheduleOne.Quests;",
    "#endif",
)


class UsingsBuilder:
    """Deduplicated, alphabetically sorted ``using`` directives."""

    def __init__(self) -> None:
        self._namespaces: set[str] = set()

    def add(self, *namespaces: Optional[str]) -> "UsingsBuilder":
        for ns in namespaces:
            if ns and ns.strip():
                self._namespaces.add(ns.strip())
        return self

    def remove(self, namespace: str) -> "UsingsBuilder":
        if namespace and namespace.strip():
            self._namespaces.discard(namespace.strip())
        return self

    def add_quest_usings(self) -> "UsingsBuilder":
        return self.add(*QUEST_USINGS)

    def add_npc_usings(self) -> "UsingsBuilder":
        return self.add(*NPC_USINGS)

    def __contains__(self, namespace: str) -> bool:
        return namespace.strip() in self._namespaces

    def __len__(self) -> int:
        return len(self._namespaces)

    def emit(self, builder: CodeBuilder) -> None:
        # ordinal sort, like the directives an IDE would produce
        for ns in sorted(self._namespaces):
            builder.append_line(f"using {ns};")
        builder.append_line()


def emit_quest_alias_block(builder: CodeBuilder) -> None:
    for line in S1QUESTS_ALIAS_BLOCK:
        builder.append_raw(line)
    builder.append_line()
