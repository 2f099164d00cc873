"""File banner shared by the quest and NPC generators."""

from questsmith.core.codegen.code_builder import CodeBuilder

_RULE = "// ==============================================="


def emit(
    builder: CodeBuilder,
    kind: str,
    mod_name: str,
    mod_version: str,
    mod_author: str,
    game_developer: str,
    game_name: str,
) -> None:
    """Write the banner; ``kind`` is "quest" or "NPC"."""
    builder.append_line(_RULE)
    builder.append_line(f"// Schedule1ModdingTool generated {kind} blueprint")
    builder.append_line(f"// Mod: {_one_line(mod_name)} v{_one_line(mod_version)} by {_one_line(mod_author)}")
    builder.append_line(f"// Game: {_one_line(game_developer)} - {_one_line(game_name)}")
    builder.append_line(_RULE)
    builder.append_line()


def _one_line(text: str) -> str:
    # a newline in user text would end the comment early
    return " ".join((text or "").split())
