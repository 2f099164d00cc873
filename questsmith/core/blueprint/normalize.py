"""Load-time normalization of persisted blueprint values

Older project files carry UI artifacts in enum-like text fields
("System.Windows.Controls.ComboBoxItem: Thursday"), display names where a
type name is expected, short hex colors and PascalCase NPC ids. These are
repaired once, here, when a document is read. Emitters only ever see
canonical values.
"""

import re
from enum import Enum
from typing import Any, Optional, TypeVar

from questsmith.core.logging import get_logger

logger = get_logger(__name__)

E = TypeVar("E", bound=Enum)

_HEX_DIGITS = re.compile(r"^[0-9A-Fa-f]+$")
_GAME_ID = re.compile(r"^[a-z][a-z0-9_]*$")


def strip_ui_prefix(value: Optional[str]) -> str:
    """Keep the text after the last ':' (combo-box item artifacts)."""
    if value is None:
        return ""
    if ":" not in value:
        return value.strip()
    stripped = value[value.rfind(":") + 1 :].strip()
    logger.debug("Stripped UI prefix: %r -> %r", value, stripped)
    return stripped


def extract_type_name(value: Optional[str]) -> str:
    """"Apartment Building (ApartmentBuilding)" -> "ApartmentBuilding"."""
    if value is None:
        return ""
    text = value.strip()
    start = text.rfind("(")
    end = text.rfind(")")
    if start >= 0 and end > start:
        extracted = text[start + 1 : end].strip()
        logger.debug("Extracted type name: %r -> %r", value, extracted)
        return extracted
    return text


def normalize_hex(value: Optional[str], fallback: str = "#FFFFFFFF") -> str:
    """Expand #RGB, #ARGB, #RRGGBB and #AARRGGBB to upper-case #AARRGGBB."""
    if value is None or not value.strip():
        return fallback

    hex_value = value.strip()
    if hex_value.startswith("#"):
        hex_value = hex_value[1:]
    if not _HEX_DIGITS.match(hex_value):
        return fallback

    if len(hex_value) == 3:
        hex_value = "FF" + "".join(c * 2 for c in hex_value)
    elif len(hex_value) == 4:
        hex_value = "".join(c * 2 for c in hex_value)
    elif len(hex_value) == 6:
        hex_value = "FF" + hex_value
    elif len(hex_value) != 8:
        return fallback

    return "#" + hex_value.upper()


def migrate_npc_id(value: Optional[str]) -> str:
    """Legacy PascalCase ids ("BobbyCooley") -> game format ("bobby_cooley")."""
    if value is None:
        return ""
    text = value.strip()
    if not text or _GAME_ID.match(text):
        return text

    migrated = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", text)
    migrated = re.sub(r"[^A-Za-z0-9]+", "_", migrated).strip("_").lower()
    logger.debug("Migrated NPC id: %r -> %r", value, migrated)
    return migrated


def coerce_enum(enum_cls: type[E], raw: Any, default: E) -> Optional[E]:
    """Recover an enum member from a persisted value.

    Accepts the member value, the member name, a UI-prefixed value or the
    integer ordinal used by older files. Returns ``default`` for missing
    values and ``None`` when nothing matches.
    """
    if raw is None or raw == "":
        return default
    if isinstance(raw, enum_cls):
        return raw

    members = list(enum_cls)
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return members[raw] if 0 <= raw < len(members) else None

    text = strip_ui_prefix(str(raw))
    for member in members:
        if text == member.value or text == member.name:
            return member
    lowered = text.lower()
    for member in members:
        if lowered == str(member.value).lower():
            return member
    return None
