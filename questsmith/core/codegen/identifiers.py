"""Identifier sanitizer

Turns free user text into valid C# symbols and keeps generated names
collision-free within one generation pass.
"""

import re
from enum import Enum
from typing import Optional, Set

# === C# reserved words (escaped with '@' when produced verbatim) ===
CSHARP_KEYWORDS: frozenset = frozenset(
    {
        "abstract", "as", "base", "bool", "break", "byte", "case", "catch",
        "char", "checked", "class", "const", "continue", "decimal", "default",
        "delegate", "do", "double", "else", "enum", "event", "explicit",
        "extern", "false", "finally", "fixed", "float", "for", "foreach",
        "goto", "if", "implicit", "in", "int", "interface", "internal", "is",
        "lock", "long", "namespace", "new", "null", "object", "operator",
        "out", "override", "params", "private", "protected", "public",
        "readonly", "ref", "return", "sbyte", "sealed", "short", "sizeof",
        "stackalloc", "static", "string", "struct", "switch", "this", "throw",
        "true", "try", "typeof", "uint", "ulong", "unchecked", "unsafe",
        "ushort", "using", "virtual", "void", "volatile", "while",
    }
)

_WORD_SPLIT = re.compile(r"[^0-9A-Za-z]+")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_NPC_ID_PATTERN = re.compile(r"^[a-z][a-z0-9_]*[a-z0-9]$|^[a-z]$")
_CLASS_NAME_PATTERN = re.compile(r"^[A-Z][a-zA-Z0-9]*$")


class IdentifierStyle(str, Enum):
    RAW = "raw"  # keep casing, replace invalid characters with '_'
    PASCAL = "pascal"  # type names
    CAMEL = "camel"  # field and local names


def _is_ident_start(ch: str) -> bool:
    return ch == "_" or (ch.isalpha() and ch.isascii())


def _is_ident_part(ch: str) -> bool:
    return ch == "_" or (ch.isalnum() and ch.isascii())


def _raw_identifier(candidate: str) -> str:
    out: list[str] = []
    for ch in candidate:
        if not out:
            if _is_ident_start(ch):
                out.append(ch)
            elif ch.isdigit() and ch.isascii():
                out.append("_" + ch)
        elif _is_ident_part(ch):
            out.append(ch)
        else:
            out.append("_")
    return "".join(out).rstrip("_") or "".join(out)


def _words(candidate: str) -> list[str]:
    words: list[str] = []
    for chunk in _WORD_SPLIT.split(candidate):
        if chunk:
            words.extend(w for w in _CAMEL_BOUNDARY.split(chunk) if w)
    return words


def make_identifier(
    candidate: Optional[str],
    fallback: str,
    style: IdentifierStyle = IdentifierStyle.RAW,
) -> str:
    """Sanitize arbitrary text into a C# identifier.

    Args:
        candidate: user-entered text (may be None or blank).
        fallback: used when nothing valid survives, or when a styled
            result would start with a digit.
        style: casing convention to apply.

    Returns:
        A non-empty identifier that is never a bare C# keyword.
    """
    if candidate is None or not candidate.strip():
        return fallback

    if style is IdentifierStyle.RAW:
        result = _raw_identifier(candidate.strip())
    else:
        words = _words(candidate)
        if not words:
            return fallback
        parts = [w[:1].upper() + w[1:] for w in words]
        if style is IdentifierStyle.CAMEL:
            parts[0] = parts[0][:1].lower() + parts[0][1:]
        result = "".join(parts)
        if result[:1].isdigit():
            return fallback

    if not result:
        return fallback
    if result in CSHARP_KEYWORDS:
        return "@" + result
    return result


def ensure_unique(base: str, used_names: Set[str], index: int) -> str:
    """Return a name not yet in ``used_names`` and record it there.

    Comparison is case-insensitive: ``used_names`` holds casefolded names.
    Candidates are ``base``, ``base{index}``, then ``base{index}_{n}``.
    """
    if not base:
        base = f"item{index}"

    candidate = base
    suffix = 0
    while candidate.casefold() in used_names:
        suffix += 1
        candidate = f"{base}{index}" if suffix == 1 else f"{base}{index}_{suffix - 1}"

    used_names.add(candidate.casefold())
    return candidate


def normalize_namespace(value: Optional[str], default: str) -> str:
    """Sanitize a dotted namespace segment by segment."""
    if value is None or not value.strip():
        return default

    segments = [s for s in value.split(".") if s.strip()]
    if not segments:
        return default

    safe = []
    for i, segment in enumerate(segments):
        fallback = "Schedule1Mods" if i == 0 else "Generated"
        safe.append(make_identifier(segment, fallback).lstrip("@"))
    return ".".join(safe)


# === Editor-side validation helpers ===


def is_valid_npc_id(value: Optional[str]) -> bool:
    """lower_snake_case, no leading/trailing/double underscores"""
    if value is None or not value.strip():
        return False
    if "__" in value:
        return False
    return _NPC_ID_PATTERN.match(value) is not None


def is_valid_class_name(value: Optional[str]) -> bool:
    if value is None or not value.strip():
        return False
    return _CLASS_NAME_PATTERN.match(value) is not None


def normalize_npc_id(value: Optional[str]) -> str:
    """Coerce free text (or a legacy PascalCase id) into game id format."""
    if value is None or not value.strip():
        return ""

    words = [w.lower() for w in _words(value)]
    result = "_".join(words)
    if result[:1].isdigit():
        result = "npc_" + result
    return result


def normalize_class_name(value: Optional[str]) -> str:
    if value is None or not value.strip():
        return ""

    result = "".join(w[:1].upper() + w[1:] for w in _words(value))
    if result[:1].isdigit():
        result = "Class" + result
    return result
