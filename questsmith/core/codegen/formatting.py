"""C# literal formatting helpers (invariant culture)."""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from questsmith.core.blueprint.normalize import normalize_hex


def escape_string(value: Optional[str]) -> str:
    """Escape text for use inside a regular C# string literal."""
    if not value:
        return ""
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\r", "\\r")
        .replace("\n", "\\n")
        .replace("\t", "\\t")
    )


def escape_interpolated(value: Optional[str]) -> str:
    """Escape text for the literal part of a C# ``$"..."`` string."""
    return escape_string(value).replace("{", "{{").replace("}", "}}")


def string_literal(value: Optional[str]) -> str:
    return f'"{escape_string(value)}"'


def bool_literal(value: bool) -> str:
    return "true" if value else "false"


def format_float(value: float) -> str:
    """Format like .NET's ``0.###`` pattern: at most 3 decimals, no trailing zeros."""
    if not math.isfinite(value):
        # C# has no NaN or infinity literal token
        return "0"
    quantized = Decimal(repr(float(value))).quantize(
        Decimal("0.001"), rounding=ROUND_HALF_UP
    )
    text = format(quantized, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


def float_literal(value: float) -> str:
    return f"{format_float(value)}f"


def format_vector3(x: float, y: float, z: float) -> str:
    return f"new Vector3({float_literal(x)}, {float_literal(y)}, {float_literal(z)})"


def format_tuple(left: float, right: float) -> str:
    return f"({float_literal(left)}, {float_literal(right)})"


def parse_argb(value: Optional[str]) -> tuple[int, int, int, int]:
    """Split a hex color into (a, r, g, b) bytes after normalization."""
    hex_value = normalize_hex(value)[1:]
    return (
        int(hex_value[0:2], 16),
        int(hex_value[2:4], 16),
        int(hex_value[4:6], 16),
        int(hex_value[6:8], 16),
    )


def color_expression(value: Optional[str]) -> str:
    """``new Color(r, g, b[, a])`` with channels in 0..1; alpha omitted when opaque."""
    a, r, g, b = parse_argb(value)
    channels = [r / 255, g / 255, b / 255]
    if a != 255:
        channels.append(a / 255)
    return f"new Color({', '.join(float_literal(c) for c in channels)})"


def color32_expression(value: Optional[str]) -> str:
    a, r, g, b = parse_argb(value)
    return f"new Color32({r}, {g}, {b}, {a})"


def string_list_literal(values: Iterable[str]) -> str:
    items = [string_literal(v) for v in values]
    if not items:
        return "new List<string>()"
    return "new List<string> { " + ", ".join(items) + " }"
