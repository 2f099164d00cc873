"""Indentation-aware source text builder.

Every emitter writes through a ``CodeBuilder`` so that scope nesting and
indentation stay consistent. Block calls must balance: an extra close or a
scope still open at ``build()`` raises ``UnbalancedBlockError``.
"""

from typing import Optional

from questsmith.core.codegen.errors import UnbalancedBlockError


class CodeBuilder:
    """Line-oriented C# text builder"""

    def __init__(self, indent_size: int = 4, source_comments: bool = True) -> None:
        if indent_size < 1:
            raise ValueError(f"indent_size must be positive: {indent_size}")
        self._indent_unit = " " * indent_size
        self._source_comments = source_comments
        self._lines: list[str] = []
        self._depth = 0

    @property
    def depth(self) -> int:
        """Number of currently open scopes."""
        return self._depth

    def append_line(self, text: str = "") -> "CodeBuilder":
        if not text:
            self._lines.append("")
        else:
            self._lines.append(self._indent_unit * self._depth + text)
        return self

    def append_lines(self, *lines: str) -> "CodeBuilder":
        for line in lines:
            self.append_line(line)
        return self

    def append_raw(self, text: str) -> "CodeBuilder":
        """Write a line at column zero (preprocessor directives)."""
        self._lines.append(text)
        return self

    def append_comment(self, text: str) -> "CodeBuilder":
        return self.append_line(f"// {text}" if text else "//")

    def append_source_comment(self, text: str) -> "CodeBuilder":
        """Provenance line pointing back at the blueprint field; optional."""
        if self._source_comments:
            self.append_line(f"// Generated from: {text}")
        return self

    def append_doc_comment(self, *lines: str) -> "CodeBuilder":
        self.append_line("/// <summary>")
        for line in lines:
            self.append_line(f"/// {line}")
        self.append_line("/// </summary>")
        return self

    def open_block(self, header: Optional[str] = None) -> "CodeBuilder":
        if header:
            self.append_line(header)
        self.append_line("{")
        self._depth += 1
        return self

    def close_block(self, terminator: str = "") -> "CodeBuilder":
        if self._depth == 0:
            raise UnbalancedBlockError("close_block called with no open block", 0)
        self._depth -= 1
        self.append_line("}" + terminator)
        return self

    def build(self) -> str:
        if self._depth != 0:
            raise UnbalancedBlockError(
                f"{self._depth} block(s) still open at build()", self._depth
            )
        return "\n".join(self._lines) + "\n"
