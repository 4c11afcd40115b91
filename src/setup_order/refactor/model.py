from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

Position = Tuple[int, int]


def offset_to_position(text: str, offset: int) -> Position:
    """Zero-based (line, UTF-16 character) of ``offset``, as LSP expects."""
    line = text.count("\n", 0, offset)
    line_start = text.rfind("\n", 0, offset) + 1
    character = len(text[line_start:offset].encode("utf-16-le")) // 2
    return line, character


@dataclass(frozen=True)
class TextEdit:
    path: str
    start: int
    end: int
    replacement: str

    def start_position(self, text: str) -> Position:
        return offset_to_position(text, self.start)

    def end_position(self, text: str) -> Position:
        return offset_to_position(text, self.end)


def apply_edits(text: str, edits: Iterable[TextEdit]) -> str:
    # Later edits first so earlier offsets stay valid.
    for edit in sorted(edits, key=lambda item: item.start, reverse=True):
        text = text[: edit.start] + edit.replacement + text[edit.end :]
    return text


@dataclass(frozen=True)
class Finding:
    path: str
    offset: int
    line: int
    column: int
    message: str
    code: str = "declaration-order"

    def render(self) -> str:
        return f"{self.path}:{self.line + 1}:{self.column + 1}: {self.message} [{self.code}]"


@dataclass
class OrderPlan:
    edits: List[TextEdit] = field(default_factory=list)
    findings: List[Finding] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        return not self.edits and not self.errors
