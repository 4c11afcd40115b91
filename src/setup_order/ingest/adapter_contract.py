from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Protocol, runtime_checkable


class StatementKind(StrEnum):
    IMPORT = "import"
    VARIABLE = "variable"
    FUNCTION = "function"
    CLASS = "class"
    TYPE = "type"
    EXPRESSION = "expression"
    OTHER = "other"


class ExpressionKind(StrEnum):
    CALL = "call"
    FUNCTION = "function"
    CAST = "cast"
    OTHER = "other"


@dataclass(frozen=True)
class ExpressionShape:
    kind: ExpressionKind
    # Only set for calls whose callee is a bare identifier.
    callee: str | None = None
    # Operand of a cast (`x as T`, `<T>x`).
    inner: ExpressionShape | None = None


@dataclass(frozen=True)
class Comment:
    start: int
    end: int
    text: str


@dataclass(frozen=True)
class Statement:
    """One top-level statement of a setup block.

    ``start``/``end`` are character offsets into the owning document, never
    into the extracted script body. ``initializer`` describes the first
    declarator only; additional bindings in the same declaration are not
    inspected.
    """

    kind: StatementKind
    start: int
    end: int
    initializer: ExpressionShape | None = None
    expression: ExpressionShape | None = None
    leading_comments: tuple[Comment, ...] = ()
    trailing_comment: Comment | None = None

    @property
    def extent_start(self) -> int:
        if self.leading_comments:
            return self.leading_comments[0].start
        return self.start

    @property
    def extent_end(self) -> int:
        if self.trailing_comment is not None:
            return self.trailing_comment.end
        return self.end


@dataclass(frozen=True)
class SetupBlock:
    path: str
    source: str
    statements: tuple[Statement, ...] = field(default_factory=tuple)
    language: str = "ts"


@runtime_checkable
class LanguageAdapter(Protocol):
    language_id: str
    file_extensions: tuple[str, ...]

    def discover_files(self, paths: list[Path]) -> list[Path]: ...

    def load(self, path: Path) -> SetupBlock | None: ...

    def parse(self, text: str, path: str = "") -> SetupBlock | None: ...
