"""Build the setup-block statement model from a tree-sitter parse."""

from __future__ import annotations

import logging
from dataclasses import replace
from functools import lru_cache

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from setup_order.exceptions import ScriptParseError
from setup_order.ingest.adapter_contract import (
    Comment,
    ExpressionKind,
    ExpressionShape,
    Statement,
    StatementKind,
)

logger = logging.getLogger(__name__)

_STATEMENT_KINDS: dict[str, StatementKind] = {
    "import_statement": StatementKind.IMPORT,
    "class_declaration": StatementKind.CLASS,
    "abstract_class_declaration": StatementKind.CLASS,
    "type_alias_declaration": StatementKind.TYPE,
    "interface_declaration": StatementKind.TYPE,
    "function_declaration": StatementKind.FUNCTION,
    "generator_function_declaration": StatementKind.FUNCTION,
    "lexical_declaration": StatementKind.VARIABLE,
    "variable_declaration": StatementKind.VARIABLE,
    "expression_statement": StatementKind.EXPRESSION,
}

_FUNCTION_EXPRESSIONS = frozenset(
    {"arrow_function", "function_expression", "function", "generator_function"}
)

# Plain JavaScript may carry JSX; the tsx grammar accepts both.
_TSX_LANGUAGES = frozenset({"tsx", "jsx", "js", "mjs", "cjs"})


@lru_cache(maxsize=None)
def _language(grammar: str) -> Language:
    if grammar == "tsx":
        return Language(tree_sitter_typescript.language_tsx())
    return Language(tree_sitter_typescript.language_typescript())


def grammar_for(language: str) -> str:
    return "tsx" if language.lower() in _TSX_LANGUAGES else "typescript"


class _OffsetMap:
    """Converts tree-sitter byte offsets into document character offsets."""

    def __init__(self, text: str, base: int) -> None:
        self._data = text.encode("utf-8")
        self._ascii = len(self._data) == len(text)
        self._base = base

    def char(self, byte_offset: int) -> int:
        if self._ascii:
            return self._base + byte_offset
        return self._base + len(self._data[:byte_offset].decode("utf-8", errors="replace"))


def _first_error(node: Node) -> Node | None:
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def expression_shape(node: Node | None, text_of) -> ExpressionShape | None:
    if node is None:
        return None
    if node.type in _FUNCTION_EXPRESSIONS:
        return ExpressionShape(ExpressionKind.FUNCTION)
    if node.type == "call_expression":
        callee = node.child_by_field_name("function")
        name = text_of(callee) if callee is not None and callee.type == "identifier" else None
        return ExpressionShape(ExpressionKind.CALL, callee=name)
    if node.type == "as_expression":
        operand = node.named_children[0] if node.named_children else None
        return ExpressionShape(ExpressionKind.CAST, inner=expression_shape(operand, text_of))
    if node.type == "type_assertion":
        operand = node.named_children[-1] if node.named_children else None
        return ExpressionShape(ExpressionKind.CAST, inner=expression_shape(operand, text_of))
    return ExpressionShape(ExpressionKind.OTHER)


def _statement(node: Node, offsets: _OffsetMap, text_of, leading: tuple[Comment, ...]) -> Statement:
    kind = _STATEMENT_KINDS.get(node.type, StatementKind.OTHER)
    initializer = None
    expression = None
    if kind is StatementKind.VARIABLE:
        declarators = [child for child in node.named_children if child.type == "variable_declarator"]
        if declarators:
            initializer = expression_shape(declarators[0].child_by_field_name("value"), text_of)
    elif kind is StatementKind.EXPRESSION and node.named_children:
        expression = expression_shape(node.named_children[0], text_of)
    return Statement(
        kind=kind,
        start=offsets.char(node.start_byte),
        end=offsets.char(node.end_byte),
        initializer=initializer,
        expression=expression,
        leading_comments=leading,
    )


def parse_statements(
    document: str,
    *,
    start: int = 0,
    end: int | None = None,
    language: str = "ts",
    path: str = "",
) -> tuple[Statement, ...]:
    """Parse ``document[start:end]`` as a module and return its top-level statements.

    Offsets on the returned statements refer to ``document``. Comments are
    attached here, once: a comment beginning on the line where a statement
    ends is that statement's trailing comment, any other comment belongs to
    the statement that follows it.
    """
    body = document[start:end]
    offsets = _OffsetMap(body, start)
    parser = Parser(_language(grammar_for(language)))
    tree = parser.parse(body.encode("utf-8"))
    root = tree.root_node
    if root.has_error:
        error = _first_error(root) or root
        row, column = error.start_point[0], error.start_point[1]
        line_offset = document.count("\n", 0, start)
        if row == 0:
            column += start - (document.rfind("\n", 0, start) + 1)
        raise ScriptParseError(path or "<script>", "syntax error", line=row + line_offset, column=column)

    def text_of(node: Node) -> str:
        return document[offsets.char(node.start_byte) : offsets.char(node.end_byte)]

    statements: list[Statement] = []
    pending: list[Comment] = []
    last_end_row = -1
    for node in root.named_children:
        if node.type == "comment":
            comment = Comment(
                start=offsets.char(node.start_byte),
                end=offsets.char(node.end_byte),
                text=text_of(node),
            )
            previous = statements[-1] if statements else None
            if (
                previous is not None
                and not pending
                and previous.trailing_comment is None
                and node.start_point[0] == last_end_row
            ):
                statements[-1] = replace(previous, trailing_comment=comment)
            else:
                pending.append(comment)
            continue
        statements.append(_statement(node, offsets, text_of, tuple(pending)))
        pending = []
        last_end_row = node.end_point[0]
    logger.debug("%s: parsed %d top-level statements", path or "<script>", len(statements))
    return tuple(statements)

