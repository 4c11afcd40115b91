from __future__ import annotations

import logging
from typing import Sequence

from setup_order.analysis.grouping import group_items
from setup_order.analysis.ordering import OrderOptions, build_tagged_items, rendered_text
from setup_order.ingest.adapter_contract import SetupBlock, Statement, StatementKind
from setup_order.refactor.model import Finding, OrderPlan, TextEdit, apply_edits, offset_to_position
from setup_order.refactor.render import BLOCK_SEPARATOR, normalize_newlines, render_blocks

logger = logging.getLogger(__name__)

ORDER_MESSAGE = (
    "Declarations in <script setup> are out of order; run with --fix to reorder them."
)


def surviving_statements(statements: Sequence[Statement]) -> list[Statement]:
    return [statement for statement in statements if statement.kind is not StatementKind.IMPORT]


def decide_rewrite(
    statements: Sequence[Statement],
    rendered: str,
    source: str,
    *,
    path: str = "",
) -> TextEdit | None:
    """Single edit replacing the whole declaration span, or None if canonical."""
    surviving = surviving_statements(statements)
    if not surviving:
        return None
    start = surviving[0].extent_start
    end = surviving[-1].extent_end
    original = source[start:end]
    if normalize_newlines(original) == normalize_newlines(rendered):
        return None
    return TextEdit(path=path, start=start, end=end, replacement=rendered)


class DeclarationOrderEngine:
    def __init__(self, options: OrderOptions | None = None) -> None:
        self.options = options or OrderOptions()

    def render(self, block: SetupBlock) -> str:
        items = build_tagged_items(block.statements, block.source, self.options)
        rendered = render_blocks(group_items(items), block.source)
        hoisted = _interleaved_imports(block.statements)
        if not hoisted:
            return rendered
        imports = "\n".join(rendered_text(statement, block.source) for statement in hoisted)
        return imports + BLOCK_SEPARATOR + rendered

    def plan(self, block: SetupBlock) -> OrderPlan:
        surviving = surviving_statements(block.statements)
        if not surviving:
            return OrderPlan()
        edit = decide_rewrite(
            block.statements,
            self.render(block),
            block.source,
            path=block.path,
        )
        if edit is None:
            return OrderPlan()
        anchor = surviving[0].start
        line, column = offset_to_position(block.source, anchor)
        logger.debug("%s: declaration span %d-%d needs reordering", block.path, edit.start, edit.end)
        return OrderPlan(
            edits=[edit],
            findings=[
                Finding(
                    path=block.path,
                    offset=anchor,
                    line=line,
                    column=column,
                    message=ORDER_MESSAGE,
                )
            ],
        )

    def fix(self, block: SetupBlock) -> str:
        return apply_edits(block.source, self.plan(block).edits)


def _interleaved_imports(statements: Sequence[Statement]) -> list[Statement]:
    surviving = surviving_statements(statements)
    if not surviving:
        return []
    start = surviving[0].extent_start
    end = surviving[-1].extent_end
    return [
        statement
        for statement in statements
        if statement.kind is StatementKind.IMPORT and start <= statement.start < end
    ]
