from setup_order.refactor.engine import (
    ORDER_MESSAGE,
    DeclarationOrderEngine,
    decide_rewrite,
    surviving_statements,
)
from setup_order.refactor.model import (
    Finding,
    OrderPlan,
    TextEdit,
    apply_edits,
    offset_to_position,
)
from setup_order.refactor.render import normalize_newlines, render_block, render_blocks

__all__ = [
    "DeclarationOrderEngine",
    "Finding",
    "ORDER_MESSAGE",
    "OrderPlan",
    "TextEdit",
    "apply_edits",
    "decide_rewrite",
    "normalize_newlines",
    "offset_to_position",
    "render_block",
    "render_blocks",
    "surviving_statements",
]
