from __future__ import annotations

import re
from typing import Sequence

from setup_order.analysis.grouping import Block

_BLANK_LINES_RE = re.compile(r"\n\s*\n")

BLOCK_SEPARATOR = "\n\n"
ITEM_SEPARATOR = "\n"


def normalize_newlines(text: str) -> str:
    return _BLANK_LINES_RE.sub("\n", text).strip()


def render_block(block: Block, source: str) -> str:
    if block.verbatim:
        return ITEM_SEPARATOR.join(
            source[run[0].start : run[-1].end] for run in block.runs()
        )
    return normalize_newlines(ITEM_SEPARATOR.join(item.text for item in block.items))


def render_blocks(blocks: Sequence[Block], source: str) -> str:
    return BLOCK_SEPARATOR.join(render_block(block, source) for block in blocks)
