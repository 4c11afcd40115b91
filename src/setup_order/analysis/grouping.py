from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from setup_order.analysis.ordering import TaggedItem
from setup_order.analysis.sections import SectionTag, group_name


@dataclass
class Block:
    group: str
    items: list[TaggedItem] = field(default_factory=list)
    start: int = 0
    end: int = 0

    @property
    def verbatim(self) -> bool:
        return self.group == SectionTag.UNKNOWNS.value

    def add(self, item: TaggedItem) -> None:
        if not self.items:
            self.start, self.end = item.start, item.end
        else:
            self.start = min(self.start, item.start)
            self.end = max(self.end, item.end)
        self.items.append(item)

    def runs(self) -> list[list[TaggedItem]]:
        """Split the block into runs that were adjacent in the original source."""
        runs: list[list[TaggedItem]] = []
        for item in self.items:
            if runs and runs[-1][-1].index + 1 == item.index:
                runs[-1].append(item)
            else:
                runs.append([item])
        return runs


def group_items(sorted_items: Sequence[TaggedItem]) -> list[Block]:
    blocks: list[Block] = []
    for item in sorted_items:
        name = group_name(item.section)
        if not blocks or blocks[-1].group != name:
            blocks.append(Block(group=name))
        blocks[-1].add(item)
    return blocks
