from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Sequence

from setup_order.analysis.classify import (
    DEFAULT_CALLEE_TABLES,
    CalleeTables,
    classify,
    lifecycle_hook_name,
)
from setup_order.analysis.sections import (
    DEFAULT_LIFECYCLE_ORDER,
    DEFAULT_SECTION_ORDER,
    SectionTag,
)
from setup_order.exceptions import ConfigurationError
from setup_order.ingest.adapter_contract import Comment, Statement

_SECTION_ORDER_KEYS = ("section_order", "sectionOrder")
_LIFECYCLE_ORDER_KEYS = ("lifecycle_order", "lifecycleOrder")


def validate_section_order(value: object) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        raise ConfigurationError(
            'Invalid "sectionOrder" option: Expected an array, '
            f"but received {type(value).__name__}."
        )
    seen: set[str] = set()
    for section in value:
        if not isinstance(section, str):
            raise ConfigurationError(
                'Invalid "sectionOrder" option: Expected string values, '
                f"but found {type(section).__name__}."
            )
        if section not in DEFAULT_SECTION_ORDER:
            raise ConfigurationError(
                f'Invalid "sectionOrder" option: "{section}" is not a recognized section. '
                f"Valid sections: {', '.join(DEFAULT_SECTION_ORDER)}"
            )
        if section in seen:
            raise ConfigurationError(
                f'Invalid "sectionOrder" option: "{section}" is listed more than once.'
            )
        seen.add(section)
    return tuple(value)


def validate_lifecycle_order(value: object) -> Mapping[str, int]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(
            'Invalid "lifecycleOrder" option: Expected an object, '
            f"but received {type(value).__name__}."
        )
    ranks: dict[str, int] = {}
    for name, rank in value.items():
        if not isinstance(name, str) or type(rank) is not int:
            raise ConfigurationError(
                f'Invalid "lifecycleOrder" option: "{name}" must map to an integer rank.'
            )
        ranks[name] = rank
    return MappingProxyType(ranks)


@dataclass(frozen=True)
class OrderOptions:
    section_order: tuple[str, ...] = DEFAULT_SECTION_ORDER
    lifecycle_order: Mapping[str, int] = field(default_factory=lambda: DEFAULT_LIFECYCLE_ORDER)
    callee_tables: CalleeTables = field(default=DEFAULT_CALLEE_TABLES, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "section_order", validate_section_order(self.section_order))
        object.__setattr__(
            self, "lifecycle_order", validate_lifecycle_order(self.lifecycle_order)
        )

    @classmethod
    def from_mapping(cls, raw: Mapping[str, object] | None) -> OrderOptions:
        """Build options from a config table or request payload.

        Both snake_case and the ESLint-style camelCase option names are
        accepted; ``None`` values fall back to the defaults.
        """
        if raw is None:
            return cls()
        if not isinstance(raw, Mapping):
            raise ConfigurationError(
                f"Invalid options: Expected an object, but received {type(raw).__name__}."
            )
        known = set(_SECTION_ORDER_KEYS) | set(_LIFECYCLE_ORDER_KEYS)
        unknown = sorted(str(key) for key in raw if key not in known)
        if unknown:
            raise ConfigurationError(
                f"Invalid options: unknown option(s) {', '.join(unknown)}. "
                f"Valid options: {', '.join(_SECTION_ORDER_KEYS + _LIFECYCLE_ORDER_KEYS)}"
            )
        section_order = _first_present(raw, _SECTION_ORDER_KEYS)
        lifecycle_order = _first_present(raw, _LIFECYCLE_ORDER_KEYS)
        return cls(
            section_order=DEFAULT_SECTION_ORDER if section_order is None else section_order,
            lifecycle_order=(
                DEFAULT_LIFECYCLE_ORDER if lifecycle_order is None else lifecycle_order
            ),
        )


def _first_present(raw: Mapping[str, object], keys: Sequence[str]) -> object:
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


@dataclass(frozen=True)
class TaggedItem:
    statement: Statement
    index: int
    section: SectionTag
    primary_key: int
    secondary_key: int | None
    text: str
    leading_comments: tuple[Comment, ...] = ()

    @property
    def start(self) -> int:
        return self.statement.extent_start

    @property
    def end(self) -> int:
        return self.statement.extent_end


def rendered_text(statement: Statement, source: str) -> str:
    body = source[statement.start : statement.extent_end]
    if not statement.leading_comments:
        return body
    return "\n".join([*(comment.text for comment in statement.leading_comments), body])


def tag_statement(
    statement: Statement,
    index: int,
    source: str,
    options: OrderOptions,
) -> TaggedItem | None:
    section = classify(statement, options.callee_tables)
    if section is None:
        return None
    order = options.section_order
    primary_key = order.index(section.value) if section.value in order else len(order)
    secondary_key = None
    if section is SectionTag.LIFECYCLE:
        hook = lifecycle_hook_name(statement)
        lifecycle_order = options.lifecycle_order
        if hook is not None and hook in lifecycle_order:
            secondary_key = lifecycle_order[hook]
        else:
            secondary_key = len(lifecycle_order)
    return TaggedItem(
        statement=statement,
        index=index,
        section=section,
        primary_key=primary_key,
        secondary_key=secondary_key,
        text=rendered_text(statement, source),
        leading_comments=statement.leading_comments,
    )


def sort_items(items: Iterable[TaggedItem]) -> list[TaggedItem]:
    """Order items by primary key, keeping source order for ties.

    Lifecycle hooks are additionally ranked by their secondary key, but only
    among the positions lifecycle hooks already hold inside their primary
    bucket; everything else in a shared bucket keeps its relative order.
    """
    ordered = sorted(items, key=lambda item: (item.primary_key, item.index))
    start = 0
    while start < len(ordered):
        stop = start
        while stop < len(ordered) and ordered[stop].primary_key == ordered[start].primary_key:
            stop += 1
        slots = [
            pos for pos in range(start, stop) if ordered[pos].section is SectionTag.LIFECYCLE
        ]
        hooks = sorted(
            (ordered[pos] for pos in slots),
            key=lambda item: (item.secondary_key, item.index),
        )
        for pos, item in zip(slots, hooks):
            ordered[pos] = item
        start = stop
    return ordered


def build_tagged_items(
    statements: Sequence[Statement],
    source: str,
    options: OrderOptions | None = None,
) -> list[TaggedItem]:
    options = options or OrderOptions()
    items: list[TaggedItem] = []
    # Imports keep their index so runs split at them.
    for index, statement in enumerate(statements):
        item = tag_statement(statement, index, source, options)
        if item is not None:
            items.append(item)
    return sort_items(items)
