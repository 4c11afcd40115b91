from __future__ import annotations

from dataclasses import dataclass

from setup_order.analysis.sections import (
    COMPOSABLE_PREFIX,
    DEFINE_OTHERS,
    LIFECYCLE_HOOKS,
    REACTIVE_DECLARATIONS,
    SectionTag,
)
from setup_order.ingest.adapter_contract import (
    ExpressionKind,
    ExpressionShape,
    Statement,
    StatementKind,
)


@dataclass(frozen=True)
class CalleeTables:
    define_others: frozenset[str] = frozenset(DEFINE_OTHERS)
    reactive_declarations: frozenset[str] = frozenset(REACTIVE_DECLARATIONS)
    lifecycle_hooks: frozenset[str] = frozenset(LIFECYCLE_HOOKS)
    composable_prefix: str = COMPOSABLE_PREFIX


DEFAULT_CALLEE_TABLES = CalleeTables()


def unwrap_type_cast(shape: ExpressionShape | None) -> ExpressionShape | None:
    while shape is not None and shape.kind is ExpressionKind.CAST:
        shape = shape.inner
    return shape


def resolve_callee(
    name: str,
    tables: CalleeTables = DEFAULT_CALLEE_TABLES,
) -> SectionTag | None:
    """Section for a call to ``name``, or None when the callee is not recognized.

    The first matching rule wins, so ``useX`` is always a composable even if
    a hook list later names it, and ``computed``/``watch`` are only reached
    when the name does not start with the composable prefix.
    """
    if name == "defineProps":
        return SectionTag.DEFINE_PROPS
    if name == "defineEmits":
        return SectionTag.DEFINE_EMITS
    if name in tables.define_others:
        return SectionTag.DEFINE_OTHERS
    if name in tables.reactive_declarations:
        return SectionTag.REACTIVE_VARS
    if name.startswith(tables.composable_prefix):
        return SectionTag.COMPOSABLES
    if name == "computed":
        return SectionTag.COMPUTED
    if name == "watch":
        return SectionTag.WATCHERS
    if name in tables.lifecycle_hooks:
        return SectionTag.LIFECYCLE
    return None


def _call_section(
    shape: ExpressionShape | None,
    tables: CalleeTables,
) -> SectionTag | None:
    if shape is None or shape.kind is not ExpressionKind.CALL or not shape.callee:
        return None
    return resolve_callee(shape.callee, tables)


def classify(
    statement: Statement,
    tables: CalleeTables = DEFAULT_CALLEE_TABLES,
) -> SectionTag | None:
    """Section of ``statement``; imports yield None and are never ordered."""
    kind = statement.kind
    if kind is StatementKind.IMPORT:
        return None
    if kind is StatementKind.CLASS:
        return SectionTag.CLASS
    if kind is StatementKind.TYPE:
        return SectionTag.TYPE
    if kind is StatementKind.FUNCTION:
        return SectionTag.FUNCTIONS
    if kind is StatementKind.VARIABLE:
        init = unwrap_type_cast(statement.initializer)
        if init is None:
            return SectionTag.UNKNOWNS
        if init.kind is ExpressionKind.FUNCTION:
            return SectionTag.FUNCTIONS
        return _call_section(init, tables) or SectionTag.PLAIN_VARS
    if kind is StatementKind.EXPRESSION:
        return _call_section(statement.expression, tables) or SectionTag.UNKNOWNS
    return SectionTag.UNKNOWNS


def lifecycle_hook_name(statement: Statement) -> str | None:
    if statement.kind is StatementKind.VARIABLE:
        shape = unwrap_type_cast(statement.initializer)
    elif statement.kind is StatementKind.EXPRESSION:
        shape = statement.expression
    else:
        return None
    if shape is None or shape.kind is not ExpressionKind.CALL:
        return None
    return shape.callee
