from setup_order.analysis.classify import (
    CalleeTables,
    DEFAULT_CALLEE_TABLES,
    classify,
    lifecycle_hook_name,
    resolve_callee,
    unwrap_type_cast,
)
from setup_order.analysis.grouping import Block, group_items
from setup_order.analysis.ordering import (
    OrderOptions,
    TaggedItem,
    build_tagged_items,
    sort_items,
    validate_lifecycle_order,
    validate_section_order,
)
from setup_order.analysis.sections import (
    DEFAULT_LIFECYCLE_ORDER,
    DEFAULT_SECTION_ORDER,
    DEFINE_GROUP,
    SectionTag,
    group_name,
)

__all__ = [
    "Block",
    "CalleeTables",
    "DEFAULT_CALLEE_TABLES",
    "DEFAULT_LIFECYCLE_ORDER",
    "DEFAULT_SECTION_ORDER",
    "DEFINE_GROUP",
    "OrderOptions",
    "SectionTag",
    "TaggedItem",
    "build_tagged_items",
    "classify",
    "group_items",
    "group_name",
    "lifecycle_hook_name",
    "resolve_callee",
    "sort_items",
    "unwrap_type_cast",
    "validate_lifecycle_order",
    "validate_section_order",
]
