from __future__ import annotations

from enum import StrEnum
from types import MappingProxyType
from typing import Mapping


class SectionTag(StrEnum):
    TYPE = "type"
    DEFINE_PROPS = "defineProps"
    DEFINE_EMITS = "defineEmits"
    DEFINE_OTHERS = "defineOthers"
    CLASS = "class"
    PLAIN_VARS = "plainVars"
    REACTIVE_VARS = "reactiveVars"
    COMPOSABLES = "composables"
    COMPUTED = "computed"
    WATCHERS = "watchers"
    LIFECYCLE = "lifecycle"
    UNKNOWNS = "unknowns"
    FUNCTIONS = "functions"


DEFINE_GROUP = "define"

_DEFINE_SECTIONS = frozenset(
    {SectionTag.DEFINE_PROPS, SectionTag.DEFINE_EMITS, SectionTag.DEFINE_OTHERS}
)

DEFAULT_SECTION_ORDER: tuple[str, ...] = tuple(tag.value for tag in SectionTag)

DEFAULT_LIFECYCLE_ORDER: Mapping[str, int] = MappingProxyType(
    {
        "onBeforeMount": 0,
        "onMounted": 1,
        "onBeforeUpdate": 2,
        "onUpdated": 3,
        "onBeforeUnmount": 4,
        "onUnmounted": 5,
        "onErrorCaptured": 6,
        "onRenderTracked": 7,
        "onRenderTriggered": 8,
        "onActivated": 9,
        "onDeactivated": 10,
        "onServerPrefetch": 11,
    }
)

DEFINE_OTHERS: tuple[str, ...] = (
    "defineModel",
    "defineExpose",
    "defineOptions",
    "defineSlots",
)

REACTIVE_DECLARATIONS: tuple[str, ...] = (
    "ref",
    "reactive",
    "shallowRef",
    "shallowReactive",
    "shallowReadonly",
    "markRaw",
)

LIFECYCLE_HOOKS: tuple[str, ...] = tuple(DEFAULT_LIFECYCLE_ORDER)

COMPOSABLE_PREFIX = "use"


def group_name(section: SectionTag) -> str:
    """Display group for ``section``; the define* sections share one group."""
    if section in _DEFINE_SECTIONS:
        return DEFINE_GROUP
    return section.value
