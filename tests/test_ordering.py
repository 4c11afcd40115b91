from __future__ import annotations

import pytest

from setup_order.analysis.ordering import (
    OrderOptions,
    build_tagged_items,
    validate_lifecycle_order,
    validate_section_order,
)
from setup_order.analysis.sections import (
    DEFAULT_LIFECYCLE_ORDER,
    DEFAULT_SECTION_ORDER,
    SectionTag,
)
from setup_order.exceptions import ConfigurationError
from tests.statement_helpers import (
    assemble,
    binding,
    class_decl,
    function,
    import_decl,
    other,
    statement_call,
    type_alias,
    variable,
    with_comments,
)


def _order(block, options=None) -> list[str]:
    block_source = block.source
    return [
        block_source[item.statement.start : item.statement.end]
        for item in build_tagged_items(block.statements, block_source, options)
    ]


def test_default_options() -> None:
    options = OrderOptions()
    assert options.section_order == DEFAULT_SECTION_ORDER
    assert dict(options.lifecycle_order) == dict(DEFAULT_LIFECYCLE_ORDER)
    assert options == OrderOptions()
    with pytest.raises(TypeError):
        options.lifecycle_order["onMounted"] = 99


def test_unknown_section_is_rejected_with_valid_list() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        OrderOptions(section_order=["notATag"])
    message = str(excinfo.value)
    assert '"notATag"' in message
    for section in DEFAULT_SECTION_ORDER:
        assert section in message
    assert len(DEFAULT_SECTION_ORDER) == 13


@pytest.mark.parametrize("value", ["type", None, {"type": 1}, 3])
def test_section_order_must_be_a_list(value) -> None:
    with pytest.raises(ConfigurationError, match="Expected an array"):
        validate_section_order(value)


def test_section_order_entries_must_be_strings() -> None:
    with pytest.raises(ConfigurationError, match="Expected string values"):
        validate_section_order(["type", 1])


def test_section_order_rejects_duplicates() -> None:
    with pytest.raises(ConfigurationError, match="more than once"):
        validate_section_order(["type", "type"])


def test_lifecycle_order_requires_integer_ranks() -> None:
    with pytest.raises(ConfigurationError):
        validate_lifecycle_order(["onMounted"])
    with pytest.raises(ConfigurationError):
        validate_lifecycle_order({"onMounted": True})
    assert dict(validate_lifecycle_order({"onMounted": 3})) == {"onMounted": 3}


def test_partial_section_order_sorts_missing_sections_last() -> None:
    block = assemble(
        binding("count", "ref"),
        class_decl("Store"),
        function("handle"),
        type_alias("Id"),
    )
    options = OrderOptions(section_order=["type", "class"])
    assert _order(block, options) == [
        "type Id = string",
        "class Store {}",
        "const count = ref()",
        "function handle() {}",
    ]


def test_default_order_across_sections() -> None:
    block = assemble(
        function("handle"),
        statement_call("onMounted", "() => {}"),
        binding("total", "computed"),
        binding("route", "useRoute"),
        binding("count", "ref"),
        variable("const title = 'x'"),
        class_decl("Store"),
        statement_call("defineExpose", "{}"),
        binding("emit", "defineEmits"),
        binding("props", "defineProps"),
        type_alias("Id"),
        statement_call("watch", "count, () => {}"),
        other("if (ready) start()"),
    )
    items = build_tagged_items(block.statements, block.source)
    assert [item.section for item in items] == [
        SectionTag.TYPE,
        SectionTag.DEFINE_PROPS,
        SectionTag.DEFINE_EMITS,
        SectionTag.DEFINE_OTHERS,
        SectionTag.CLASS,
        SectionTag.PLAIN_VARS,
        SectionTag.REACTIVE_VARS,
        SectionTag.COMPOSABLES,
        SectionTag.COMPUTED,
        SectionTag.WATCHERS,
        SectionTag.LIFECYCLE,
        SectionTag.UNKNOWNS,
        SectionTag.FUNCTIONS,
    ]
    assert [item.primary_key for item in items] == list(range(13))


def test_equal_keys_keep_source_order() -> None:
    block = assemble(
        binding("b", "ref"),
        function("first"),
        binding("a", "reactive"),
        function("second"),
        binding("c", "ref"),
    )
    assert _order(block) == [
        "const b = ref()",
        "const a = reactive()",
        "const c = ref()",
        "function first() {}",
        "function second() {}",
    ]


def test_imports_are_filtered_but_keep_their_position() -> None:
    block = assemble(
        import_decl("import { ref } from 'vue'"),
        binding("count", "ref"),
        import_decl("import x from './x'"),
        variable("const label = 'a'"),
    )
    items = build_tagged_items(block.statements, block.source)
    assert [item.index for item in items] == [3, 1]
    assert all(item.section is not None for item in items)


def test_lifecycle_hooks_use_default_secondary_order() -> None:
    block = assemble(
        statement_call("onUnmounted"),
        statement_call("onMounted"),
        statement_call("onBeforeMount"),
    )
    items = build_tagged_items(block.statements, block.source)
    assert [item.secondary_key for item in items] == [0, 1, 5]
    assert _order(block) == ["onBeforeMount()", "onMounted()", "onUnmounted()"]


def test_configured_secondary_order_wins() -> None:
    block = assemble(statement_call("onMounted"), statement_call("onBeforeMount"))
    options = OrderOptions(lifecycle_order={"onMounted": 0, "onBeforeMount": 1})
    assert _order(block, options) == ["onMounted()", "onBeforeMount()"]


def test_unranked_hook_sorts_after_ranked_hooks() -> None:
    block = assemble(
        statement_call("onActivated"),
        statement_call("onMounted"),
        statement_call("onUpdated"),
    )
    options = OrderOptions(lifecycle_order={"onMounted": 0, "onUpdated": 1})
    items = build_tagged_items(block.statements, block.source, options)
    assert [item.secondary_key for item in items] == [0, 1, 2]
    assert _order(block, options) == ["onMounted()", "onUpdated()", "onActivated()"]


def test_non_lifecycle_items_have_no_secondary_key() -> None:
    block = assemble(binding("count", "ref"), function("go"))
    items = build_tagged_items(block.statements, block.source)
    assert [item.secondary_key for item in items] == [None, None]


def test_shared_bucket_only_permutes_lifecycle_slots() -> None:
    # Neither lifecycle nor unknowns is listed, so both share the last bucket.
    block = assemble(
        statement_call("onMounted"),
        other("if (a) b()"),
        statement_call("onBeforeMount"),
        other("for (;;) {}"),
    )
    options = OrderOptions(section_order=["type"])
    assert _order(block, options) == [
        "onBeforeMount()",
        "if (a) b()",
        "onMounted()",
        "for (;;) {}",
    ]


def test_rendered_text_carries_leading_comments() -> None:
    block = assemble(
        variable("const a = 1"),
        with_comments(binding("count", "ref"), "// counter", "/* state */"),
    )
    items = build_tagged_items(block.statements, block.source)
    assert items[0].text == "const a = 1"
    assert items[1].text == "// counter\n/* state */\nconst count = ref()"
    assert items[1].start == block.source.index("// counter")


def test_options_from_mapping_accepts_both_spellings() -> None:
    camel = OrderOptions.from_mapping({"sectionOrder": ["type"], "lifecycleOrder": {"onMounted": 0}})
    snake = OrderOptions.from_mapping({"section_order": ["type"], "lifecycle_order": {"onMounted": 0}})
    assert camel == snake
    assert camel.section_order == ("type",)
    assert OrderOptions.from_mapping(None) == OrderOptions()
    assert OrderOptions.from_mapping({"section_order": None}) == OrderOptions()


def test_options_from_mapping_rejects_unknown_keys() -> None:
    with pytest.raises(ConfigurationError, match="order"):
        OrderOptions.from_mapping({"order": ["type"]})
