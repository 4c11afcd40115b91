from __future__ import annotations

import pytest

from setup_order.analysis.ordering import OrderOptions
from setup_order.exceptions import ConfigurationError
from setup_order.refactor.engine import ORDER_MESSAGE, DeclarationOrderEngine, decide_rewrite
from setup_order.refactor.model import TextEdit, apply_edits, offset_to_position
from tests.statement_helpers import (
    assemble,
    binding,
    function,
    import_decl,
    other,
    statement_call,
    variable,
    with_comments,
)


def test_reorders_into_default_section_order() -> None:
    block = assemble(
        variable("const count = 1"),
        statement_call("useRoute"),
        statement_call("defineEmits"),
        statement_call("onBeforeMount", "() => {}"),
    )
    plan = DeclarationOrderEngine().plan(block)
    assert len(plan.edits) == 1
    assert plan.edits[0].replacement == (
        "defineEmits()\n"
        "\n"
        "const count = 1\n"
        "\n"
        "useRoute()\n"
        "\n"
        "onBeforeMount(() => {})"
    )
    replacement = plan.edits[0].replacement
    assert replacement.index("useRoute()") < replacement.index("onBeforeMount")


def test_define_block_already_on_top_needs_no_edit() -> None:
    block = assemble(
        binding("props", "defineProps"),
        binding("emit", "defineEmits"),
        separator="\n",
    )
    plan = DeclarationOrderEngine().plan(block)
    assert plan.edits == []
    assert plan.findings == []
    assert plan.clean


def test_configured_lifecycle_order_is_respected() -> None:
    block = assemble(statement_call("onMounted"), statement_call("onBeforeMount"))
    custom = OrderOptions(lifecycle_order={"onMounted": 0, "onBeforeMount": 1})
    assert DeclarationOrderEngine(custom).plan(block).edits == []
    default_plan = DeclarationOrderEngine().plan(block)
    assert default_plan.edits[0].replacement == "onBeforeMount()\nonMounted()"


def test_spacing_only_differences_are_not_reported() -> None:
    block = assemble(
        binding("emit", "defineEmits"),
        binding("count", "ref"),
        function("go"),
        separator="\n\n\n\n",
    )
    assert DeclarationOrderEngine().plan(block).edits == []
    tight = assemble(binding("emit", "defineEmits"), binding("count", "ref"))
    assert DeclarationOrderEngine().plan(tight).edits == []


def test_edit_covers_the_whole_declaration_span() -> None:
    block = assemble(
        import_decl("import { ref } from 'vue'"),
        binding("emit", "defineEmits"),
        binding("count", "ref"),
        function("go"),
        binding("msg", "ref"),
        prefix="\n",
        suffix="\n",
    )
    plan = DeclarationOrderEngine().plan(block)
    (edit,) = plan.edits
    assert edit.start == block.source.index("const emit")
    assert edit.end == block.source.index("const msg = ref()") + len("const msg = ref()")
    fixed = apply_edits(block.source, plan.edits)
    assert fixed == (
        "\nimport { ref } from 'vue'\n"
        "const emit = defineEmits()\n"
        "\n"
        "const count = ref()\n"
        "const msg = ref()\n"
        "\n"
        "function go() {}\n"
    )


def test_finding_is_anchored_at_first_declaration() -> None:
    block = assemble(
        import_decl("import { ref } from 'vue'"),
        with_comments(function("go"), "// handlers"),
        binding("count", "ref"),
    )
    plan = DeclarationOrderEngine().plan(block)
    (finding,) = plan.findings
    assert finding.message == ORDER_MESSAGE
    assert finding.offset == block.source.index("function go")
    assert (finding.line, finding.column) == (2, 0)
    assert finding.render() == f"Component.vue:3:1: {ORDER_MESSAGE} [declaration-order]"


def test_comments_travel_with_their_statement() -> None:
    block = assemble(
        with_comments(function("go"), "// handlers"),
        with_comments(binding("count", "ref"), "// state"),
    )
    fixed = DeclarationOrderEngine().fix(block)
    assert fixed == "// state\nconst count = ref()\n\n// handlers\nfunction go() {}"


def test_interleaved_imports_are_hoisted_not_dropped() -> None:
    block = assemble(
        function("go"),
        import_decl("import { ref } from 'vue'"),
        binding("count", "ref"),
    )
    fixed = DeclarationOrderEngine().fix(block)
    assert fixed == (
        "import { ref } from 'vue'\n"
        "\n"
        "const count = ref()\n"
        "\n"
        "function go() {}"
    )


def test_import_between_unknowns_is_hoisted_once() -> None:
    block = assemble(
        other("if (a) {}"),
        import_decl("import x from 'x'"),
        other("if (b) {}"),
    )
    engine = DeclarationOrderEngine()
    fixed = engine.fix(block)
    assert fixed == "import x from 'x'\n\nif (a) {}\nif (b) {}"
    assert fixed.count("import x from 'x'") == 1
    again = assemble(other("if (a) {}"), other("if (b) {}"), prefix="import x from 'x'\n\n")
    assert again.source == fixed
    assert engine.plan(again).edits == []


def test_only_imports_produce_no_plan() -> None:
    block = assemble(import_decl("import a from 'a'"), import_decl("import b from 'b'"))
    plan = DeclarationOrderEngine().plan(block)
    assert plan.edits == [] and plan.findings == []
    assert decide_rewrite(block.statements, "", block.source) is None


def test_invalid_section_order_fails_before_analysis() -> None:
    with pytest.raises(ConfigurationError):
        DeclarationOrderEngine(OrderOptions(section_order=["notATag"]))


def test_text_edit_positions_use_utf16_columns() -> None:
    text = "const a = '😀'; b()\nnext"
    edit = TextEdit(path="x", start=text.index("b()"), end=len(text), replacement="")
    assert edit.start_position(text) == (0, 16)
    assert edit.end_position(text) == (1, 4)
    assert offset_to_position(text, 0) == (0, 0)
