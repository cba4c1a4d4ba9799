"""Render errors: kinds, anchors, causes and messages."""

from __future__ import annotations

import pytest

from simplejinja import RenderError, RenderErrorKind, Template, TemplateError
from simplejinja.nodes import Expr, ExpressionBlock, Symbol, Unary, UnaryOperator
from simplejinja.renderer import render as render_blocks


@pytest.mark.parametrize(
    ("source", "column"),
    [
        ("{{ 'a' - 1 }}", 4),
        ("{{ 1 * 'a' }}", 4),
        ("{{ true + 1 }}", 4),
        ("{{ 1.5 // 1 }}", 4),
        ("{{ 3 % 1.0 }}", 4),
        ("{{ 'a' // 0 }}", 4),
        ("{{ true < false }}", 4),
        ("{{ 1 == 'a' }}", 4),
        ("{{ 'a' < 1 }}", 4),
        ("{{ true == 1 }}", 4),
        ("{{ -'a' }}", 5),
        ("{{ +true }}", 5),
        ("{{ x + (1 - 'b') }}", 9),
    ],
)
def test_unsupported_operation(render_error, source: str, column: int) -> None:
    error = render_error(source)
    assert error.kind is RenderErrorKind.UNSUPPORTED_OPERATION
    assert (error.row, error.column) == (1, column)


def test_object_ordering_is_unsupported(render_error) -> None:
    error = render_error("{{ xs < ys }}", {"xs": [1], "ys": [2]})
    assert error.kind is RenderErrorKind.UNSUPPORTED_OPERATION


def test_object_arithmetic_is_unsupported(render_error) -> None:
    assert render_error("{{ xs + 1 }}", {"xs": [1]}).kind is RenderErrorKind.UNSUPPORTED_OPERATION


@pytest.mark.parametrize("source", ["{{ 1 // 0 }}", "{{ 1 % 0 }}", "{{ 1 / 0 }}", "{{ 1.5 / 0.0 }}", "{{ 1 / zero }}"])
def test_divided_by_zero(render_error, source: str) -> None:
    error = render_error(source, {"zero": 0})
    assert error.kind is RenderErrorKind.DIVIDED_BY_ZERO
    assert error.column == 4


def test_unknown_filter(render_error) -> None:
    error = render_error("{{'a'|unknown}}")
    assert error.kind is RenderErrorKind.UNSUPPORTED_FILTER
    assert (error.row, error.column) == (1, 7)


def test_arguments_evaluated_before_filter_lookup(render_error) -> None:
    error = render_error("{{ 'a' | nope(1 // 0) }}")
    assert error.kind is RenderErrorKind.DIVIDED_BY_ZERO
    assert (error.row, error.column) == (1, 15)


def test_unknown_filter_after_arguments(render_error) -> None:
    error = render_error("{{ 'a' | nope(1 + 1) }}")
    assert error.kind is RenderErrorKind.UNSUPPORTED_FILTER
    assert (error.row, error.column) == (1, 10)


def test_filter_call_failed(render_error) -> None:
    error = render_error("{{'a'|replace}}")
    assert error.kind is RenderErrorKind.FILTER_CALL_FAILED
    assert (error.row, error.column) == (1, 7)
    assert isinstance(error.cause, TypeError)
    assert error.__cause__ is error.cause
    assert "Caused by: TypeError" in str(error)


def test_filter_on_non_string(render_error) -> None:
    error = render_error("{{ 5 | replace('5', '6') }}")
    assert error.kind is RenderErrorKind.FILTER_CALL_FAILED
    assert isinstance(error.cause, AttributeError)


def test_error_on_later_line(render_error) -> None:
    error = render_error("line one\n{% if x %}\n  {{ 1 // 0 }}\n{% endif %}", {"x": True})
    assert (error.row, error.column) == (3, 6)
    assert ">  3 |   {{ 1 // 0 }}" in str(error)


def test_error_inside_loop_body(render_error) -> None:
    error = render_error("{% for x in xs %}{{ 10 // x }}{% endfor %}", {"xs": [5, 0]})
    assert error.kind is RenderErrorKind.DIVIDED_BY_ZERO


def test_message_layout(render_error) -> None:
    error = render_error("{{ 1 // 0 }}")
    assert str(error) == (
        "[1,4](@3): DividedByZero\n"
        "  --> <template>:1:4\n"
        "     |\n"
        ">  1 | {{ 1 // 0 }}\n"
        "     |    ^\n"
        "     |"
    )


def test_message_uses_template_name() -> None:
    template = Template.from_string("{{ -'a' }}", name="page.html")
    with pytest.raises(RenderError) as exc_info:
        template.render()
    assert exc_info.value.name == "page.html"
    assert "  --> page.html:1:5" in str(exc_info.value)


def test_render_error_is_template_error(render_error) -> None:
    assert isinstance(render_error("{{ 1 // 0 }}"), TemplateError)


def test_kinds_do_not_overlap() -> None:
    from simplejinja import ParseErrorKind

    parse_names = {kind.value for kind in ParseErrorKind}
    render_names = {kind.value for kind in RenderErrorKind}
    assert not parse_names & render_names


class TestDeepNesting:
    """Operator chains and nesting depth."""

    def test_long_operator_chain_renders(self, render) -> None:
        assert render("{{ " + " * ".join(["1"] * 2000) + " }}") == "1"

    def test_long_filter_chain_renders(self, render) -> None:
        source = "{{ 'a'" + " | replace('a', 'a')" * 1000 + " }}"
        assert render(source) == "a"

    def test_evaluation_too_deep(self) -> None:
        source = "{{ x }}"
        expr: Expr = Symbol(3, 4, "x")
        for _ in range(5000):
            expr = Unary(3, 4, UnaryOperator.NOT, expr)
        with pytest.raises(RenderError) as exc_info:
            render_blocks([ExpressionBlock(0, len(source), expr)], source)
        assert exc_info.value.kind is RenderErrorKind.EVALUATION_TOO_DEEP
        assert exc_info.value.offset == 3
        assert exc_info.value.__cause__ is None
