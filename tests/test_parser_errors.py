"""Parse errors: kinds, positions and diagnostics."""

from __future__ import annotations

import pytest

from simplejinja import ParseError, ParseErrorKind, TemplateError, parse
from simplejinja.utils import terminal


@pytest.mark.parametrize(
    ("source", "kind", "row", "column"),
    [
        ("abc{%if def", ParseErrorKind.INCOMPLETED_STATEMENT_BLOCK, 1, 12),
        ("\r\n\r\nabc{{ def\r\n", ParseErrorKind.INCOMPLETED_EXPRESSION_BLOCK, 3, 4),
        ("\r\n<h1>\r\n{% abc %}\r\n</h1>", ParseErrorKind.UNKNOWN_STATEMENT_TYPE, 3, 4),
        ("{% if %}", ParseErrorKind.MISSING_TEST_EXPRESSION, 1, 7),
        ("{% if a %}{% elif %}{% endif %}", ParseErrorKind.MISSING_TEST_EXPRESSION, 1, 19),
        ("{% for %}", ParseErrorKind.MISSING_LOOP_VARIABLE, 1, 7),
        ("{% for in %}", ParseErrorKind.MISSING_LOOP_VARIABLE, 1, 7),
        ("{% for a %}", ParseErrorKind.MISSING_IN_KEYWORD, 1, 9),
        ("{% for a in %}", ParseErrorKind.MISSING_ITERATOR, 1, 12),
        ("{% if a %}", ParseErrorKind.MISSING_END_IF, 1, 1),
        ("{% for a in b %}", ParseErrorKind.MISSING_END_FOR, 1, 1),
        ("{{ a | }}", ParseErrorKind.MISSING_FILTER_CALL, 1, 7),
        ("{{ a | 123}}", ParseErrorKind.INVALID_FILTER, 1, 8),
        ("{{ a | -b }}", ParseErrorKind.INVALID_FILTER, 1, 8),
        ("{{ a | b + c }}", ParseErrorKind.INVALID_FILTER, 1, 8),
        ("{{ a | b.c }}", ParseErrorKind.INVALID_FILTER, 1, 8),
        ("{{ - -a }}", ParseErrorKind.MISSING_EXPRESSION, 1, 5),
        ("{{ + -1 }}", ParseErrorKind.MISSING_EXPRESSION, 1, 5),
        ("{{ a|b( }}", ParseErrorKind.MISSING_PARENTHESIS, 1, 8),
        ("{{ a+( }}", ParseErrorKind.MISSING_EXPRESSION, 1, 7),
        ("{{ a[b }}", ParseErrorKind.MISSING_END_OF_SUBSCRIPT, 1, 7),
        ("{{ a. 1 }}", ParseErrorKind.INVALID_SYMBOL, 1, 6),
        ("{{ 1234567890123456 }}", ParseErrorKind.INVALID_NUMBER, 1, 4),
    ],
)
def test_error_kind_and_position(parse_error, source: str, kind: ParseErrorKind, row: int, column: int) -> None:
    error = parse_error(source)
    assert error.kind is kind
    assert (error.row, error.column) == (row, column)


class TestAnchors:
    """Where each failure points."""

    def test_missing_test_expression_offset(self, parse_error) -> None:
        assert parse_error("{% if %}").offset == 6

    def test_missing_end_if_points_at_opening_clause(self, parse_error) -> None:
        error = parse_error("text\n  {% if a %}body")
        assert error.kind is ParseErrorKind.MISSING_END_IF
        assert (error.row, error.column) == (2, 3)

    def test_unclosed_inner_loop(self, parse_error) -> None:
        error = parse_error("{% if a %}{% for x in y %}{% endif %}")
        assert error.kind is ParseErrorKind.MISSING_END_FOR
        assert error.offset == 10

    def test_integer_above_int32(self, parse_error) -> None:
        assert parse_error("{{ 2147483648 }}").kind is ParseErrorKind.INVALID_NUMBER

    def test_very_long_integer(self, parse_error) -> None:
        assert parse_error("{{ " + "9" * 5000 + " }}").kind is ParseErrorKind.INVALID_NUMBER

    def test_empty_expression_block(self, parse_error) -> None:
        error = parse_error("{{ }}")
        assert error.kind is ParseErrorKind.INCOMPLETED_EXPRESSION_BLOCK

    def test_unknown_statement_keyword(self, parse_error) -> None:
        assert parse_error("{% while x %}").kind is ParseErrorKind.UNKNOWN_STATEMENT_TYPE

    def test_deep_parentheses(self, parse_error) -> None:
        error = parse_error("ab{{ " + "(" * 5000 + "1" + ")" * 5000 + " }}")
        assert error.kind is ParseErrorKind.NESTING_TOO_DEEP
        assert error.offset == 2

    def test_deep_block_nesting(self, parse_error) -> None:
        source = "{% if x %}" * 3000 + "{% endif %}" * 3000
        assert parse_error(source).kind is ParseErrorKind.NESTING_TOO_DEEP

    @pytest.mark.parametrize("source", ["{% endif %}", "{% else %}", "{% endfor %}"])
    def test_stray_closing_clause(self, parse_error, source: str) -> None:
        error = parse_error("ab" + source)
        assert error.kind is ParseErrorKind.UNKNOWN_CLAUSE
        assert error.offset == 2


class TestErrorMessage:
    """``str(error)`` and ``format_compact()``."""

    def test_message_layout(self, parse_error) -> None:
        error = parse_error("{% if %}")
        assert str(error) == (
            "[1,7](@6): MissingTestExpression\n"
            "  --> <template>:1:7\n"
            "     |\n"
            ">  1 | {% if %}\n"
            "     |       ^\n"
            "     |"
        )

    def test_message_uses_template_name(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse("{% for a %}", name="list.html")
        assert "  --> list.html:1:9" in str(exc_info.value)
        assert exc_info.value.name == "list.html"

    def test_snippet_shows_context_lines(self, parse_error) -> None:
        source = "one\ntwo\nthree\n{% bad %}\nfive\nsix\nseven"
        message = str(parse_error(source))
        assert ">  4 | {% bad %}" in message
        assert "   2 | two" in message
        assert "   6 | six" in message
        assert "one" not in message
        assert "seven" not in message

    def test_message_has_no_ansi_codes(self, parse_error, monkeypatch) -> None:
        monkeypatch.setattr(terminal, "_USE_COLORS", True)
        assert "\033[" not in str(parse_error("{% if %}"))

    def test_format_compact_plain(self, parse_error, no_color) -> None:
        compact = parse_error("{% if %}").format_compact()
        assert compact.splitlines()[0] == "MissingTestExpression: [1,7](@6)"
        assert "  --> <template>:1:7" in compact

    def test_format_compact_colored(self, parse_error, monkeypatch) -> None:
        monkeypatch.setattr(terminal, "_USE_COLORS", True)
        compact = parse_error("{% if %}").format_compact()
        assert "\033[91m" in compact
        assert terminal.strip_colors(compact).startswith("MissingTestExpression: [1,7](@6)")

    def test_is_template_error(self, parse_error) -> None:
        error = parse_error("{% if %}")
        assert isinstance(error, TemplateError)
        assert error.source == "{% if %}"
        assert error.position == "[1,7](@6)"
