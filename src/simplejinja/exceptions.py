"""Exceptions for the simplejinja template engine.

Exception Hierarchy:
TemplateError (base)
├── ParseError      # Template source is malformed (kind: ParseErrorKind)
└── RenderError     # An operation failed while rendering (kind: RenderErrorKind)

Every error carries the character ``offset`` that triggered it, the 1-based
``row`` and ``column`` derived from it, and a ``kind`` whose value is a
stable name callers can match on. The two kind enums never overlap.

Error Messages:
``str(exc)`` starts with the position and kind, followed by the template
location and a snippet of the offending line when the source is known:

    ```
    [1,7](@6): MissingTestExpression
      --> page.html:1:7
       |
    >  1 | {% if %}
       |         ^
       |
    ```

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from simplejinja.utils import terminal
from simplejinja.utils.text import char_position, source_lines


class ParseErrorKind(Enum):
    """What the parser found wrong. Values are the stable kind names."""

    INCOMPLETED_STATEMENT_BLOCK = "IncompletedStatementBlock"
    INCOMPLETED_EXPRESSION_BLOCK = "IncompletedExpressionBlock"
    UNKNOWN_CLAUSE = "UnknownClause"
    MISSING_TEST_EXPRESSION = "MissingTestExpression"
    MISSING_LOOP_VARIABLE = "MissingLoopVariable"
    MISSING_IN_KEYWORD = "MissingInKeyword"
    MISSING_ITERATOR = "MissingIterator"
    UNKNOWN_STATEMENT_TYPE = "UnknownStatementType"
    MISSING_END_IF = "MissingEndIf"
    MISSING_END_FOR = "MissingEndFor"
    MISSING_FILTER_CALL = "MissingFilterCall"
    INVALID_FILTER = "InvalidFilter"
    MISSING_PARENTHESIS = "MissingParenthesis"
    MISSING_EXPRESSION = "MissingExpression"
    MISSING_END_OF_SUBSCRIPT = "MissingEndOfSubscript"
    INVALID_SYMBOL = "InvalidSymbol"
    INVALID_NUMBER = "InvalidNumber"
    NESTING_TOO_DEEP = "NestingTooDeep"


class RenderErrorKind(Enum):
    """What failed while rendering. Values are the stable kind names."""

    UNSUPPORTED_OPERATION = "UnsupportedOperation"
    UNSUPPORTED_FILTER = "UnsupportedFilter"
    FILTER_CALL_FAILED = "FilterCallFailed"
    DIVIDED_BY_ZERO = "DividedByZero"
    EVALUATION_TOO_DEEP = "EvaluationTooDeep"


# ---------------------------------------------------------------------------
# Source snippets
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SourceSnippet:
    """Template source lines around an error, with an optional caret.

    Attributes:
        lines: Tuple of (line_number, line_content) pairs around the error.
        error_line: The 1-based line number where the error occurred.
        column: Optional 1-based column for the caret pointer.
    """

    lines: tuple[tuple[int, str], ...]
    error_line: int
    column: int | None = None

    def format(self) -> str:
        """Format the snippet in Rust-inspired diagnostic style.

        Colors are applied when the terminal supports them.
        """
        gutter = terminal.dim_text("     |")
        parts: list[str] = [gutter]
        for lineno, content in self.lines:
            parts.append(terminal.format_source_line(lineno, content, is_error=lineno == self.error_line))
            if lineno == self.error_line and self.column is not None:
                caret = " " * (self.column - 1) + "^"
                parts.append(f"{gutter} {terminal.error_line(caret)}")
        parts.append(gutter)
        return "\n".join(parts)


def build_source_snippet(
    source: str,
    error_line: int,
    *,
    context_lines: int = 2,
    column: int | None = None,
) -> SourceSnippet:
    """Build a SourceSnippet from template source.

    Args:
        source: Full template source text.
        error_line: 1-based line number of the error.
        context_lines: Number of lines to show before/after the error line.
        column: Optional 1-based column for the caret pointer.
    """
    all_lines = source_lines(source)
    start = max(0, error_line - 1 - context_lines)
    end = min(len(all_lines), error_line + context_lines)
    lines = tuple((i + 1, all_lines[i]) for i in range(start, end))
    return SourceSnippet(lines=lines, error_line=error_line, column=column)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class TemplateError(Exception):
    """Base exception for all simplejinja template errors.

    Catch this to handle parse and render failures alike:

        >>> try:
        ...     Template.from_string(source).render(data)
        ... except TemplateError as e:
        ...     log.error("template failed: %s", e.kind.value)

    Attributes:
        kind: ParseErrorKind or RenderErrorKind member.
        offset: 0-based character offset of the error.
        row: 1-based line of ``offset``.
        column: 1-based column of ``offset``.
        source: Template source the offset points into.
        name: Optional template name used in diagnostics.
    """

    kind: Enum

    def __init__(
        self,
        kind: Enum,
        offset: int,
        source: str,
        *,
        name: str | None = None,
    ):
        self.kind = kind
        self.offset = offset
        self.source = source
        self.name = name
        self.row, self.column = char_position(source, offset)
        super().__init__(self._format_message())

    @property
    def position(self) -> str:
        """Short position prefix: ``[row,column](@offset)``."""
        return f"[{self.row},{self.column}](@{self.offset})"

    @property
    def location(self) -> str:
        return f"{self.name or '<template>'}:{self.row}:{self.column}"

    def source_snippet(self) -> SourceSnippet:
        return build_source_snippet(self.source, self.row, column=self.column)

    def _format_message(self) -> str:
        header = f"{self.position}: {self.kind.value}"
        snippet = terminal.strip_colors(self.source_snippet().format())
        return f"{header}\n  --> {self.location}\n{snippet}"

    def format_compact(self) -> str:
        """Format the error as a colored terminal diagnostic.

        Format::

            MissingEndFor: [1,4](@3)
              --> page.html:1:4
                 |
            >  1 | abc{% for x in xs %}
                 |    ^
                 |

        Returns:
            Multi-line string with kind, location and source snippet.
        """
        parts = [
            f"{terminal.error_kind(self.kind.value)}: {self.position}",
            f"  --> {terminal.location(self.location)}",
            self.source_snippet().format(),
        ]
        return "\n".join(parts)


class ParseError(TemplateError):
    """Template source could not be parsed.

    Raised on the first structural problem; no partial tree is returned.
    """

    kind: ParseErrorKind


class RenderError(TemplateError):
    """An operation failed while rendering a template.

    For ``FilterCallFailed`` the exception raised by the filter is kept in
    :attr:`cause` and also chained as ``__cause__``.
    """

    kind: RenderErrorKind

    def __init__(
        self,
        kind: RenderErrorKind,
        offset: int,
        source: str,
        *,
        name: str | None = None,
        cause: BaseException | None = None,
    ):
        self.cause = cause
        super().__init__(kind, offset, source, name=name)

    def _format_message(self) -> str:
        message = super()._format_message()
        if self.cause is not None:
            message += f"\n  Caused by: {type(self.cause).__name__}: {self.cause}"
        return message
