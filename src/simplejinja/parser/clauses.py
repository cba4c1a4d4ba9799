"""Clause scanning for the simplejinja parser.

First parser pass: cut the source into a flat run of clauses. Text runs,
``{% ... %}`` statements and ``{{ ... }}`` expressions follow each other
with no gaps, so the clause spans cover the source exactly. Nesting is
left to the block builder.

Uses inline TYPE_CHECKING declarations for host attributes.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from simplejinja._types import Token, TokenType
from simplejinja.exceptions import ParseErrorKind
from simplejinja.lexer import skip_whitespace
from simplejinja.nodes import (
    Clause,
    ElseClause,
    ElseIfClause,
    EndForClause,
    EndIfClause,
    ExpressionClause,
    ForClause,
    IfClause,
    Symbol,
    TextClause,
)

if TYPE_CHECKING:
    from simplejinja.exceptions import ParseError
    from simplejinja.nodes import Expr

# Start of the next statement or expression inside a text run
_BLOCK_START_RE = re.compile(r"\{[%{]")


class ClauseScanMixin:
    """Mixin for the flat clause scan.

    Host attributes and cross-mixin dependencies are declared via inline
    TYPE_CHECKING blocks.
    """

    # ─────────────────────────────────────────────────────────────────────────
    # Host attributes and cross-mixin dependencies (type-check only)
    # ─────────────────────────────────────────────────────────────────────────
    if TYPE_CHECKING:
        # Host attributes (from Parser.__init__)
        _source: str

        # From Parser
        def _token_at(self, offset: int) -> Token: ...
        def _error(self, kind: ParseErrorKind, offset: int) -> ParseError: ...

        # From ExpressionParsingMixin
        def _parse_expression(self, offset: int) -> Expr | None: ...
        def _parse_postfix(self, offset: int) -> Expr | None: ...

    def _scan_clauses(self) -> list[Clause]:
        """Scan the whole source into clauses, front to back."""
        clauses: list[Clause] = []
        offset = 0
        while offset < len(self._source):
            try:
                clause = self._scan_clause(offset)
            except RecursionError:
                # Expressions nest one call frame per level: ((((x))))
                raise self._error(ParseErrorKind.NESTING_TOO_DEEP, offset) from None
            clauses.append(clause)
            offset = clause.end
        return clauses

    def _scan_clause(self, offset: int) -> Clause:
        token = self._token_at(offset)
        if token.start == offset:
            if token.type is TokenType.STATEMENT_BEGIN:
                return self._scan_statement(token)
            if token.type is TokenType.EXPRESSION_BEGIN:
                return self._scan_expression(token)
        return self._scan_text(offset)

    def _scan_text(self, offset: int) -> TextClause:
        """Scan raw characters up to the next ``{%`` or ``{{``.

        Stray ``%}`` / ``}}`` and quotes are ordinary text here.
        """
        match = _BLOCK_START_RE.search(self._source, offset)
        end = match.start() if match else len(self._source)
        return TextClause(offset, end)

    def _scan_expression(self, begin: Token) -> ExpressionClause:
        expression = self._parse_expression(begin.end)
        if expression is None:
            raise self._error(ParseErrorKind.INCOMPLETED_EXPRESSION_BLOCK, begin.start)
        close = self._token_at(expression.end)
        if close.type is not TokenType.EXPRESSION_END:
            raise self._error(ParseErrorKind.INCOMPLETED_EXPRESSION_BLOCK, begin.start)
        return ExpressionClause(begin.start, close.end, expression)

    def _scan_statement(self, begin: Token) -> Clause:
        keyword = self._token_at(begin.end)
        match keyword.type:
            case TokenType.IF:
                test = self._parse_test(keyword)
                return IfClause(begin.start, self._statement_end(test.end), test)
            case TokenType.ELIF:
                test = self._parse_test(keyword)
                return ElseIfClause(begin.start, self._statement_end(test.end), test)
            case TokenType.ELSE:
                return ElseClause(begin.start, self._statement_end(keyword.end))
            case TokenType.ENDIF:
                return EndIfClause(begin.start, self._statement_end(keyword.end))
            case TokenType.FOR:
                return self._scan_for(begin, keyword)
            case TokenType.ENDFOR:
                return EndForClause(begin.start, self._statement_end(keyword.end))
            case _:
                raise self._error(ParseErrorKind.UNKNOWN_STATEMENT_TYPE, keyword.start)

    def _parse_test(self, keyword: Token) -> Expr:
        test = self._parse_expression(keyword.end)
        if test is None:
            # Point at where the test should start, after the spacing
            offset = skip_whitespace(self._source, keyword.end)
            raise self._error(ParseErrorKind.MISSING_TEST_EXPRESSION, offset)
        return test

    def _scan_for(self, begin: Token, keyword: Token) -> ForClause:
        loop_variable = self._parse_expression(keyword.end)
        if not isinstance(loop_variable, Symbol):
            raise self._error(ParseErrorKind.MISSING_LOOP_VARIABLE, keyword.end)

        in_keyword = self._token_at(loop_variable.end)
        if in_keyword.type is not TokenType.IN:
            raise self._error(ParseErrorKind.MISSING_IN_KEYWORD, loop_variable.end)

        iterator = self._parse_postfix(in_keyword.end)
        if iterator is None:
            raise self._error(ParseErrorKind.MISSING_ITERATOR, in_keyword.end)

        return ForClause(begin.start, self._statement_end(iterator.end), loop_variable, iterator)

    def _statement_end(self, offset: int) -> int:
        """Require ``%}`` at *offset* and return the offset after it."""
        close = self._token_at(offset)
        if close.type is not TokenType.STATEMENT_END:
            raise self._error(ParseErrorKind.INCOMPLETED_STATEMENT_BLOCK, offset)
        return close.end
