"""Block building for the simplejinja parser.

Second parser pass: fold the flat clause list into the nested block tree.
``elif``, ``else``, ``endif`` and ``endfor`` clauses end the body being
built and are claimed by the enclosing ``if`` or ``for``. One that no
construct claims is an error.

Uses inline TYPE_CHECKING declarations for host attributes.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from simplejinja.exceptions import ParseErrorKind
from simplejinja.nodes import (
    Block,
    Clause,
    ElseClause,
    ElseIfClause,
    EndForClause,
    EndIfClause,
    ExpressionBlock,
    ExpressionClause,
    ForClause,
    ForStatementBlock,
    IfClause,
    IfStatementBlock,
    TestBlock,
    TextBlock,
    TextClause,
)

if TYPE_CHECKING:
    from simplejinja.exceptions import ParseError
    from simplejinja.nodes import Expr

# Clauses that close the body currently being built
_BODY_DELIMITERS = (ElseIfClause, ElseClause, EndIfClause, EndForClause)


class BlockBuilderMixin:
    """Mixin for nesting clauses into blocks.

    Walks ``_clauses`` with the ``_pos`` cursor, like a token stream.
    """

    # ─────────────────────────────────────────────────────────────────────────
    # Host attributes and cross-mixin dependencies (type-check only)
    # ─────────────────────────────────────────────────────────────────────────
    if TYPE_CHECKING:
        # Host attributes (from Parser.__init__)
        _source: str
        _clauses: Sequence[Clause]
        _pos: int

        # From Parser
        def _error(self, kind: ParseErrorKind, offset: int) -> ParseError: ...

    @property
    def _current_clause(self) -> Clause | None:
        if self._pos < len(self._clauses):
            return self._clauses[self._pos]
        return None

    def _build_blocks(self) -> list[Block]:
        """Build the top-level blocks from every clause."""
        blocks = self._build_body()
        stray = self._current_clause
        if stray is not None:
            raise self._error(ParseErrorKind.UNKNOWN_CLAUSE, stray.start)
        return blocks

    def _build_body(self) -> list[Block]:
        """Build blocks until a body delimiter or the end of the clauses."""
        blocks: list[Block] = []
        while (clause := self._current_clause) is not None:
            if isinstance(clause, _BODY_DELIMITERS):
                break
            if isinstance(clause, TextClause):
                self._pos += 1
                blocks.append(TextBlock(clause.start, clause.end, clause.text(self._source)))
            elif isinstance(clause, ExpressionClause):
                self._pos += 1
                blocks.append(ExpressionBlock(clause.start, clause.end, clause.expression))
            elif isinstance(clause, IfClause):
                blocks.append(self._build_if(clause))
            elif isinstance(clause, ForClause):
                blocks.append(self._build_for(clause))
            else:
                raise self._error(ParseErrorKind.UNKNOWN_CLAUSE, clause.start)
        return blocks

    def _build_test_arm(self, opening: Clause, test: Expr | None) -> TestBlock:
        self._pos += 1
        body = self._build_body()
        end = body[-1].end if body else opening.end
        return TestBlock(opening.start, end, test, tuple(body))

    def _build_if(self, if_clause: IfClause) -> IfStatementBlock:
        arms = [self._build_test_arm(if_clause, if_clause.test)]

        while isinstance(clause := self._current_clause, ElseIfClause):
            arms.append(self._build_test_arm(clause, clause.test))

        if isinstance(clause := self._current_clause, ElseClause):
            arms.append(self._build_test_arm(clause, None))

        end_clause = self._current_clause
        if not isinstance(end_clause, EndIfClause):
            raise self._error(ParseErrorKind.MISSING_END_IF, if_clause.start)
        self._pos += 1
        return IfStatementBlock(if_clause.start, end_clause.end, tuple(arms))

    def _build_for(self, for_clause: ForClause) -> ForStatementBlock:
        self._pos += 1
        body = self._build_body()
        end_clause = self._current_clause
        if not isinstance(end_clause, EndForClause):
            raise self._error(ParseErrorKind.MISSING_END_FOR, for_clause.start)
        self._pos += 1
        return ForStatementBlock(
            for_clause.start,
            end_clause.end,
            for_clause.loop_variable,
            for_clause.iterator,
            tuple(body),
        )
