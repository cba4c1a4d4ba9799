"""Parser for simplejinja templates.

Turns template source into the nested block tree in two passes:

1. **Clause scan** (:class:`ClauseScanMixin`): flat text, statement and
   expression clauses, with embedded expressions fully parsed by
   :class:`ExpressionParsingMixin`.
2. **Block build** (:class:`BlockBuilderMixin`): nest the clauses into
   if groups and for bodies, reporting unmatched delimiters.

The lexer has no cursor, so every production asks for the token at an
explicit offset. Parsing fails fast: the first problem raises
:class:`~simplejinja.exceptions.ParseError` and no partial tree escapes.

Example:
    >>> blocks = parse("Hello {{ name }}!")
    >>> [type(b).__name__ for b in blocks]
    ['TextBlock', 'ExpressionBlock', 'TextBlock']
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from simplejinja._types import Token
from simplejinja.exceptions import ParseError, ParseErrorKind
from simplejinja.lexer import next_token
from simplejinja.nodes import Block, Clause
from simplejinja.parser.blocks import BlockBuilderMixin
from simplejinja.parser.clauses import ClauseScanMixin
from simplejinja.parser.expressions import ExpressionParsingMixin

logger = logging.getLogger(__name__)

__all__ = ["Parser", "parse"]


class Parser(ClauseScanMixin, ExpressionParsingMixin, BlockBuilderMixin):
    """Single-use parser for one template source.

    Attributes:
        name: Optional template name, carried into errors.
    """

    def __init__(self, source: str, name: str | None = None):
        self._source = source
        self.name = name
        self._clauses: Sequence[Clause] = ()
        self._pos = 0

    def parse(self) -> list[Block]:
        """Parse the source into its top-level blocks.

        Empty and whitespace-only sources produce no blocks.

        Raises:
            ParseError: On the first structural problem. Nesting past the
                interpreter's recursion limit is ``NestingTooDeep``.
        """
        if not self._source.strip():
            return []
        self._clauses = self._scan_clauses()
        self._pos = 0
        try:
            blocks = self._build_blocks()
        except RecursionError:
            clause = self._current_clause
            offset = clause.start if clause is not None else len(self._source)
            raise self._error(ParseErrorKind.NESTING_TOO_DEEP, offset) from None
        logger.debug(
            "parsed %s: %d clauses, %d top-level blocks",
            self.name or "<template>",
            len(self._clauses),
            len(blocks),
        )
        return blocks

    def _token_at(self, offset: int) -> Token:
        return next_token(self._source, offset)

    def _error(self, kind: ParseErrorKind, offset: int) -> ParseError:
        return ParseError(kind, offset, self._source, name=self.name)


def parse(source: str, name: str | None = None) -> list[Block]:
    """Parse *source* into a list of top-level blocks.

    Args:
        source: Template source text.
        name: Optional template name for error messages.

    Raises:
        ParseError: If the source is malformed.
    """
    return Parser(source, name).parse()
