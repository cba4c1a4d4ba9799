"""Expression parsing for the simplejinja parser.

Recursive descent with one method per precedence level. Every method takes
the offset to start at and returns the parsed node, or None when no
expression starts there. The node's ``end`` is where the caller resumes,
so nothing is consumed by a production that fails.

Precedence, lowest to highest::

    filter   a | f | g(x, y)
    or       a or b
    and      a and b
    not      not a              (prefix, right-assoc)
    compare  a < b == c         (left-assoc chain)
    additive a + b - c
    multiply a * b / c // d % e
    unary    -a +a              (prefix, not repeatable)
    postfix  a.b[c].d           (left-assoc)
    atom     name 'text' 1 1.5 true false ( expr )

Uses inline TYPE_CHECKING declarations for host attributes.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import TYPE_CHECKING

from simplejinja._types import (
    ADDITIVE_TOKENS,
    COMPARE_TOKENS,
    MULTIPLICATIVE_TOKENS,
    UNARY_PREFIX_TOKENS,
    Token,
    TokenType,
)
from simplejinja.exceptions import ParseErrorKind
from simplejinja.nodes import (
    Binary,
    BinaryOperator,
    Expr,
    ListExpr,
    Literal,
    Parenthesis,
    Symbol,
    Unary,
    UnaryOperator,
)
from simplejinja.values import ExpressionValue

if TYPE_CHECKING:
    from simplejinja.exceptions import ParseError

_INT32_MAX = 2**31 - 1

BINARY_OPERATORS: dict[TokenType, BinaryOperator] = {
    TokenType.PLUS: BinaryOperator.ADD,
    TokenType.MINUS: BinaryOperator.SUBTRACT,
    TokenType.STAR: BinaryOperator.MULTIPLY,
    TokenType.SLASH: BinaryOperator.DIVIDE_FLOAT,
    TokenType.DOUBLE_SLASH: BinaryOperator.DIVIDE_INTEGER,
    TokenType.PERCENT: BinaryOperator.MODULO,
    TokenType.LESS: BinaryOperator.LESS,
    TokenType.LESS_EQUAL: BinaryOperator.LESS_OR_EQUAL,
    TokenType.DOUBLE_EQUAL: BinaryOperator.EQUAL,
    TokenType.GREATER_EQUAL: BinaryOperator.GREATER_OR_EQUAL,
    TokenType.GREATER: BinaryOperator.GREATER,
    TokenType.NOT_EQUAL: BinaryOperator.NOT_EQUAL,
}

UNARY_OPERATORS: dict[TokenType, UnaryOperator] = {
    TokenType.PLUS: UnaryOperator.POSITIVE,
    TokenType.MINUS: UnaryOperator.NEGATIVE,
}


class ExpressionParsingMixin:
    """Mixin for parsing expressions.

    Host attributes are declared via an inline TYPE_CHECKING block.
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

    def _parse_expression(self, offset: int) -> Expr | None:
        """Parse a full expression, filters included."""
        return self._parse_filter(offset)

    def _parse_filter(self, offset: int) -> Expr | None:
        left = self._parse_or(offset)
        if left is None:
            return None
        pipe = self._token_at(left.end)
        while pipe.type is TokenType.PIPE:
            right = self._parse_filter_call(pipe.end)
            if right is None:
                raise self._error(ParseErrorKind.MISSING_FILTER_CALL, pipe.end)
            left = Binary(left.start, right.end, BinaryOperator.PIPE, left, right)
            pipe = self._token_at(right.end)
        return left

    def _parse_filter_call(self, offset: int) -> Expr | None:
        """Parse a pipe's right-hand side: ``name`` or ``name(args)``.

        The target is parsed as an ``or``-level expression, so anything but
        a bare symbol (``-f``, ``f + g``, ``f.x``) is rejected as an invalid
        filter. The next ``|`` is left for the enclosing filter chain.
        """
        target = self._parse_or(offset)
        if target is None:
            return None
        if not isinstance(target, Symbol):
            raise self._error(ParseErrorKind.INVALID_FILTER, target.start)
        arguments = self._parse_argument_list(target.end)
        if arguments is None:
            return target
        return Binary(target.start, arguments.end, BinaryOperator.FUNCTION_CALL, target, arguments)

    def _parse_argument_list(self, offset: int) -> ListExpr | None:
        """Parse ``( expr, expr, ... )``, or return None if no ``(`` follows."""
        open_paren = self._token_at(offset)
        if open_paren.type is not TokenType.LEFT_PAREN:
            return None

        items: list[Expr] = []
        end = open_paren.end
        item = self._parse_or(open_paren.end)
        if item is not None:
            items.append(item)
            end = item.end
            separator = self._token_at(item.end)
            while separator.type is TokenType.COMMA:
                item = self._parse_or(separator.end)
                if item is None:
                    raise self._error(ParseErrorKind.MISSING_EXPRESSION, separator.end)
                items.append(item)
                end = item.end
                separator = self._token_at(item.end)

        close_paren = self._token_at(end)
        if close_paren.type is not TokenType.RIGHT_PAREN:
            raise self._error(ParseErrorKind.MISSING_PARENTHESIS, end)
        return ListExpr(open_paren.start, close_paren.end, tuple(items))

    def _parse_or(self, offset: int) -> Expr | None:
        left = self._parse_and(offset)
        if left is None:
            return None
        token = self._token_at(left.end)
        while token.type is TokenType.OR:
            right = self._require(self._parse_and(token.end), token)
            left = Binary(left.start, right.end, BinaryOperator.OR, left, right)
            token = self._token_at(right.end)
        return left

    def _parse_and(self, offset: int) -> Expr | None:
        left = self._parse_not(offset)
        if left is None:
            return None
        token = self._token_at(left.end)
        while token.type is TokenType.AND:
            right = self._require(self._parse_not(token.end), token)
            left = Binary(left.start, right.end, BinaryOperator.AND, left, right)
            token = self._token_at(right.end)
        return left

    def _parse_not(self, offset: int) -> Expr | None:
        token = self._token_at(offset)
        if token.type is not TokenType.NOT:
            return self._parse_compare(offset)
        operand = self._require(self._parse_not(token.end), token)
        return Unary(token.start, operand.end, UnaryOperator.NOT, operand)

    def _parse_compare(self, offset: int) -> Expr | None:
        return self._parse_binary_level(offset, COMPARE_TOKENS, self._parse_additive)

    def _parse_additive(self, offset: int) -> Expr | None:
        return self._parse_binary_level(offset, ADDITIVE_TOKENS, self._parse_multiplicative)

    def _parse_multiplicative(self, offset: int) -> Expr | None:
        return self._parse_binary_level(offset, MULTIPLICATIVE_TOKENS, self._parse_unary)

    def _parse_binary_level(
        self,
        offset: int,
        operators: frozenset[TokenType],
        parse_operand: Callable[[int], Expr | None],
    ) -> Expr | None:
        """Parse a left-associative chain of *operators* over *parse_operand*."""
        left = parse_operand(offset)
        if left is None:
            return None
        token = self._token_at(left.end)
        while token.type in operators:
            right = self._require(parse_operand(token.end), token)
            left = Binary(left.start, right.end, BINARY_OPERATORS[token.type], left, right)
            token = self._token_at(right.end)
        return left

    def _parse_unary(self, offset: int) -> Expr | None:
        token = self._token_at(offset)
        if token.type not in UNARY_PREFIX_TOKENS:
            return self._parse_postfix(offset)
        # A sign applies to one postfix operand, so "- -a" has no operand
        operand = self._require(self._parse_postfix(token.end), token)
        return Unary(token.start, operand.end, UNARY_OPERATORS[token.type], operand)

    def _parse_postfix(self, offset: int) -> Expr | None:
        """Parse an atom followed by any chain of ``.name`` and ``[expr]``."""
        expr = self._parse_atom(offset)
        if expr is None:
            return None
        token = self._token_at(expr.end)
        while True:
            if token.type is TokenType.DOT:
                name = self._token_at(token.end)
                if name.type is not TokenType.SYMBOL:
                    raise self._error(ParseErrorKind.INVALID_SYMBOL, token.end)
                member = Symbol(name.start, name.end, name.text(self._source))
                expr = Binary(expr.start, member.end, BinaryOperator.MEMBER_ACCESS, expr, member)
            elif token.type is TokenType.LEFT_BRACKET:
                key = self._require(self._parse_expression(token.end), token)
                close = self._token_at(key.end)
                if close.type is not TokenType.RIGHT_BRACKET:
                    raise self._error(ParseErrorKind.MISSING_END_OF_SUBSCRIPT, key.end)
                expr = Binary(expr.start, close.end, BinaryOperator.SUBSCRIPT, expr, key)
            else:
                return expr
            token = self._token_at(expr.end)

    def _parse_atom(self, offset: int) -> Expr | None:
        token = self._token_at(offset)
        match token.type:
            case TokenType.SYMBOL:
                return Symbol(token.start, token.end, token.text(self._source))
            case TokenType.STRING:
                return self._literal(token, ExpressionValue.from_string(self._string_content(token)))
            case TokenType.INTEGER:
                digits = token.text(self._source)
                # Length check first: int() rejects very long digit strings
                if len(digits.lstrip("0")) > 10 or int(digits) > _INT32_MAX:
                    raise self._error(ParseErrorKind.INVALID_NUMBER, token.start)
                return self._literal(token, ExpressionValue.from_integer(int(digits)))
            case TokenType.FLOAT:
                number = float(token.text(self._source))
                if not math.isfinite(number):
                    raise self._error(ParseErrorKind.INVALID_NUMBER, token.start)
                return self._literal(token, ExpressionValue.from_float(number))
            case TokenType.TRUE | TokenType.FALSE:
                return self._literal(token, ExpressionValue.from_boolean(token.type is TokenType.TRUE))
            case TokenType.LEFT_PAREN:
                return self._parse_parenthesis(token)
            case _:
                return None

    def _parse_parenthesis(self, open_paren: Token) -> Expr:
        inner = self._require(self._parse_expression(open_paren.end), open_paren)
        close = self._token_at(inner.end)
        if close.type is not TokenType.RIGHT_PAREN:
            raise self._error(ParseErrorKind.MISSING_PARENTHESIS, inner.end)
        return Parenthesis(open_paren.start, close.end, inner)

    def _string_content(self, token: Token) -> str:
        # Unterminated strings run to the end of the source with no closing quote
        end = token.end
        if end - token.start >= 2 and self._source[end - 1] == "'":
            end -= 1
        return self._source[token.start + 1 : end]

    @staticmethod
    def _literal(token: Token, value: ExpressionValue) -> Literal:
        return Literal(
            token.start,
            token.end,
            value.value_type,
            value.string,
            value.integer,
            value.float,
            value.boolean,
        )

    def _require(self, expr: Expr | None, operator: Token) -> Expr:
        """Return *expr*, or fail with MissingExpression after *operator*."""
        if expr is None:
            raise self._error(ParseErrorKind.MISSING_EXPRESSION, operator.end)
        return expr
