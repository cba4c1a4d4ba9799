"""Expression nodes for the simplejinja syntax tree."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from simplejinja.nodes.base import Node
from simplejinja.values import ValueType


class UnaryOperator(Enum):
    NOT = "Not"
    POSITIVE = "Positive"
    NEGATIVE = "Negative"


class BinaryOperator(Enum):
    PIPE = "Pipe"
    FUNCTION_CALL = "FunctionCall"
    SUBSCRIPT = "Subscript"
    MEMBER_ACCESS = "MemberAccess"
    OR = "Or"
    AND = "And"
    ADD = "Add"
    SUBTRACT = "Subtract"
    MULTIPLY = "Multiply"
    DIVIDE_FLOAT = "DivideFloat"
    DIVIDE_INTEGER = "DivideInteger"
    MODULO = "Modulo"
    LESS = "Less"
    LESS_OR_EQUAL = "LessOrEqual"
    EQUAL = "Equal"
    GREATER_OR_EQUAL = "GreaterOrEqual"
    GREATER = "Greater"
    NOT_EQUAL = "NotEqual"


COMPARISON_OPERATORS: frozenset[BinaryOperator] = frozenset(
    {
        BinaryOperator.LESS,
        BinaryOperator.LESS_OR_EQUAL,
        BinaryOperator.EQUAL,
        BinaryOperator.GREATER_OR_EQUAL,
        BinaryOperator.GREATER,
        BinaryOperator.NOT_EQUAL,
    }
)


@dataclass(frozen=True, slots=True)
class Expr(Node):
    """Base class for expressions."""


@dataclass(frozen=True, slots=True)
class Literal(Expr):
    """Constant with every representation precomputed: 'a', 1, 1.5, true

    The renderer reads whichever form an operation needs without
    reparsing the source text.
    """

    value_type: ValueType
    string_value: str
    integer_value: int
    float_value: float
    boolean_value: bool


@dataclass(frozen=True, slots=True)
class Symbol(Expr):
    """Name reference: {{ user }}"""

    name: str


@dataclass(frozen=True, slots=True)
class Unary(Expr):
    """Prefix operation: not a, -a, +a"""

    op: UnaryOperator
    operand: Expr


@dataclass(frozen=True, slots=True)
class Binary(Expr):
    """Two-operand operation, including access and filter application.

    ``a.b`` and ``a[b]`` are MEMBER_ACCESS and SUBSCRIPT, ``a | f`` is PIPE
    with a Symbol on the right, ``a | f(x)`` is PIPE whose right side is a
    FUNCTION_CALL of the filter symbol and a :class:`ListExpr`.
    """

    op: BinaryOperator
    left: Expr
    right: Expr


@dataclass(frozen=True, slots=True)
class ListExpr(Expr):
    """Call argument list: (a, b, c)"""

    items: Sequence[Expr]


@dataclass(frozen=True, slots=True)
class Parenthesis(Expr):
    """Grouping: (a + b)"""

    inner: Expr
