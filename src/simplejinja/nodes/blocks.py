"""Block nodes: the nested syntax tree a compiled template keeps."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from simplejinja.nodes.base import Node
from simplejinja.nodes.expressions import Expr, Symbol


@dataclass(frozen=True, slots=True)
class Block(Node):
    """Base class for blocks."""


@dataclass(frozen=True, slots=True)
class TextBlock(Block):
    """Literal text, written verbatim."""

    content: str


@dataclass(frozen=True, slots=True)
class ExpressionBlock(Block):
    """Output expression: {{ expr }}"""

    expression: Expr


@dataclass(frozen=True, slots=True)
class ForStatementBlock(Block):
    """Loop: {% for x in items %}...{% endfor %}"""

    loop_variable: Symbol
    iterator: Expr
    body: Sequence[Block]


@dataclass(frozen=True, slots=True)
class TestBlock(Block):
    """One arm of an if group. ``test`` is None for the else arm."""

    __test__ = False  # not a pytest test class

    test: Expr | None
    body: Sequence[Block]


@dataclass(frozen=True, slots=True)
class IfStatementBlock(Block):
    """Conditional: {% if %}...{% elif %}...{% else %}...{% endif %}

    Holds at least one arm. At most one arm has no test and it is last.
    """

    tests: Sequence[TestBlock]
