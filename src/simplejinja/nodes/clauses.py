"""Clause nodes: the flat output of the first parser pass.

Clauses exist only between the clause scan and the block builder. Each
clause span covers its delimiters, so ``{% if a %}`` is one IfClause from
the ``{`` to the closing ``}``.
"""

from __future__ import annotations

from dataclasses import dataclass

from simplejinja.nodes.base import Node
from simplejinja.nodes.expressions import Expr, Symbol


@dataclass(frozen=True, slots=True)
class Clause(Node):
    """Base class for clauses."""


@dataclass(frozen=True, slots=True)
class TextClause(Clause):
    """Literal text run."""


@dataclass(frozen=True, slots=True)
class IfClause(Clause):
    """{% if test %}"""

    test: Expr


@dataclass(frozen=True, slots=True)
class ElseIfClause(Clause):
    """{% elif test %}"""

    test: Expr


@dataclass(frozen=True, slots=True)
class ElseClause(Clause):
    """{% else %}"""


@dataclass(frozen=True, slots=True)
class EndIfClause(Clause):
    """{% endif %}"""


@dataclass(frozen=True, slots=True)
class ForClause(Clause):
    """{% for name in iterator %}"""

    loop_variable: Symbol
    iterator: Expr


@dataclass(frozen=True, slots=True)
class EndForClause(Clause):
    """{% endfor %}"""


@dataclass(frozen=True, slots=True)
class ExpressionClause(Clause):
    """{{ expression }}"""

    expression: Expr
