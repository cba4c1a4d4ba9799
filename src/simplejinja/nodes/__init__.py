"""Syntax tree nodes for simplejinja.

Three families share the :class:`Node` base:

- expressions: Literal, Symbol, Unary, Binary, ListExpr, Parenthesis
- clauses: the flat first-pass parser output, never seen by the renderer
- blocks: the nested tree a compiled template keeps and renders
"""

from simplejinja.nodes.base import Node
from simplejinja.nodes.blocks import (
    Block,
    ExpressionBlock,
    ForStatementBlock,
    IfStatementBlock,
    TestBlock,
    TextBlock,
)
from simplejinja.nodes.clauses import (
    Clause,
    ElseClause,
    ElseIfClause,
    EndForClause,
    EndIfClause,
    ExpressionClause,
    ForClause,
    IfClause,
    TextClause,
)
from simplejinja.nodes.expressions import (
    COMPARISON_OPERATORS,
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
from simplejinja.values import ValueType

__all__ = [
    "COMPARISON_OPERATORS",
    "Binary",
    "BinaryOperator",
    "Block",
    "Clause",
    "ElseClause",
    "ElseIfClause",
    "EndForClause",
    "EndIfClause",
    "Expr",
    "ExpressionBlock",
    "ExpressionClause",
    "ForClause",
    "ForStatementBlock",
    "IfClause",
    "IfStatementBlock",
    "ListExpr",
    "Literal",
    "Node",
    "Parenthesis",
    "Symbol",
    "TestBlock",
    "TextBlock",
    "TextClause",
    "Unary",
    "UnaryOperator",
    "ValueType",
]
