"""Tree-walking renderer for simplejinja.

Walks the block tree produced by :func:`simplejinja.parser.parse` and
evaluates expressions into :class:`~simplejinja.values.ExpressionValue`
instances, writing text to the per-render output buffer.

Dispatch is dict-based: block types, unary operators and binary operators
each map to a bound handler, built once per render.

Evaluation rules:
    - Undefined names evaluate to the empty string, never an error.
    - ``or`` / ``and`` short-circuit and produce booleans.
    - An if group evaluates its tests in order and stops at the first
      true one; later tests are never evaluated.
    - A for loop over something that is not iterable renders nothing.
    - Type mismatches raise ``UnsupportedOperation`` and zero divisors
      raise ``DividedByZero``, both anchored at the left operand. The type
      check runs first.
    - Filter arguments are evaluated before the filter is looked up.
    - Left-leaning operator chains are folded in a loop. Nesting that still
      exhausts the interpreter stack raises ``EvaluationTooDeep``.

Thread-Safety:
    The block tree is only read. All mutable state lives in the
    RenderContext created for each call.
"""

from __future__ import annotations

import logging
import operator
from collections.abc import Callable, Sequence
from typing import Any

from simplejinja import accessor
from simplejinja.exceptions import RenderError, RenderErrorKind
from simplejinja.nodes import (
    Binary,
    BinaryOperator,
    Block,
    Expr,
    ExpressionBlock,
    ForStatementBlock,
    IfStatementBlock,
    ListExpr,
    Literal,
    Parenthesis,
    Symbol,
    TextBlock,
    Unary,
    UnaryOperator,
)
from simplejinja.render_context import RenderContext, render_context
from simplejinja.values import EMPTY, ExpressionValue, ValueType, boolean_value

logger = logging.getLogger(__name__)

__all__ = ["Renderer", "render"]

_ORDERING: dict[BinaryOperator, Callable[[Any, Any], bool]] = {
    BinaryOperator.LESS: operator.lt,
    BinaryOperator.LESS_OR_EQUAL: operator.le,
    BinaryOperator.EQUAL: operator.eq,
    BinaryOperator.GREATER_OR_EQUAL: operator.ge,
    BinaryOperator.GREATER: operator.gt,
    BinaryOperator.NOT_EQUAL: operator.ne,
}

_EQUALITY = frozenset({BinaryOperator.EQUAL, BinaryOperator.NOT_EQUAL})

# Operators that always evaluate both operands
_VALUE_OPERATORS = frozenset(
    {
        BinaryOperator.ADD,
        BinaryOperator.SUBTRACT,
        BinaryOperator.MULTIPLY,
        BinaryOperator.DIVIDE_FLOAT,
        BinaryOperator.DIVIDE_INTEGER,
        BinaryOperator.MODULO,
        *_ORDERING,
    }
)


def _truncated_divmod(dividend: int, divisor: int) -> tuple[int, int]:
    """Integer division rounding toward zero.

    The remainder takes the sign of the dividend: ``-7 // 2`` is -3 and
    ``-7 % 2`` is -1.
    """
    quotient = abs(dividend) // abs(divisor)
    if (dividend < 0) != (divisor < 0):
        quotient = -quotient
    return quotient, dividend - quotient * divisor


class Renderer:
    """Renders blocks against one RenderContext."""

    def __init__(self, ctx: RenderContext):
        self._ctx = ctx
        self._block_handlers: dict[type[Block], Callable[[Any], None]] = {
            TextBlock: self._render_text,
            ExpressionBlock: self._render_expression,
            IfStatementBlock: self._render_if,
            ForStatementBlock: self._render_for,
        }
        self._expr_handlers: dict[type[Expr], Callable[[Any], ExpressionValue]] = {
            Literal: self._eval_literal,
            Symbol: self._eval_symbol,
            Unary: self._eval_unary,
            Binary: self._eval_binary,
            Parenthesis: self._eval_parenthesis,
            ListExpr: self._eval_structural,
        }
        # Binary operators applied to the already evaluated left operand
        self._binary_handlers: dict[
            BinaryOperator,
            Callable[[Binary, ExpressionValue], ExpressionValue],
        ] = {
            BinaryOperator.OR: self._apply_or,
            BinaryOperator.AND: self._apply_and,
            BinaryOperator.PIPE: self._apply_pipe,
            BinaryOperator.SUBSCRIPT: self._apply_subscript,
            BinaryOperator.MEMBER_ACCESS: self._apply_member_access,
            BinaryOperator.FUNCTION_CALL: self._apply_call,
            **dict.fromkeys(_VALUE_OPERATORS, self._apply_operator),
        }
        # Operators applied to both evaluated operands
        self._value_handlers: dict[
            BinaryOperator,
            Callable[[Binary, ExpressionValue, ExpressionValue], ExpressionValue],
        ] = {
            BinaryOperator.ADD: self._add,
            BinaryOperator.SUBTRACT: self._subtract,
            BinaryOperator.MULTIPLY: self._multiply,
            BinaryOperator.DIVIDE_FLOAT: self._divide_float,
            BinaryOperator.DIVIDE_INTEGER: self._divide_integer,
            BinaryOperator.MODULO: self._modulo,
            **dict.fromkeys(_ORDERING, self._compare),
        }

    # ─────────────────────────────────────────────────────────────────────────
    # Blocks
    # ─────────────────────────────────────────────────────────────────────────

    def render_blocks(self, blocks: Sequence[Block]) -> None:
        for block in blocks:
            handler = self._block_handlers.get(type(block))
            if handler is None:
                raise TypeError(f"Unknown block type: {type(block).__name__}")
            handler(block)

    def _render_text(self, block: TextBlock) -> None:
        self._ctx.write(block.content)

    def _render_expression(self, block: ExpressionBlock) -> None:
        self._ctx.write(self._evaluate_root(block.expression).string)

    def _render_if(self, block: IfStatementBlock) -> None:
        for arm in block.tests:
            if arm.test is None or self._evaluate_root(arm.test).boolean:
                self.render_blocks(arm.body)
                return

    def _render_for(self, block: ForStatementBlock) -> None:
        iterable = self._evaluate_root(block.iterator)
        if iterable.value_type is not ValueType.OBJECT:
            return
        items = accessor.iterate(iterable.object)
        if items is None:
            return
        name = block.loop_variable.name
        with self._ctx.shadow(name):
            for item in items:
                self._ctx.locals[name] = item
                self.render_blocks(block.body)

    # ─────────────────────────────────────────────────────────────────────────
    # Expressions
    # ─────────────────────────────────────────────────────────────────────────

    def _evaluate_root(self, expr: Expr) -> ExpressionValue:
        """Evaluate a block's expression, reporting runaway nesting."""
        try:
            return self.evaluate(expr)
        except RecursionError:
            raise self._error(RenderErrorKind.EVALUATION_TOO_DEEP, expr) from None

    def evaluate(self, expr: Expr) -> ExpressionValue:
        """Evaluate *expr* in the current context."""
        handler = self._expr_handlers.get(type(expr))
        if handler is None:
            raise TypeError(f"Unknown expression type: {type(expr).__name__}")
        return handler(expr)

    def _eval_literal(self, expr: Literal) -> ExpressionValue:
        native: Any
        match expr.value_type:
            case ValueType.STRING:
                native = expr.string_value
            case ValueType.INTEGER:
                native = expr.integer_value
            case ValueType.FLOAT:
                native = expr.float_value
            case _:
                native = expr.boolean_value
        return ExpressionValue(
            expr.value_type,
            expr.string_value,
            expr.integer_value,
            expr.float_value,
            expr.boolean_value,
            native,
        )

    def _eval_symbol(self, expr: Symbol) -> ExpressionValue:
        if expr.name in self._ctx.locals:
            return ExpressionValue.of(self._ctx.locals[expr.name])
        value = accessor.get_member(self._ctx.data, expr.name)
        if value is accessor.MISSING:
            return EMPTY
        return ExpressionValue.of(value)

    def _eval_parenthesis(self, expr: Parenthesis) -> ExpressionValue:
        return self.evaluate(expr.inner)

    def _eval_structural(self, expr: Expr) -> ExpressionValue:
        # Argument lists and calls only appear on the right of a pipe
        raise TypeError(f"{type(expr).__name__} cannot be evaluated outside a filter call")

    def _eval_unary(self, expr: Unary) -> ExpressionValue:
        value = self.evaluate(expr.operand)
        if expr.op is UnaryOperator.NOT:
            return boolean_value(not value.boolean)
        negate = expr.op is UnaryOperator.NEGATIVE
        if value.value_type is ValueType.INTEGER:
            return ExpressionValue.from_integer(-value.integer if negate else value.integer)
        if value.value_type is ValueType.FLOAT:
            return ExpressionValue.from_float(-value.float if negate else value.float)
        raise self._error(RenderErrorKind.UNSUPPORTED_OPERATION, expr.operand)

    def _eval_binary(self, expr: Binary) -> ExpressionValue:
        """Evaluate a binary node and the left-leaning chain under it.

        ``a + b + c`` parses as ``(a + b) + c``, so the left spine of a long
        operator chain is walked with a loop and folded bottom-up. Only
        right operands recurse.
        """
        spine: list[Binary] = []
        node: Expr = expr
        while isinstance(node, Binary):
            spine.append(node)
            node = node.left
        value = self.evaluate(node)
        for binary in reversed(spine):
            value = self._binary_handlers[binary.op](binary, value)
        return value

    def _apply_or(self, expr: Binary, left: ExpressionValue) -> ExpressionValue:
        if left.boolean:
            return boolean_value(True)
        return boolean_value(self.evaluate(expr.right).boolean)

    def _apply_and(self, expr: Binary, left: ExpressionValue) -> ExpressionValue:
        if not left.boolean:
            return boolean_value(False)
        return boolean_value(self.evaluate(expr.right).boolean)

    def _apply_member_access(self, expr: Binary, target: ExpressionValue) -> ExpressionValue:
        if not isinstance(expr.right, Symbol):
            raise TypeError("Member access requires a symbol on the right")
        value = accessor.get_member(target.object, expr.right.name)
        if value is accessor.MISSING:
            return EMPTY
        return ExpressionValue.of(value)

    def _apply_subscript(self, expr: Binary, target: ExpressionValue) -> ExpressionValue:
        key = self.evaluate(expr.right)
        value = accessor.get_item(target.object, key.object, key.integer)
        if value is accessor.MISSING:
            return EMPTY
        return ExpressionValue.of(value)

    def _apply_pipe(self, expr: Binary, value: ExpressionValue) -> ExpressionValue:
        call = expr.right
        argument_nodes: Sequence[Expr] = ()
        if isinstance(call, Binary) and call.op is BinaryOperator.FUNCTION_CALL:
            if not isinstance(call.left, Symbol) or not isinstance(call.right, ListExpr):
                raise TypeError("Filter call requires a symbol and an argument list")
            filter_name = call.left.name
            argument_nodes = call.right.items
        elif isinstance(call, Symbol):
            filter_name = call.name
        else:
            raise TypeError(f"Invalid filter node: {type(call).__name__}")

        # Arguments are evaluated before the filter is looked up
        args = [value.object]
        args.extend(self.evaluate(node).object for node in argument_nodes)
        func = self._ctx.filters.get(filter_name)
        if func is None:
            raise self._error(RenderErrorKind.UNSUPPORTED_FILTER, call)
        try:
            result = func(*args)
        except Exception as exc:
            logger.debug("filter %r failed: %r", filter_name, exc)
            raise self._error(RenderErrorKind.FILTER_CALL_FAILED, call, cause=exc) from exc
        return ExpressionValue.of(result)

    def _apply_call(self, expr: Binary, left: ExpressionValue) -> ExpressionValue:
        return self._eval_structural(expr)

    def _apply_operator(self, expr: Binary, left: ExpressionValue) -> ExpressionValue:
        right = self.evaluate(expr.right)
        return self._value_handlers[expr.op](expr, left, right)

    # ─────────────────────────────────────────────────────────────────────────
    # Arithmetic and comparison
    # ─────────────────────────────────────────────────────────────────────────

    def _add(self, expr: Binary, left: ExpressionValue, right: ExpressionValue) -> ExpressionValue:
        if left.value_type is ValueType.STRING or right.value_type is ValueType.STRING:
            return ExpressionValue.from_string(left.string + right.string)
        if left.is_numeric and right.is_numeric:
            return self._arithmetic(left, right, operator.add)
        raise self._error(RenderErrorKind.UNSUPPORTED_OPERATION, expr.left)

    def _subtract(self, expr: Binary, left: ExpressionValue, right: ExpressionValue) -> ExpressionValue:
        self._require_numbers(expr, left, right)
        return self._arithmetic(left, right, operator.sub)

    def _multiply(self, expr: Binary, left: ExpressionValue, right: ExpressionValue) -> ExpressionValue:
        self._require_numbers(expr, left, right)
        return self._arithmetic(left, right, operator.mul)

    def _divide_float(self, expr: Binary, left: ExpressionValue, right: ExpressionValue) -> ExpressionValue:
        self._require_numbers(expr, left, right)
        if right.float == 0.0:
            raise self._error(RenderErrorKind.DIVIDED_BY_ZERO, expr.left)
        return ExpressionValue.from_float(left.float / right.float)

    def _divide_integer(self, expr: Binary, left: ExpressionValue, right: ExpressionValue) -> ExpressionValue:
        self._require_integers(expr, left, right)
        return ExpressionValue.from_integer(_truncated_divmod(left.integer, right.integer)[0])

    def _modulo(self, expr: Binary, left: ExpressionValue, right: ExpressionValue) -> ExpressionValue:
        self._require_integers(expr, left, right)
        return ExpressionValue.from_integer(_truncated_divmod(left.integer, right.integer)[1])

    def _compare(self, expr: Binary, left: ExpressionValue, right: ExpressionValue) -> ExpressionValue:
        compare = _ORDERING[expr.op]
        lt, rt = left.value_type, right.value_type
        if lt is ValueType.STRING and rt is ValueType.STRING:
            return boolean_value(compare(left.string, right.string))
        if left.is_numeric and right.is_numeric:
            return boolean_value(compare(left.float, right.float))
        if expr.op in _EQUALITY:
            if lt is ValueType.BOOLEAN and rt is ValueType.BOOLEAN:
                return boolean_value(compare(left.boolean, right.boolean))
            if lt is ValueType.OBJECT:
                same = left.object is right.object
                return boolean_value(same if expr.op is BinaryOperator.EQUAL else not same)
        raise self._error(RenderErrorKind.UNSUPPORTED_OPERATION, expr.left)

    @staticmethod
    def _arithmetic(
        left: ExpressionValue,
        right: ExpressionValue,
        op: Callable[[Any, Any], Any],
    ) -> ExpressionValue:
        if left.value_type is ValueType.INTEGER and right.value_type is ValueType.INTEGER:
            return ExpressionValue.from_integer(op(left.integer, right.integer))
        return ExpressionValue.from_float(op(left.float, right.float))

    def _require_numbers(self, expr: Binary, left: ExpressionValue, right: ExpressionValue) -> None:
        if not (left.is_numeric and right.is_numeric):
            raise self._error(RenderErrorKind.UNSUPPORTED_OPERATION, expr.left)

    def _require_integers(self, expr: Binary, left: ExpressionValue, right: ExpressionValue) -> None:
        if left.value_type is not ValueType.INTEGER or right.value_type is not ValueType.INTEGER:
            raise self._error(RenderErrorKind.UNSUPPORTED_OPERATION, expr.left)
        if right.integer == 0:
            raise self._error(RenderErrorKind.DIVIDED_BY_ZERO, expr.left)

    def _error(
        self,
        kind: RenderErrorKind,
        node: Expr,
        *,
        cause: BaseException | None = None,
    ) -> RenderError:
        return RenderError(
            kind,
            node.start,
            self._ctx.source,
            name=self._ctx.template_name,
            cause=cause,
        )


def render(
    blocks: Sequence[Block],
    source: str,
    data: Any = None,
    *,
    name: str | None = None,
) -> str:
    """Render *blocks* parsed from *source* against *data*.

    Args:
        blocks: Top-level blocks from :func:`simplejinja.parser.parse`.
        source: The source the blocks were parsed from, for error positions.
        data: Data root; names are looked up as its members.
        name: Optional template name for error messages.

    Returns:
        The rendered text. On failure nothing is returned; the partial
        output is discarded with the context.

    Raises:
        RenderError: On the first unsupported operation.
    """
    with render_context(source, data, template_name=name) as ctx:
        Renderer(ctx).render_blocks(blocks)
        return ctx.getvalue()
