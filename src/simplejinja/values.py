"""Runtime values for the simplejinja evaluator.

Every expression evaluates to an :class:`ExpressionValue`: a tagged value
that carries all of its cross-representations (string, integer, float,
boolean, object) computed once at construction. Evaluator branches read
whichever form they need without re-parsing or re-formatting.

Coercion rules:
    - ``str``: numeric forms from a best-effort parse (0 on failure),
      boolean is "non-empty".
    - ``int``: signed 64-bit, wrapping on overflow. Canonical decimal
      text, boolean is "non-zero".
    - ``float``: shortest round-trip text without a trailing ``.0``,
      integer form truncates, boolean is "non-zero".
    - ``bool``: ``"True"`` / ``"False"``, numeric forms 1 / 0.
    - anything else: string is the display form (``""`` for ``None``),
      numeric and boolean forms derive from that string.

Thread-Safety:
    Values are immutable and created per render.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ValueType(Enum):
    """Type tag shared by literals and runtime values."""

    STRING = "String"
    INTEGER = "Integer"
    FLOAT = "Float"
    BOOLEAN = "Boolean"
    OBJECT = "Object"


NUMERIC_TYPES: frozenset[ValueType] = frozenset({ValueType.INTEGER, ValueType.FLOAT})

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def parse_integer(text: str) -> int:
    """Best-effort integer parse: surrounding whitespace allowed, 0 on failure."""
    text = text.strip()
    if len(text) > 40 or not _INTEGER_RE.fullmatch(text):
        return 0
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        return 0
    return value


def parse_float(text: str) -> float:
    """Best-effort float parse: surrounding whitespace allowed, 0.0 on failure."""
    text = text.strip()
    if not _FLOAT_RE.fullmatch(text):
        return 0.0
    return float(text)


def format_float(value: float) -> str:
    """Format a float in its shortest round-trip form.

    Integral values drop the ``.0`` suffix so ``2 / 0.5`` renders as ``4``.
    """
    text = repr(value)
    if text.endswith(".0"):
        return text[:-2]
    return text


def format_boolean(value: bool) -> str:
    return "True" if value else "False"


def wrap_int64(value: int) -> int:
    """Reduce *value* to a signed 64-bit integer, wrapping on overflow.

    >>> wrap_int64(2**63)
    -9223372036854775808
    """
    if _INT64_MIN <= value <= _INT64_MAX:
        return value
    return (value - _INT64_MIN) % 2**64 + _INT64_MIN


def truncate_to_int(value: float) -> int:
    """Truncate toward zero; non-finite floats become 0."""
    if not math.isfinite(value):
        return 0
    return int(value)


@dataclass(frozen=True, slots=True)
class ExpressionValue:
    """Tagged evaluator value with eagerly computed representations.

    Attributes:
        value_type: Which representation is authoritative.
        string: String form (what ``{{ }}`` writes).
        integer: Integer form.
        float: Float form.
        boolean: Boolean form (truthiness).
        object: The host object; the native value for primitives.
    """

    value_type: ValueType
    string: str
    integer: int
    float: float
    boolean: bool
    object: Any

    @classmethod
    def from_string(cls, value: str) -> ExpressionValue:
        return cls(
            ValueType.STRING,
            value,
            parse_integer(value),
            parse_float(value),
            value != "",
            value,
        )

    @classmethod
    def from_integer(cls, value: int) -> ExpressionValue:
        """Integers are signed 64-bit; results past the range wrap around."""
        value = wrap_int64(value)
        return cls(ValueType.INTEGER, str(value), value, float(value), value != 0, value)

    @classmethod
    def from_float(cls, value: float) -> ExpressionValue:
        return cls(
            ValueType.FLOAT,
            format_float(value),
            truncate_to_int(value),
            value,
            value != 0.0,
            value,
        )

    @classmethod
    def from_boolean(cls, value: bool) -> ExpressionValue:
        return cls(
            ValueType.BOOLEAN,
            format_boolean(value),
            1 if value else 0,
            1.0 if value else 0.0,
            value,
            value,
        )

    @classmethod
    def from_object(cls, value: Any) -> ExpressionValue:
        text = "" if value is None else str(value)
        return cls(
            ValueType.OBJECT,
            text,
            parse_integer(text),
            parse_float(text),
            text != "",
            value,
        )

    @classmethod
    def of(cls, data: Any) -> ExpressionValue:
        """Wrap host data, picking the value type from its Python type.

        ``bool`` is checked before ``int`` since it is an ``int`` subclass.
        """
        if isinstance(data, str):
            return cls.from_string(data)
        if isinstance(data, bool):
            return cls.from_boolean(data)
        if isinstance(data, int):
            return cls.from_integer(data)
        if isinstance(data, float):
            return cls.from_float(data)
        return cls.from_object(data)

    @property
    def is_numeric(self) -> bool:
        return self.value_type in NUMERIC_TYPES


EMPTY = ExpressionValue.from_string("")
TRUE = ExpressionValue.from_boolean(True)
FALSE = ExpressionValue.from_boolean(False)


def boolean_value(flag: bool) -> ExpressionValue:
    """Return the shared TRUE/FALSE value for *flag*."""
    return TRUE if flag else FALSE
