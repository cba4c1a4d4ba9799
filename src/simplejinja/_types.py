"""Token types for the simplejinja lexer.

Tokens are plain offset spans into the template source: the lexer never
copies text, the parser slices the source when it needs a token's text.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    """Kinds of tokens produced by :func:`simplejinja.lexer.next_token`."""

    INVALID = auto()

    # Block delimiters
    STATEMENT_BEGIN = auto()  # {%
    STATEMENT_END = auto()  # %}
    EXPRESSION_BEGIN = auto()  # {{
    EXPRESSION_END = auto()  # }}

    # Keywords
    IF = auto()
    ELIF = auto()
    ELSE = auto()
    ENDIF = auto()
    FOR = auto()
    IN = auto()
    ENDFOR = auto()
    NOT = auto()
    OR = auto()
    AND = auto()
    TRUE = auto()
    FALSE = auto()

    # Operators and punctuation
    PLUS = auto()  # +
    MINUS = auto()  # -
    STAR = auto()  # *
    SLASH = auto()  # /
    DOUBLE_SLASH = auto()  # //
    PERCENT = auto()  # %
    LESS = auto()  # <
    LESS_EQUAL = auto()  # <=
    DOUBLE_EQUAL = auto()  # ==
    GREATER_EQUAL = auto()  # >=
    GREATER = auto()  # >
    NOT_EQUAL = auto()  # !=
    PIPE = auto()  # |
    LEFT_PAREN = auto()  # (
    RIGHT_PAREN = auto()  # )
    LEFT_BRACKET = auto()  # [
    RIGHT_BRACKET = auto()  # ]
    DOT = auto()  # .
    COMMA = auto()  # ,

    # Literals and names
    STRING = auto()
    INTEGER = auto()
    FLOAT = auto()
    SYMBOL = auto()


KEYWORDS: dict[str, TokenType] = {
    "if": TokenType.IF,
    "elif": TokenType.ELIF,
    "else": TokenType.ELSE,
    "endif": TokenType.ENDIF,
    "for": TokenType.FOR,
    "in": TokenType.IN,
    "endfor": TokenType.ENDFOR,
    "not": TokenType.NOT,
    "or": TokenType.OR,
    "and": TokenType.AND,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
}

COMPARE_TOKENS: frozenset[TokenType] = frozenset(
    {
        TokenType.LESS,
        TokenType.LESS_EQUAL,
        TokenType.DOUBLE_EQUAL,
        TokenType.GREATER_EQUAL,
        TokenType.GREATER,
        TokenType.NOT_EQUAL,
    }
)

ADDITIVE_TOKENS: frozenset[TokenType] = frozenset({TokenType.PLUS, TokenType.MINUS})

MULTIPLICATIVE_TOKENS: frozenset[TokenType] = frozenset(
    {
        TokenType.STAR,
        TokenType.SLASH,
        TokenType.DOUBLE_SLASH,
        TokenType.PERCENT,
    }
)

UNARY_PREFIX_TOKENS: frozenset[TokenType] = frozenset({TokenType.PLUS, TokenType.MINUS})


@dataclass(frozen=True, slots=True)
class Token:
    """A lexed token: the half-open span ``[start, end)`` and its type."""

    start: int
    end: int
    type: TokenType

    @classmethod
    def invalid(cls, start: int) -> Token:
        """Sentinel meaning "no valid token at this offset"."""
        return cls(start, start, TokenType.INVALID)

    @property
    def is_invalid(self) -> bool:
        return self.type is TokenType.INVALID

    def text(self, source: str) -> str:
        """Return the source text this token covers."""
        return source[self.start : self.end]
