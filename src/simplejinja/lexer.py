"""Position-addressed lexer for simplejinja.

The lexer has no cursor. :func:`next_token` is a pure function of the
source text and an offset, so parser productions can re-request the token
at any offset while looking ahead, without saving or restoring lexer state.

Token rules:
    - Whitespace before a token is skipped.
    - ``{%`` / ``{{`` / ``%}`` / ``}}`` are only recognized as pairs. A lone
      ``{`` or ``}`` is invalid, a lone ``%`` is the modulo operator.
    - ``//``, ``<=``, ``==``, ``>=``, ``!=`` are two-character tokens. ``=`` and
      ``!`` never stand alone.
    - Strings are ``'``-delimited and copied verbatim (no escapes). An
      unterminated string runs to the end of the source.
    - A number becomes a float only when a ``.`` is directly followed by a
      digit, so ``123.`` lexes as INTEGER then DOT.
    - Identifiers are ``[A-Za-z_][A-Za-z0-9_]*``. Keywords take precedence.

Example:
    >>> next_token("{% if a %}", 2)
    Token(start=3, end=5, type=<TokenType.IF: 6>)
"""

from __future__ import annotations

from simplejinja._types import KEYWORDS, Token, TokenType

_ASCII_DIGITS = frozenset("0123456789")
_IDENT_START = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_")
_IDENT_CHARS = _IDENT_START | _ASCII_DIGITS

# Characters that are always a complete token on their own.
_SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "|": TokenType.PIPE,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "[": TokenType.LEFT_BRACKET,
    "]": TokenType.RIGHT_BRACKET,
    ",": TokenType.COMMA,
}

# first char -> (second char -> pair type, fallback type or None if invalid)
_PAIR_TOKENS: dict[str, tuple[dict[str, TokenType], TokenType | None]] = {
    "{": ({"%": TokenType.STATEMENT_BEGIN, "{": TokenType.EXPRESSION_BEGIN}, None),
    "%": ({"}": TokenType.STATEMENT_END}, TokenType.PERCENT),
    "}": ({"}": TokenType.EXPRESSION_END}, None),
    "/": ({"/": TokenType.DOUBLE_SLASH}, TokenType.SLASH),
    "<": ({"=": TokenType.LESS_EQUAL}, TokenType.LESS),
    ">": ({"=": TokenType.GREATER_EQUAL}, TokenType.GREATER),
    "=": ({"=": TokenType.DOUBLE_EQUAL}, None),
    "!": ({"=": TokenType.NOT_EQUAL}, None),
}


def _char_at(source: str, index: int) -> str:
    """Return the character at *index*, or ``""`` outside the source."""
    if 0 <= index < len(source):
        return source[index]
    return ""


def _is_digit(ch: str) -> bool:
    return ch in _ASCII_DIGITS


def skip_whitespace(source: str, offset: int) -> int:
    """Return the first offset at or after *offset* that is not whitespace."""
    end = len(source)
    while offset < end and source[offset].isspace():
        offset += 1
    return offset


def next_token(source: str, offset: int) -> Token:
    """Return the token starting at or after *offset*.

    Args:
        source: Full template source.
        offset: Offset to start scanning from (whitespace is skipped).

    Returns:
        The next token. At end of input, or on a character that starts no
        token, an invalid token anchored at the scanned offset.
    """
    start = skip_whitespace(source, offset)
    ch = _char_at(source, start)
    if not ch:
        return Token.invalid(start)

    single = _SINGLE_CHAR_TOKENS.get(ch)
    if single is not None:
        return Token(start, start + 1, single)

    pair = _PAIR_TOKENS.get(ch)
    if pair is not None:
        pairs, fallback = pair
        second = pairs.get(_char_at(source, start + 1))
        if second is not None:
            return Token(start, start + 2, second)
        if fallback is not None:
            return Token(start, start + 1, fallback)
        return Token.invalid(start)

    if ch == ".":
        if _is_digit(_char_at(source, start + 1)):
            return _lex_fraction(source, start)
        return Token(start, start + 1, TokenType.DOT)

    if ch == "'":
        return _lex_string(source, start)

    if ch in _IDENT_START:
        return _lex_symbol_or_keyword(source, start)

    if _is_digit(ch):
        return _lex_number(source, start)

    return Token.invalid(start)


def _scan_digits(source: str, index: int) -> int:
    while _is_digit(_char_at(source, index)):
        index += 1
    return index


def _lex_string(source: str, start: int) -> Token:
    close = source.find("'", start + 1)
    if close == -1:
        return Token(start, len(source), TokenType.STRING)
    return Token(start, close + 1, TokenType.STRING)


def _lex_fraction(source: str, start: int) -> Token:
    # ".5" style float; the caller checked the digit after the dot
    end = _scan_digits(source, start + 1)
    return Token(start, end, TokenType.FLOAT)


def _lex_number(source: str, start: int) -> Token:
    end = _scan_digits(source, start + 1)
    if _char_at(source, end) == "." and _is_digit(_char_at(source, end + 1)):
        end = _scan_digits(source, end + 1)
        return Token(start, end, TokenType.FLOAT)
    return Token(start, end, TokenType.INTEGER)


def _lex_symbol_or_keyword(source: str, start: int) -> Token:
    end = start + 1
    while _char_at(source, end) in _IDENT_CHARS:
        end += 1
    word = source[start:end]
    return Token(start, end, KEYWORDS.get(word, TokenType.SYMBOL))


def tokenize(source: str) -> list[Token]:
    """Lex *source* front to back, ending with the invalid sentinel token.

    Stops at the first invalid token, so text containing characters that
    start no token yields a truncated list. Intended for debugging and tests;
    the parser calls :func:`next_token` directly.
    """
    tokens: list[Token] = []
    offset = 0
    while True:
        token = next_token(source, offset)
        tokens.append(token)
        if token.is_invalid:
            return tokens
        offset = token.end
