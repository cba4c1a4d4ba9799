"""simplejinja: a small Jinja-style template engine.

Templates mix literal text, ``{% if %}`` / ``{% for %}`` statements and
``{{ expression }}`` output. They are parsed once into an immutable block
tree and rendered against any Python data.

Quickstart:
    >>> from simplejinja import Template
    >>> t = Template.from_string("{% for n in names %}Hi {{ n }}! {% endfor %}")
    >>> t.render(names=["Ada", "Bob"])
    'Hi Ada! Hi Bob! '

Architecture:
Template Source → Lexer → Parser (clauses → blocks) → Renderer → str

Pipeline stages:
1. **Lexer**: returns the token at any offset; it keeps no cursor
2. **Parser**: scans flat clauses, then nests them into blocks
3. **Renderer**: walks the blocks, evaluating expressions into tagged values

Errors:
Both stages fail fast. :class:`ParseError` and :class:`RenderError` carry
the offset, row, column and a matchable ``kind``.

Thread-Safety:
Block trees are immutable and every render gets its own context, so one
Template can be rendered from many threads at once.

"""

from simplejinja._types import Token, TokenType
from simplejinja.exceptions import (
    ParseError,
    ParseErrorKind,
    RenderError,
    RenderErrorKind,
    SourceSnippet,
    TemplateError,
    build_source_snippet,
)
from simplejinja.lexer import next_token, tokenize
from simplejinja.parser import parse
from simplejinja.render_context import RenderContext, get_render_context, render_context
from simplejinja.renderer import render
from simplejinja.template import Template
from simplejinja.utils.text import char_position
from simplejinja.values import ExpressionValue, ValueType

__version__ = "0.1.0"

__all__ = [
    "ExpressionValue",
    "ParseError",
    "ParseErrorKind",
    "RenderContext",
    "RenderError",
    "RenderErrorKind",
    "SourceSnippet",
    "Template",
    "TemplateError",
    "Token",
    "TokenType",
    "ValueType",
    "__version__",
    "build_source_snippet",
    "char_position",
    "get_render_context",
    "next_token",
    "parse",
    "render",
    "render_context",
    "tokenize",
]
