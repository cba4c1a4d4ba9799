"""Compiled simplejinja templates.

A :class:`Template` is parsed once and rendered any number of times:

    >>> t = Template.from_string("Hello, {{ name }}!")
    >>> t.render(name="World")
    'Hello, World!'

Thread-Safety:
- Templates are immutable after construction
- ``render()`` creates only local state (a fresh RenderContext)
- Multiple threads can call ``render()`` concurrently

"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from simplejinja.nodes import Block
from simplejinja.parser import parse
from simplejinja.renderer import render

logger = logging.getLogger(__name__)


class Template:
    """A parsed template, ready to render.

    Build with :meth:`from_string`; the constructor takes an already
    parsed block tree.

    Attributes:
        source: The template source.
        name: Optional name shown in error messages.
        blocks: Top-level blocks of the parsed tree.
    """

    __slots__ = ("_blocks", "_name", "_source")

    def __init__(self, source: str, blocks: Sequence[Block], name: str | None = None):
        self._source = source
        self._blocks = tuple(blocks)
        self._name = name

    @classmethod
    def from_string(cls, source: str, name: str | None = None) -> Template:
        """Parse *source* into a Template.

        Raises:
            TypeError: If *source* is None or not a string.
            ParseError: If the source is malformed.
        """
        if not isinstance(source, str):
            raise TypeError(f"Template source must be a string, got {type(source).__name__}")
        blocks = parse(source, name)
        logger.debug("compiled template %s", name or "<template>")
        return cls(source, blocks, name)

    @property
    def source(self) -> str:
        return self._source

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def blocks(self) -> tuple[Block, ...]:
        return self._blocks

    def render(self, data: Any = None, /, **kwargs: Any) -> str:
        """Render the template.

        Names in the template are looked up as members of *data*: keys of
        a mapping, or public attributes of any other object. Keyword
        arguments are merged over a mapping (or used alone when *data* is
        omitted).

        Args:
            data: Data root, any object.
            **kwargs: Extra top-level names.

        Returns:
            The rendered text.

        Raises:
            RenderError: On the first unsupported operation.
            TypeError: If keyword arguments are given with non-mapping data.

        Example:
            >>> t.render({"name": "World"})
            'Hello, World!'
        """
        if kwargs:
            if data is None:
                data = kwargs
            elif isinstance(data, Mapping):
                data = {**data, **kwargs}
            else:
                raise TypeError("Keyword arguments can only be merged into mapping data")
        return render(self._blocks, self._source, data, name=self._name)

    def __repr__(self) -> str:
        return f"<Template {self._name or '(inline)'!s}>"
