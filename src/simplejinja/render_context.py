"""RenderContext: the state of one render call.

Every render gets a fresh context holding its output buffer and loop
variables, so renders of the same block tree never share mutable state.
The data root and the filter registry are only read.

The active context is also published through a ContextVar, so host
objects and filters called during a render can find out which template
is being rendered.

"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from typing import Any

from simplejinja.filters import DEFAULT_FILTERS


@dataclass
class RenderContext:
    """Per-render state.

    Attributes:
        source: Template source, for error positions
        template_name: Template name for error messages
        data: Caller-supplied data root (read-only)
        filters: Filter registry (read-only)
        locals: Loop variable bindings, name to host value
        output: Output chunks, joined once at the end
    """

    source: str
    template_name: str | None = None
    data: Any = None
    filters: Mapping[str, Callable[..., Any]] = field(default_factory=lambda: DEFAULT_FILTERS)
    locals: dict[str, Any] = field(default_factory=dict)
    output: list[str] = field(default_factory=list)

    def write(self, text: str) -> None:
        self.output.append(text)

    def getvalue(self) -> str:
        return "".join(self.output)

    @contextmanager
    def shadow(self, name: str) -> Iterator[None]:
        """Save the binding of *name* and restore it on exit.

        A name that was bound gets its old value back. A name that was not
        bound is removed, so a loop variable never leaks past its loop.
        Nested loops over the same name restore layer by layer.

        Example:
            with ctx.shadow("item"):
                for value in values:
                    ctx.locals["item"] = value
                    ...
        """
        was_bound = name in self.locals
        previous = self.locals.get(name)
        try:
            yield
        finally:
            if was_bound:
                self.locals[name] = previous
            else:
                self.locals.pop(name, None)


# Module-level ContextVar
_render_context: ContextVar[RenderContext | None] = ContextVar(
    "simplejinja_render_context",
    default=None,
)


def get_render_context() -> RenderContext | None:
    """Get the current render context (None if not in a render)."""
    return _render_context.get()


@contextmanager
def render_context(
    source: str,
    data: Any = None,
    template_name: str | None = None,
) -> Iterator[RenderContext]:
    """Create a RenderContext and make it current for the with block.

    The previous context is restored on exit, so renders nested inside
    host callbacks see their own context.

    Example:
        with render_context(source, data, template_name="page.html") as ctx:
            ...
            html = ctx.getvalue()
    """
    ctx = RenderContext(source=source, template_name=template_name, data=data)
    token: Token[RenderContext | None] = _render_context.set(ctx)
    try:
        yield ctx
    finally:
        _render_context.reset(token)
