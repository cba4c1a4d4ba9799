"""Built-in filters.

A filter receives the piped value's object form first, then the object
forms of any call arguments: ``{{ x | replace('a', 'b') }}`` calls
``replace(x, 'a', 'b')``. Any exception a filter raises surfaces as a
``FilterCallFailed`` render error.

The registry is read-only and shared by every render.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any


def replace(value: str, old: str, new: str) -> str:
    """Replace every occurrence of *old* in *value* with *new*.

    Example:
        >>> replace("abc", "a", "x")
        'xbc'
    """
    return value.replace(old, new)


DEFAULT_FILTERS: Mapping[str, Callable[..., Any]] = MappingProxyType(
    {
        "replace": replace,
    }
)
