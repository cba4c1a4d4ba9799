"""Read access to caller-supplied data.

The renderer never inspects host objects directly. It goes through these
functions, which adapt ordinary Python data:

- mappings resolve members by key, then by public attribute
- other objects resolve members by public attribute
- sequences are non-text :class:`collections.abc.Sequence` instances
- anything iterable that is not text can drive a ``for`` loop

Public attributes are names without a leading underscore whose value is
not a function or method, so templates can read data and properties but
never reach bound methods or private state.

All functions are side-effect free and never raise. An attribute whose
getter raises is reported as missing.
"""

from __future__ import annotations

import inspect
from collections.abc import Iterator, Mapping, Sequence
from typing import Any, Final

_TEXT_TYPES: Final = (str, bytes, bytearray)


class _Missing:
    """Sentinel type for absent members."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


def _public_attribute(obj: Any, name: str) -> Any:
    if not name or name.startswith("_"):
        return MISSING
    try:
        value = getattr(obj, name)
    except Exception:
        return MISSING
    if inspect.isroutine(value):
        return MISSING
    return value


def get_member(obj: Any, name: str, default: Any = MISSING) -> Any:
    """Return the member *name* of *obj*, or *default* when it has none.

    Mappings are tried by key first so user keys such as ``items`` or
    ``keys`` are not shadowed by dict methods. Keys are checked with
    ``in`` before indexing, so a ``defaultdict`` is never filled in.

    Example:
        >>> get_member({"title": "Hi"}, "title")
        'Hi'
        >>> get_member(object(), "title", None) is None
        True
    """
    if obj is None:
        return default
    if isinstance(obj, Mapping):
        try:
            if name in obj:
                return obj[name]
        except (KeyError, TypeError):
            pass
    value = _public_attribute(obj, name)
    if value is MISSING:
        return default
    return value


def has_member(obj: Any, name: str) -> bool:
    """Return True if *obj* has a readable member called *name*."""
    return get_member(obj, name) is not MISSING


def as_sequence(obj: Any) -> Sequence[Any] | None:
    """Return *obj* if it is an indexable, non-text sequence, else None."""
    if isinstance(obj, Sequence) and not isinstance(obj, _TEXT_TYPES):
        return obj
    return None


def as_mapping(obj: Any) -> Mapping[Any, Any] | None:
    """Return *obj* if it is a keyed mapping, else None."""
    if isinstance(obj, Mapping):
        return obj
    return None


def iterate(obj: Any) -> Iterator[Any] | None:
    """Return an iterator over *obj*, or None if it cannot drive a loop.

    Text is not iterable here: looping over a string renders nothing
    rather than one iteration per character.
    """
    if obj is None or isinstance(obj, _TEXT_TYPES):
        return None
    try:
        return iter(obj)
    except TypeError:
        return None


def get_item(obj: Any, key: Any, index: int) -> Any:
    """Subscript *obj*: by *index* for sequences, by *key* for mappings.

    Returns MISSING for out-of-range indexes, absent or unhashable keys,
    and objects that are neither sequences nor mappings.
    """
    sequence = as_sequence(obj)
    if sequence is not None:
        if 0 <= index < len(sequence):
            return sequence[index]
        return MISSING
    mapping = as_mapping(obj)
    if mapping is not None:
        try:
            if key in mapping:
                return mapping[key]
        except (KeyError, TypeError):
            pass
    return MISSING
