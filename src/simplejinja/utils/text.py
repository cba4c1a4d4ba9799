"""Source position helpers."""

from __future__ import annotations


def char_position(source: str, offset: int) -> tuple[int, int]:
    """Map a 0-based character offset to a 1-based ``(row, column)``.

    ``\\r\\n``, ``\\r`` and ``\\n`` each count as one line break, so
    ``"\\n\\r"`` is two breaks. An offset that points at the ``\\n`` of a
    ``\\r\\n`` pair reports the position of the ``\\r``. Offsets outside the
    source clamp to its bounds.

    Example:
        >>> char_position("abc\\r\\ndef", 5)
        (2, 1)
    """
    end = min(max(offset, 0), len(source))
    row = 1
    column = 1
    index = 0
    while index < end:
        ch = source[index]
        if ch == "\r" and source.startswith("\n", index + 1):
            if index + 1 >= end:
                break
            index += 2
            row += 1
            column = 1
            continue
        if ch in "\r\n":
            row += 1
            column = 1
        else:
            column += 1
        index += 1
    return row, column


def source_lines(source: str) -> list[str]:
    """Split *source* on the same line breaks :func:`char_position` counts."""
    return source.replace("\r\n", "\n").replace("\r", "\n").split("\n")
