"""Terminal color utilities for error diagnostics.

ANSI colors with TTY detection. ``FORCE_COLOR`` turns colors on,
``NO_COLOR`` (https://no-color.org/) turns them off, otherwise colors are
used only when stdout is a TTY. The decision is made once at import.
"""

from __future__ import annotations

import os
import re
import sys
from typing import Literal

_COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "yellow": "\033[33m",
    "cyan": "\033[36m",
    "bright_red": "\033[91m",
}

ColorName = Literal["reset", "bold", "dim", "red", "yellow", "cyan", "bright_red"]

_ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


def _should_use_colors() -> bool:
    if os.environ.get("FORCE_COLOR"):
        return True
    if os.environ.get("NO_COLOR"):
        return False
    return sys.stdout.isatty()


_USE_COLORS = _should_use_colors()


def supports_color() -> bool:
    """Return True when diagnostics should be colored."""
    return _USE_COLORS


def colorize(text: str, *colors: ColorName) -> str:
    """Wrap *text* in the ANSI codes for *colors*, or return it unchanged.

    Example:
        >>> colorize("MissingEndIf", "bright_red", "bold")
        '\\033[91m\\033[1mMissingEndIf\\033[0m'  # if colors supported
    """
    if not _USE_COLORS or not colors:
        return text
    prefix = "".join(_COLORS[color] for color in colors)
    return f"{prefix}{text}{_COLORS['reset']}"


def strip_colors(text: str) -> str:
    """Remove ANSI escape sequences from *text*."""
    return _ANSI_ESCAPE.sub("", text)


def error_kind(text: str) -> str:
    """Color an error kind name (bright red, bold)."""
    return colorize(text, "bright_red", "bold")


def location(text: str) -> str:
    """Color a template location (cyan)."""
    return colorize(text, "cyan")


def line_number(text: str) -> str:
    return colorize(text, "yellow")


def error_line(text: str) -> str:
    return colorize(text, "bright_red")


def dim_text(text: str) -> str:
    return colorize(text, "dim")


def format_source_line(lineno: int, content: str, *, is_error: bool = False) -> str:
    """Format one numbered source line, marking the error line with ``>``.

    Example:
        >>> format_source_line(3, "{% for x %}", is_error=True)
        '\\033[33m>  3\\033[0m | \\033[91m{% for x %}\\033[0m'
    """
    marker = ">" if is_error else " "
    number = line_number(f"{marker}{lineno:>3}")
    body = error_line(content) if is_error else dim_text(content)
    return f"{number} | {body}"
