"""Base node class for the simplejinja syntax tree."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all syntax nodes.

    Every node covers the half-open source span ``[start, end)`` so errors
    raised long after parsing can still point back into the template.
    Nodes are immutable, so one tree can be rendered from many threads.

    """

    start: int
    end: int

    def text(self, source: str) -> str:
        """Return the source text this node was parsed from."""
        return source[self.start : self.end]
