from __future__ import annotations

"""
Route Tracker.

Keeps the stack of suite names that are open while suite bodies are being
replayed, and derives the dotted paths used in the flat suite/test lists.
"""

from typing import Iterator, List, Sequence, Tuple

ROUTE_SEPARATOR = "."


class RoutePath:
    """
    Stack of currently-open suite names.

    Only mutated by push (entering a suite body) and pop (leaving it).
    """

    def __init__(self) -> None:
        self._segments: List[str] = []

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[str]:
        return iter(self._segments)

    def __repr__(self) -> str:
        return f"RoutePath({self._segments!r})"

    @property
    def depth(self) -> int:
        return len(self._segments)

    def segments(self) -> Tuple[str, ...]:
        return tuple(self._segments)

    def push(self, name: str) -> None:
        self._segments.append(name)

    def pop(self) -> str:
        return self._segments.pop()

    def joined(self) -> str:
        """Dotted path of the open suites (the innermost suite's full name)."""
        return ROUTE_SEPARATOR.join(self._segments)

    def dotted(self, leaf: str) -> str:
        """Dotted path of a leaf declared at the current depth."""
        return dotted_path(self._segments, leaf)


def dotted_path(segments: Sequence[str], leaf: str) -> str:
    """
    Join route segments and a leaf name with '.'.

    One leading and one trailing separator are stripped, which matters for
    top-level leaves and for empty names.

    Args:
        segments: Enclosing suite names, outermost first.
        leaf: Name of the declaration itself.

    Returns:
        str: Fully-qualified dotted name.
    """
    path = ROUTE_SEPARATOR.join(segments) + ROUTE_SEPARATOR + leaf
    if path.startswith(ROUTE_SEPARATOR):
        path = path[1:]
    if path.endswith(ROUTE_SEPARATOR):
        path = path[:-1]
    return path
