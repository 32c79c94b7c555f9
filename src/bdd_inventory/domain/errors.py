from __future__ import annotations

"""
Discovery Error Hierarchy.

Errors raised by the discovery engine and its collaborators. Exceptions
thrown by user test files while they load are not wrapped: they propagate
unchanged and abort the run.
"""

from typing import Sequence


class DiscoveryError(Exception):
    """Base class for every error raised by the inventory tool itself."""


class PathResolutionError(DiscoveryError, FileNotFoundError):
    """
    The root path and all of its extension-augmented variants are missing.

    Attributes:
        path: The path as requested by the caller.
        candidates: Every path that was probed.
    """

    def __init__(self, path: str, candidates: Sequence[str] = ()):
        super().__init__(f"cannot resolve path (or pattern) '{path}'")
        self.path = path
        self.candidates = list(candidates)


class UnbalancedRouteError(DiscoveryError):
    """A file finished loading while suites were still open."""

    def __init__(self, file_path: str, depth: int):
        super().__init__(
            f"Suite nesting left unbalanced after loading '{file_path}' "
            f"(depth {depth})"
        )
        self.file_path = file_path
        self.depth = depth


class SuspendedSuiteError(DiscoveryError):
    """A suite body awaited something while its declarations were replayed."""

    def __init__(self, suite_name: str):
        super().__init__(
            f"Suite '{suite_name}' suspended while declaring its children; "
            f"suite bodies must declare synchronously"
        )
        self.suite_name = suite_name
