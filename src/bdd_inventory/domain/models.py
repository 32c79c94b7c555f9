from __future__ import annotations

"""
Declaration Inventory Data Models.

Defines the recursive node structure recorded for every suite, test and hook
declaration, the source provenance attached to it, and the immutable result
returned by a discovery run.
"""

from collections import abc
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

# -----------------------------------------------------------------------------
# CONSTANTS
# -----------------------------------------------------------------------------

UNKNOWN_SOURCE_FILE = "unknown"
UNKNOWN_SOURCE_LINE = 0

# Prefix of the synthetic child name recorded for lifecycle hooks
HOOK_NAME_PREFIX = ":"

# -----------------------------------------------------------------------------
# DECLARATION KINDS
# -----------------------------------------------------------------------------

class DeclarationKind(str, Enum):
    """
    Tag describing which DSL entry point produced a declaration.

    The tag is recorded for consumers; it never affects whether a
    declaration is included in the inventory.
    """
    SUITE = "suite"
    SUITE_SKIP = "suite-skip"
    SUITE_ONLY = "suite-only"
    TEST = "test"
    TEST_SKIP = "test-skip"
    TEST_ONLY = "test-only"
    BEFORE = "before"
    AFTER = "after"
    BEFORE_EACH = "beforeEach"
    AFTER_EACH = "afterEach"

    @property
    def is_suite(self) -> bool:
        return self in _SUITE_KINDS

    @property
    def is_hook(self) -> bool:
        return self in _HOOK_KINDS


_SUITE_KINDS = frozenset({
    DeclarationKind.SUITE,
    DeclarationKind.SUITE_SKIP,
    DeclarationKind.SUITE_ONLY,
})

_HOOK_KINDS = frozenset({
    DeclarationKind.BEFORE,
    DeclarationKind.AFTER,
    DeclarationKind.BEFORE_EACH,
    DeclarationKind.AFTER_EACH,
})


def hook_node_name(kind: DeclarationKind) -> str:
    """Return the synthetic tree name of a hook, e.g. ':beforeEach'."""
    return f"{HOOK_NAME_PREFIX}{kind.value}"

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SourceLocation:
    """
    Provenance of a declaration.

    Attributes:
        file: Workspace-relative path of the declaring file, or 'unknown'.
        line: 1-based line number of the declaring call, or 0.
    """
    file: str = UNKNOWN_SOURCE_FILE
    line: int = UNKNOWN_SOURCE_LINE

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


UNKNOWN_LOCATION = SourceLocation()


@dataclass
class DeclarationNode:
    """
    A declared suite, test or hook inside the assembled tree.

    Attributes:
        name: Segment name of the node within its parent.
        kind: Declaration kind of the latest declaration under this name.
        source_file: Declaring file (workspace-relative) or 'unknown'.
        source_line: Declaring line or 0.
        children: Nested declarations for branch nodes; None marks a
                  metadata-only leaf.
    """
    name: str
    kind: DeclarationKind
    source_file: str = UNKNOWN_SOURCE_FILE
    source_line: int = UNKNOWN_SOURCE_LINE
    children: Optional[Dict[str, "DeclarationNode"]] = None

    @property
    def is_branch(self) -> bool:
        return self.children is not None

    @property
    def location(self) -> SourceLocation:
        return SourceLocation(self.source_file, self.source_line)


Tree = Dict[str, DeclarationNode]

# Finalized, JSON-ready shapes
ExtendedTree = Dict[str, Dict[str, Any]]
SimplifiedTree = Dict[str, Any]


def freeze_tree(tree: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return a read-only deep copy of a finalized tree."""
    return MappingProxyType({
        name: freeze_tree(value) if isinstance(value, abc.Mapping) else value
        for name, value in tree.items()
    })


def thaw_tree(tree: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a plain, JSON-serializable deep copy of a tree."""
    return {
        name: thaw_tree(value) if isinstance(value, abc.Mapping) else value
        for name, value in tree.items()
    }

# -----------------------------------------------------------------------------
# RESULT MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class DiscoveryResult:
    """
    Immutable outcome of a discovery run.

    Both trees are frozen into read-only mappings on construction;
    to_dict() returns plain copies.

    Attributes:
        suites: Unique dotted suite paths in first-seen order.
        tests: Unique dotted test paths in first-seen order.
        tree: Simplified projection (leaf -> 'file:line').
        extended_tree: Pruned metadata tree (kind/file/line/children).
        files: Files loaded during the run, in load order.
    """
    suites: Tuple[str, ...] = ()
    tests: Tuple[str, ...] = ()
    tree: Mapping[str, Any] = field(default_factory=dict)
    extended_tree: Mapping[str, Any] = field(default_factory=dict)
    files: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "tree", freeze_tree(self.tree))
        object.__setattr__(self, "extended_tree", freeze_tree(self.extended_tree))

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire representation consumed by external tooling."""
        return {
            "suites": list(self.suites),
            "tests": list(self.tests),
            "tree": thaw_tree(self.tree),
            "extendedTree": thaw_tree(self.extended_tree),
        }

    def summary(self) -> Dict[str, int]:
        return {
            "files": len(self.files),
            "suites": len(self.suites),
            "tests": len(self.tests),
        }

