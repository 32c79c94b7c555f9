from __future__ import annotations

"""
Declaration Tree Assembler.

Inserts recorded declarations into the shared tree keyed by nested names,
resolving leaf/branch conflicts, and maintains the flat ordered sets of
fully-qualified suite and test paths.
"""

import logging
from typing import Dict, Sequence

from bdd_inventory.domain.models import (
    UNKNOWN_LOCATION,
    DeclarationKind,
    DeclarationNode,
    SourceLocation,
    Tree,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def insert_declaration(
        tree: Tree,
        route: Sequence[str],
        name: str,
        kind: DeclarationKind,
        location: SourceLocation,
        branch: bool = False,
) -> DeclarationNode:
    """
    Attach one declaration at the position given by `route` + `name`.

    Intermediate segments that are missing, or that currently hold a
    metadata-only leaf, are replaced by fresh branch markers; the leaf's
    metadata is discarded. The final node gets its metadata overwritten
    while any children it already has are kept. Dict insertion order keeps
    siblings in first-seen order.

    Args:
        tree: Root mapping to mutate.
        route: Names of the enclosing suites, outermost first.
        name: Segment name of the declaration.
        kind: Declaration kind to record.
        location: Provenance of the declaring call.
        branch: Whether the declaration can hold children (suites).

    Returns:
        DeclarationNode: The node now stored under `route` + `name`.
    """
    # 1. Descend, creating or converting intermediate levels
    current_level: Dict[str, DeclarationNode] = tree
    for segment in route:
        node = current_level.get(segment)
        if node is None or node.children is None:
            if node is not None:
                logger.debug(f"Converting leaf '{segment}' into a branch; its metadata is dropped.")
            node = _branch_marker(segment)
            current_level[segment] = node
        current_level = node.children  # type: ignore[assignment]

    # 2. Attach or overwrite the final node's metadata
    node = current_level.get(name)
    if node is None:
        node = DeclarationNode(name=name, kind=kind)
        current_level[name] = node

    node.kind = kind
    node.source_file = location.file
    node.source_line = location.line
    if branch and node.children is None:
        node.children = {}

    return node


def record_path(paths: Dict[str, bool], dotted: str) -> bool:
    """
    Add a dotted path to an ordered set.

    Args:
        paths: Dict used as an insertion-ordered set.
        dotted: Fully-qualified path to add.

    Returns:
        bool: True if the path was new.
    """
    if dotted in paths:
        return False
    paths[dotted] = True
    return True

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _branch_marker(name: str) -> DeclarationNode:
    """Create an empty branch standing in for a level nobody declared."""
    return DeclarationNode(
        name=name,
        kind=DeclarationKind.SUITE,
        source_file=UNKNOWN_LOCATION.file,
        source_line=UNKNOWN_LOCATION.line,
        children={},
    )
