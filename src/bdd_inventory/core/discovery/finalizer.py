from __future__ import annotations

"""
Declaration Tree Finalizer.

Turns the assembled node tree into its two published shapes: the pruned
metadata tree and the simplified 'file:line' projection.
"""

from typing import Any, Dict

from bdd_inventory.core.discovery.context import DiscoveryContext
from bdd_inventory.domain.models import (
    DeclarationNode,
    DiscoveryResult,
    ExtendedTree,
    SimplifiedTree,
    Tree,
)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def finalize(context: DiscoveryContext) -> DiscoveryResult:
    """
    Build the immutable result of a finished discovery run.

    Args:
        context: State populated while the files were loaded.

    Returns:
        DiscoveryResult: Ordered suite/test paths and both tree shapes.
    """
    extended_tree = prune_tree(context.tree)
    return DiscoveryResult(
        suites=tuple(context.suites),
        tests=tuple(context.tests),
        tree=project_tree(extended_tree),
        extended_tree=extended_tree,
        files=tuple(context.files),
    )


def prune_tree(tree: Tree) -> ExtendedTree:
    """
    Convert nodes into plain mappings, dropping empty 'children' entries.

    Nodes that gained real nested declarations keep a 'children' mapping;
    pure leaves carry only kind, file and line.
    """
    return {name: _prune_node(node) for name, node in tree.items()}


def project_tree(extended_tree: ExtendedTree) -> SimplifiedTree:
    """
    Project a pruned tree into its simplified form.

    Childless nodes become a 'file:line' string; nodes with children become
    a mapping of child name to projection. A branch's own provenance is not
    part of this view.
    """
    projection: SimplifiedTree = {}
    for name, entry in extended_tree.items():
        children = entry.get("children")
        if children:
            projection[name] = project_tree(children)
        else:
            projection[name] = f"{entry['file']}:{entry['line']}"
    return projection

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _prune_node(node: DeclarationNode) -> Dict[str, Any]:
    entry: Dict[str, Any] = {
        "kind": node.kind.value,
        "file": node.source_file,
        "line": node.source_line,
    }
    if node.children:
        children = prune_tree(node.children)
        if children:
            entry["children"] = children
    return entry
