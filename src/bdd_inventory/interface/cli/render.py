from __future__ import annotations

"""
Inventory Renderers.

Serializes a DiscoveryResult for the terminal: indented JSON for tooling,
or an ASCII tree for people.
"""

import json
from typing import Any, List, Mapping

from bdd_inventory.domain.models import DiscoveryResult, thaw_tree

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_json(result: DiscoveryResult, indent: int = 2, tree_only: bool = False) -> str:
    """
    Serialize the result (or only its simplified tree) as JSON.

    Args:
        result: Discovery outcome.
        indent: JSON indentation width; 0 gives a compact single line.
        tree_only: Emit only the simplified tree.

    Returns:
        str: The JSON document.
    """
    payload: Any = thaw_tree(result.tree) if tree_only else result.to_dict()
    return json.dumps(payload, ensure_ascii=False, indent=indent or None)


def render_text(result: DiscoveryResult, tree_only: bool = False) -> str:
    """Render a summary line followed by the declaration tree."""
    lines: List[str] = []
    if not tree_only:
        s = result.summary()
        lines.append(f"{s['suites']} suite(s), {s['tests']} test(s) in {s['files']} file(s)")
    render_tree(result.extended_tree, lines)
    return "\n".join(lines)


def render_tree(tree: Mapping[str, Any], lines: List[str], prefix: str = "") -> None:
    """
    Recursively append ASCII connector lines for an extended tree.

    Entries keep declaration order; each shows its kind and provenance.

    Args:
        tree: Pruned metadata tree to render.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
    """
    entries = list(tree.items())
    total = len(entries)

    for i, (name, entry) in enumerate(entries):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "
        lines.append(f"{prefix}{connector}{_describe(name, entry)}")

        children = entry.get("children")
        if children:
            render_tree(children, lines, prefix + ("    " if is_last else "│   "))

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _describe(name: str, entry: Mapping[str, Any]) -> str:
    return f"{name} [{entry['kind']}] {entry['file']}:{entry['line']}"
