from __future__ import annotations

"""
Per-Run Discovery State.

Groups the mutable state of one discovery invocation so that recorders
receive it by reference instead of sharing module-level globals.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, List

from bdd_inventory.core.discovery.route import RoutePath
from bdd_inventory.domain.models import Tree


@dataclass
class DiscoveryContext:
    """
    Mutable state of a single discovery run.

    Attributes:
        tree: Root mapping of top-level declarations.
        suites: Ordered set of dotted suite paths (dict keys, values unused).
        tests: Ordered set of dotted test paths (dict keys, values unused).
        route: Suites open at the current replay position.
        cwd: Working directory used to relativize provenance paths.
        files: Files loaded so far, in load order.
    """
    tree: Tree = field(default_factory=dict)
    suites: Dict[str, bool] = field(default_factory=dict)
    tests: Dict[str, bool] = field(default_factory=dict)
    route: RoutePath = field(default_factory=RoutePath)
    cwd: str = field(default_factory=os.getcwd)
    files: List[str] = field(default_factory=list)
