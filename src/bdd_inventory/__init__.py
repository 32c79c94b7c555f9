from __future__ import annotations

"""
bdd-inventory: list the suites and tests declared by BDD-style test files
without running them.
"""

from bdd_inventory.core.discovery import find_suites_and_tests, find_suites_and_tests_async
from bdd_inventory.domain.models import DeclarationKind, DiscoveryResult

__version__ = "1.0.0"

__all__ = [
    "DeclarationKind",
    "DiscoveryResult",
    "find_suites_and_tests",
    "find_suites_and_tests_async",
]
