from __future__ import annotations

from .engine import find_suites_and_tests, find_suites_and_tests_async
from .interceptor import Declarations, RecordingDeclarations, SuiteOptions, install_bindings

__all__ = [
    "Declarations",
    "RecordingDeclarations",
    "SuiteOptions",
    "find_suites_and_tests",
    "find_suites_and_tests_async",
    "install_bindings",
]
