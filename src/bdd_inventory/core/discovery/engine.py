from __future__ import annotations

"""
Discovery Engine.

Public entry point of the inventory: finds test files, loads them one after
another with the recording DSL installed, and finalizes the declarations
they made into a DiscoveryResult.
"""

import asyncio
import logging
from types import CodeType
from typing import List, Optional, Sequence, Union

from bdd_inventory.core.discovery.context import DiscoveryContext
from bdd_inventory.core.discovery.finalizer import finalize
from bdd_inventory.core.discovery.interceptor import RecordingDeclarations, install_bindings
from bdd_inventory.domain.errors import UnbalancedRouteError
from bdd_inventory.domain.models import DiscoveryResult
from bdd_inventory.infra.fs import lookup_files, normalize_extensions
from bdd_inventory.infra.loader import (
    find_loaded_module,
    load_module,
    load_module_async,
    read_module_code,
    requires_await,
    unload_modules,
)

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = ("py",)

Extensions = Union[str, Sequence[str], None]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def find_suites_and_tests(
        test_folder: str,
        extensions: Extensions = None,
        recursive: bool = True,
        cwd: Optional[str] = None,
) -> DiscoveryResult:
    """
    Find all suites and tests declared below a folder without running them.

    Plain files load synchronously, with no event loop involved. Each file
    using top-level 'await' is driven by its own asyncio.run(); a tree with
    such files must therefore be discovered with find_suites_and_tests_async
    when the caller already runs inside an event loop.

    Example:
        >>> result = find_suites_and_tests("test", "py")
        >>> result.tests
        ('test-0', 'suite-1.test-1', ...)

    Args:
        test_folder: File or directory holding the test files.
        extensions: One extension or a list of them. Defaults to 'py'.
        recursive: Whether to descend into subdirectories.
        cwd: Directory provenance paths are made relative to.

    Returns:
        DiscoveryResult: Suites, tests, simplified tree and extended tree.
    """
    files = _lookup(test_folder, extensions, recursive)
    context = _new_context(cwd)

    try:
        with install_bindings(RecordingDeclarations(context)):
            for file_path in files:
                code = _open_file(file_path, context)
                if code is None:
                    continue
                if requires_await(code):
                    asyncio.run(load_module_async(file_path, code))
                else:
                    load_module(file_path, code)
                _close_file(file_path, context)
    finally:
        unload_modules(files)

    return _finish(context)


async def find_suites_and_tests_async(
        test_folder: str,
        extensions: Extensions = None,
        recursive: bool = True,
        cwd: Optional[str] = None,
) -> DiscoveryResult:
    """
    Coroutine form of find_suites_and_tests for callers inside an event loop.

    Files are loaded strictly in sequence. Modules with top-level 'await'
    are awaited at their file boundary; all others load synchronously. Any
    error while loading a file aborts the whole run.
    """
    files = _lookup(test_folder, extensions, recursive)
    context = _new_context(cwd)

    try:
        with install_bindings(RecordingDeclarations(context)):
            for file_path in files:
                code = _open_file(file_path, context)
                if code is None:
                    continue
                if requires_await(code):
                    await load_module_async(file_path, code)
                else:
                    load_module(file_path, code)
                _close_file(file_path, context)
    finally:
        unload_modules(files)

    return _finish(context)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _lookup(test_folder: str, extensions: Extensions, recursive: bool) -> List[str]:
    files = lookup_files(test_folder, _coerce_extensions(extensions), recursive)
    logger.debug(f"Found {len(files)} test file(s) under '{test_folder}'")
    return files


def _new_context(cwd: Optional[str]) -> DiscoveryContext:
    return DiscoveryContext() if cwd is None else DiscoveryContext(cwd=cwd)


def _open_file(file_path: str, context: DiscoveryContext) -> Optional[CodeType]:
    """
    Start loading one test file.

    Returns:
        Optional[CodeType]: The compiled file, or None when it was already
        loaded in this run (listed twice, or imported by an earlier file).
    """
    if file_path in context.files:
        return None
    context.files.append(file_path)

    if find_loaded_module(file_path) is not None:
        logger.debug(f"Skipping test file already imported by an earlier file: {file_path}")
        return None

    logger.debug(f"Loading test file: {file_path}")
    return read_module_code(file_path)


def _close_file(file_path: str, context: DiscoveryContext) -> None:
    """Check that every suite the file opened was closed."""
    if context.route.depth:
        raise UnbalancedRouteError(file_path, context.route.depth)


def _finish(context: DiscoveryContext) -> DiscoveryResult:
    result = finalize(context)
    logger.info(
        f"Discovered {len(result.suites)} suite(s) and {len(result.tests)} test(s) "
        f"in {len(result.files)} file(s)"
    )
    return result


def _coerce_extensions(extensions: Extensions) -> List[str]:
    if extensions is None:
        return list(DEFAULT_EXTENSIONS)
    if isinstance(extensions, str):
        extensions = [extensions]
    return normalize_extensions(extensions) or list(DEFAULT_EXTENSIONS)
