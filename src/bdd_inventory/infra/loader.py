from __future__ import annotations

"""
Test Module Loader.

Evaluates the top-level code of discovered test files exactly once per run.
Plain modules are imported by path through importlib; modules that use
top-level 'await' compile to a coroutine that is awaited once per file.
Loaded modules are registered in sys.modules under their file stem, so a
test file imported by another one is not executed a second time.
"""

import ast
import importlib.machinery
import importlib.util
import inspect
import logging
import os
import sys
import tokenize
from contextlib import contextmanager
from types import CodeType, ModuleType
from typing import Iterable, Iterator, Optional

from bdd_inventory.domain.errors import DiscoveryError

logger = logging.getLogger(__name__)

_COMPILE_FLAGS = ast.PyCF_ALLOW_TOP_LEVEL_AWAIT

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def read_module_code(file_path: str) -> CodeType:
    """
    Read and compile a test file, allowing top-level 'await'.

    The code object carries the absolute path so that frames executing it
    report a path the provenance resolver can relativize.

    Args:
        file_path: Path of the file to compile.

    Returns:
        CodeType: Compiled module code.

    Raises:
        OSError: The file cannot be read.
        SyntaxError: The file is not valid Python.
    """
    abs_path = os.path.abspath(file_path)
    with tokenize.open(abs_path) as f:
        source = f.read()
    return compile(source, abs_path, "exec", flags=_COMPILE_FLAGS, dont_inherit=True)


def requires_await(code: CodeType) -> bool:
    """Check whether module code contains top-level 'await'."""
    return bool(code.co_flags & inspect.CO_COROUTINE)


def module_name_for(file_path: str) -> str:
    """Import name of a test file: its file stem."""
    return os.path.splitext(os.path.basename(file_path))[0]


def find_loaded_module(file_path: str) -> Optional[ModuleType]:
    """
    Return the module already imported from `file_path`, if any.

    A module counts as loaded when sys.modules holds it under the file's
    import name and its __file__ is the same file.
    """
    module = sys.modules.get(module_name_for(file_path))
    if module is not None and _same_file(getattr(module, "__file__", None), file_path):
        return module
    return None


def load_module(file_path: str, code: Optional[CodeType] = None) -> ModuleType:
    """
    Import a test file by path and execute its top-level code synchronously.

    Args:
        file_path: Path of the file to execute.
        code: Compiled code of the file, used to reject top-level 'await'
              before importing.

    Returns:
        ModuleType: The executed module.

    Raises:
        DiscoveryError: The file needs the asynchronous loading form.
    """
    if code is not None and requires_await(code):
        raise DiscoveryError(f"'{file_path}' uses top-level await; load it asynchronously")

    module = _new_module(file_path)
    with _module_search_path(file_path), _registered(module):
        module.__spec__.loader.exec_module(module)
    return module


async def load_module_async(file_path: str, code: Optional[CodeType] = None) -> ModuleType:
    """
    Execute a test file, awaiting its top-level coroutine when it has one.

    Args:
        file_path: Path of the file to execute.
        code: Pre-compiled code for the file, if already available.

    Returns:
        ModuleType: The executed module.
    """
    code = code or read_module_code(file_path)
    module = _new_module(file_path)

    with _module_search_path(file_path), _registered(module):
        result = eval(code, module.__dict__)
        if inspect.iscoroutine(result):
            await result
    return module


def unload_modules(file_paths: Iterable[str]) -> None:
    """Drop the sys.modules entries of the given test files."""
    for file_path in file_paths:
        if find_loaded_module(file_path) is not None:
            del sys.modules[module_name_for(file_path)]

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _new_module(file_path: str) -> ModuleType:
    abs_path = os.path.abspath(file_path)
    name = module_name_for(file_path)
    # Explicit loader: discovered files may use extensions importlib does not know
    loader = importlib.machinery.SourceFileLoader(name, abs_path)
    spec = importlib.util.spec_from_file_location(name, abs_path, loader=loader)
    if spec is None or spec.loader is None:
        raise DiscoveryError(f"Could not load module from '{file_path}'")
    return importlib.util.module_from_spec(spec)


def _same_file(candidate: Optional[str], file_path: str) -> bool:
    if not candidate:
        return False
    return os.path.normcase(os.path.abspath(candidate)) == os.path.normcase(os.path.abspath(file_path))


@contextmanager
def _registered(module: ModuleType) -> Iterator[None]:
    """
    Register a module in sys.modules while (and after) it executes.

    The entry is removed again if execution fails. A name already taken by
    an unrelated module is left alone and the test module stays unregistered.
    """
    name = module.__name__
    existing = sys.modules.get(name)
    if existing is not None and not _same_file(getattr(existing, "__file__", None), module.__file__):
        logger.debug(f"Module name '{name}' is taken by {existing!r}; loading {module.__file__} unregistered.")
        yield
        return

    sys.modules[name] = module
    try:
        yield
    except BaseException:
        if sys.modules.get(name) is module:
            del sys.modules[name]
        raise


@contextmanager
def _module_search_path(file_path: str) -> Iterator[None]:
    """Put the file's directory first on sys.path while it loads."""
    directory = os.path.dirname(os.path.abspath(file_path))
    sys.path.insert(0, directory)
    try:
        yield
    finally:
        try:
            sys.path.remove(directory)
        except ValueError:
            logger.debug(f"Search path entry '{directory}' was removed by the loaded module.")
