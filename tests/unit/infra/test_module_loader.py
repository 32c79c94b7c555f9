from __future__ import annotations

"""
Unit tests for the Test Module Loader.

Verifies synchronous and top-level-await loading, sys.modules registration,
sibling imports, and that errors raised by a file's top-level code
propagate unchanged.
"""

import asyncio
import sys
from pathlib import Path
from typing import Iterator

import pytest

from bdd_inventory.domain.errors import DiscoveryError
from bdd_inventory.infra.loader import (
    find_loaded_module,
    load_module,
    load_module_async,
    read_module_code,
    requires_await,
    unload_modules,
)


@pytest.fixture(autouse=True)
def restore_modules(tmp_path: Path) -> Iterator[None]:
    """Forget the modules a test registered from its temporary directory."""
    yield
    for name, module in list(sys.modules.items()):
        if str(getattr(module, "__file__", None) or "").startswith(str(tmp_path)):
            del sys.modules[name]


def write(path: Path, source: str) -> str:
    path.write_text(source, encoding="utf-8")
    return str(path)


def test_sync_module_executes_top_level_code(tmp_path: Path):
    path = write(tmp_path / "plain_loader_case.py", "VALUE = 40 + 2\n")

    module = load_module(path)

    assert module.VALUE == 42
    assert module.__name__ == "plain_loader_case"
    assert module.__file__ == path
    assert module.__spec__ is not None
    assert sys.modules["plain_loader_case"] is module
    assert find_loaded_module(path) is module


def test_custom_extension_is_loadable(tmp_path: Path):
    path = write(tmp_path / "custom_loader_case.bdd", "VALUE = 'custom'\n")

    module = load_module(path)

    assert module.VALUE == "custom"
    assert module.__name__ == "custom_loader_case"


def test_unload_modules_drops_registration(tmp_path: Path):
    path = write(tmp_path / "dropped_loader_case.py", "x = 1\n")
    load_module(path)

    unload_modules([path])

    assert "dropped_loader_case" not in sys.modules
    assert find_loaded_module(path) is None


def test_failed_module_is_not_left_registered(tmp_path: Path):
    path = write(tmp_path / "failing_loader_case.py", "raise KeyError('top-level')\n")

    with pytest.raises(KeyError, match="top-level"):
        load_module(path)

    assert "failing_loader_case" not in sys.modules


def test_name_taken_by_unrelated_module_is_not_replaced(tmp_path: Path):
    path = write(tmp_path / "json.py", "SHADOW = True\n")
    original = sys.modules.get("json")

    module = load_module(path)

    assert module.SHADOW is True
    assert sys.modules.get("json") is original


def test_top_level_await_is_detected(tmp_path: Path):
    plain = write(tmp_path / "plain.py", "x = 1\n")
    awaiting = write(tmp_path / "awaiting.py", "import asyncio\nawait asyncio.sleep(0)\nx = 2\n")

    assert requires_await(read_module_code(plain)) is False
    assert requires_await(read_module_code(awaiting)) is True


def test_async_module_is_awaited(tmp_path: Path):
    path = write(tmp_path / "awaiting_loader_case.py", "import asyncio\nawait asyncio.sleep(0)\nDONE = True\n")

    module = asyncio.run(load_module_async(path))

    assert module.DONE is True
    assert sys.modules["awaiting_loader_case"] is module


def test_sync_form_rejects_top_level_await(tmp_path: Path):
    path = write(tmp_path / "awaiting.py", "import asyncio\nawait asyncio.sleep(0)\n")

    with pytest.raises(DiscoveryError):
        load_module(path, read_module_code(path))


def test_sibling_modules_are_importable_while_loading(tmp_path: Path):
    write(tmp_path / "helpers_for_loader.py", "NAME = 'shared'\n")
    path = write(tmp_path / "uses_helper.py", "from helpers_for_loader import NAME\n")

    module = load_module(path)

    assert module.NAME == "shared"
    assert str(tmp_path) not in sys.path


def test_module_imported_by_sibling_counts_as_loaded(tmp_path: Path):
    helper = write(tmp_path / "helper_for_lookup.py", "x = 1\n")
    user = write(tmp_path / "user_of_helper.py", "import helper_for_lookup\n")

    load_module(user)

    assert find_loaded_module(helper) is sys.modules["helper_for_lookup"]


def test_syntax_errors_propagate(tmp_path: Path):
    path = write(tmp_path / "invalid.py", "def broken(:\n")

    with pytest.raises(SyntaxError):
        read_module_code(path)
