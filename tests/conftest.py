from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures that write DSL test files into a temporary workspace.
"""

import os
import sys
import textwrap
from pathlib import Path
from typing import Callable

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from bdd_inventory.core.discovery.context import DiscoveryContext  # noqa: E402
from bdd_inventory.core.discovery.interceptor import RecordingDeclarations  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    Temporary working directory holding a 'test' folder.

    The process cwd is switched to the workspace so that provenance paths
    come out relative to it (e.g. 'test/example.py').
    """
    (tmp_path / "test").mkdir()
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def write_test_file(workspace: Path) -> Callable[[str, str], Path]:
    """
    Return a factory that writes a dedented DSL file below 'test/'.

    Args (of the factory):
        relative_path: File path relative to the 'test' folder.
        source: File content; common indentation is removed.
    """
    def _write(relative_path: str, source: str) -> Path:
        target = workspace / "test" / relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(textwrap.dedent(source).lstrip("\n"), encoding="utf-8")
        return target

    return _write


@pytest.fixture
def context(tmp_path: Path) -> DiscoveryContext:
    return DiscoveryContext(cwd=str(tmp_path))


@pytest.fixture
def recorder(context: DiscoveryContext) -> RecordingDeclarations:
    return RecordingDeclarations(context)
