from __future__ import annotations

"""
Unit tests for the Inventory Renderers.

Verifies JSON serialization modes and the ASCII tree layout.
"""

import json

import pytest

from bdd_inventory.domain.models import DiscoveryResult
from bdd_inventory.interface.cli.render import render_json, render_text, render_tree


@pytest.fixture
def result() -> DiscoveryResult:
    return DiscoveryResult(
        suites=("suite-1",),
        tests=("test-0", "suite-1.test-1"),
        tree={"test-0": "test/a.py:1", "suite-1": {"test-1": "test/a.py:3"}},
        extended_tree={
            "test-0": {"kind": "test", "file": "test/a.py", "line": 1},
            "suite-1": {
                "kind": "suite",
                "file": "test/a.py",
                "line": 2,
                "children": {
                    ":before": {"kind": "before", "file": "test/a.py", "line": 3},
                    "test-1": {"kind": "test-only", "file": "test/a.py", "line": 4},
                },
            },
        },
        files=("test/a.py",),
    )


def test_render_json_full_document(result):
    data = json.loads(render_json(result))

    assert data["suites"] == ["suite-1"]
    assert data["tests"] == ["test-0", "suite-1.test-1"]
    assert data["extendedTree"]["suite-1"]["children"]["test-1"]["kind"] == "test-only"


def test_render_json_tree_only_and_compact(result):
    output = render_json(result, indent=0, tree_only=True)

    assert "\n" not in output
    assert json.loads(output) == result.tree


def test_render_text_layout(result):
    lines = render_text(result).splitlines()

    assert lines == [
        "1 suite(s), 2 test(s) in 1 file(s)",
        "├── test-0 [test] test/a.py:1",
        "└── suite-1 [suite] test/a.py:2",
        "    ├── :before [before] test/a.py:3",
        "    └── test-1 [test-only] test/a.py:4",
    ]


def test_render_text_tree_only_skips_summary(result):
    output = render_text(result, tree_only=True)

    assert output.startswith("├── test-0")


def test_render_tree_nested_prefixes():
    tree = {
        "outer": {
            "kind": "suite", "file": "f", "line": 1,
            "children": {
                "inner": {
                    "kind": "suite", "file": "f", "line": 2,
                    "children": {"t": {"kind": "test", "file": "f", "line": 3}},
                },
                "last": {"kind": "test", "file": "f", "line": 4},
            },
        },
    }
    lines = []

    render_tree(tree, lines)

    assert lines == [
        "└── outer [suite] f:1",
        "    ├── inner [suite] f:2",
        "    │   └── t [test] f:3",
        "    └── last [test] f:4",
    ]
