from __future__ import annotations

"""
Unit tests for Domain Models.

Verifies:
1. Classification helpers of DeclarationKind.
2. Provenance formatting and sentinel defaults.
3. Wire representation and summary of DiscoveryResult.
"""

import dataclasses

import pytest

from bdd_inventory.domain.models import (
    UNKNOWN_LOCATION,
    DeclarationKind,
    DeclarationNode,
    DiscoveryResult,
    SourceLocation,
    hook_node_name,
)


@pytest.mark.parametrize("kind", [
    DeclarationKind.SUITE,
    DeclarationKind.SUITE_SKIP,
    DeclarationKind.SUITE_ONLY,
])
def test_suite_kinds(kind):
    assert kind.is_suite is True
    assert kind.is_hook is False


@pytest.mark.parametrize("kind", [
    DeclarationKind.BEFORE,
    DeclarationKind.AFTER,
    DeclarationKind.BEFORE_EACH,
    DeclarationKind.AFTER_EACH,
])
def test_hook_kinds(kind):
    assert kind.is_hook is True
    assert kind.is_suite is False


def test_test_kinds_are_neither_suite_nor_hook():
    for kind in (DeclarationKind.TEST, DeclarationKind.TEST_SKIP, DeclarationKind.TEST_ONLY):
        assert not kind.is_suite
        assert not kind.is_hook


def test_kind_values_compare_as_strings():
    assert DeclarationKind.BEFORE_EACH == "beforeEach"
    assert DeclarationKind("suite-skip") is DeclarationKind.SUITE_SKIP


def test_hook_node_name():
    assert hook_node_name(DeclarationKind.AFTER_EACH) == ":afterEach"
    assert hook_node_name(DeclarationKind.BEFORE) == ":before"


def test_source_location_str_and_sentinel():
    assert str(SourceLocation("test/a.py", 12)) == "test/a.py:12"
    assert str(UNKNOWN_LOCATION) == "unknown:0"


def test_source_location_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        UNKNOWN_LOCATION.line = 3  # type: ignore[misc]


def test_declaration_node_defaults_to_unknown_leaf():
    node = DeclarationNode(name="t", kind=DeclarationKind.TEST)

    assert node.is_branch is False
    assert node.location == UNKNOWN_LOCATION


def test_discovery_result_wire_shape():
    result = DiscoveryResult(
        suites=("s",),
        tests=("s.t",),
        tree={"s": {"t": "test/a.py:2"}},
        extended_tree={"s": {"kind": "suite", "file": "test/a.py", "line": 1}},
        files=("test/a.py",),
    )

    data = result.to_dict()

    assert list(data) == ["suites", "tests", "tree", "extendedTree"]
    assert data["suites"] == ["s"]
    assert data["tests"] == ["s.t"]
    assert result.summary() == {"files": 1, "suites": 1, "tests": 1}


def test_empty_discovery_result():
    result = DiscoveryResult()

    assert result.to_dict() == {"suites": [], "tests": [], "tree": {}, "extendedTree": {}}


def test_discovery_result_trees_are_read_only():
    tree = {"s": {"t": "test/a.py:2"}}
    result = DiscoveryResult(tree=tree, extended_tree={"s": {"kind": "suite", "children": {}}})

    with pytest.raises(TypeError):
        result.tree["s"]["t"] = "elsewhere"  # type: ignore[index]
    with pytest.raises(TypeError):
        result.extended_tree["new"] = {}  # type: ignore[index]

    tree["s"]["t"] = "changed"
    assert result.tree["s"]["t"] == "test/a.py:2"


def test_to_dict_returns_plain_copies():
    result = DiscoveryResult(tree={"s": {"t": "test/a.py:2"}})

    data = result.to_dict()
    data["tree"]["s"]["t"] = "changed"

    assert type(data["tree"]["s"]) is dict
    assert result.tree["s"]["t"] == "test/a.py:2"
