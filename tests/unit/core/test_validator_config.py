from __future__ import annotations

"""
Unit tests for Configuration Loading and Validation.

Verifies:
1. Defaults are filled in and types are coerced in lenient mode.
2. Strict mode raises instead of falling back.
3. Extension lists are normalized.
4. JSON configuration files are merged over the defaults.
"""

import json
from pathlib import Path

import pytest

from bdd_inventory.core.validator import validate_config
from bdd_inventory.domain.config import get_default_config, load_config


def test_validate_defaults_pass_untouched():
    conf, warnings = validate_config(get_default_config())

    assert conf == get_default_config()
    assert warnings == []


def test_validate_non_dict_falls_back_to_defaults():
    conf, warnings = validate_config(["not", "a", "dict"])

    assert conf == get_default_config()
    assert len(warnings) == 1
    assert "expected dict" in warnings[0]


def test_validate_non_dict_strict_raises():
    with pytest.raises(TypeError):
        validate_config("oops", strict=True)


def test_validate_coerces_lenient_values():
    conf, warnings = validate_config({
        "recursive": "no",
        "tree_only": 1,
        "extensions": ".PY, js",
        "output_format": " TEXT ",
        "root_path": "  spec  ",
        "log_file": "   ",
    })

    assert conf["recursive"] is False
    assert conf["tree_only"] is True
    assert conf["extensions"] == ["py", "js"]
    assert conf["output_format"] == "text"
    assert conf["root_path"] == "spec"
    assert conf["log_file"] is None
    assert len(warnings) == 3


def test_validate_invalid_values_fall_back_with_warnings():
    conf, warnings = validate_config({
        "indent": -4,
        "output_format": "yaml",
        "root_path": 42,
        "extensions": [".py", 7, ""],
    })

    assert conf["indent"] == 2
    assert conf["output_format"] == "json"
    assert conf["root_path"] == "test"
    assert conf["extensions"] == ["py"]
    assert any("indent" in w for w in warnings)
    assert any("output_format" in w for w in warnings)
    assert any("extensions[1]" in w for w in warnings)


def test_validate_extensions_are_deduplicated():
    conf, _ = validate_config({"extensions": ["py", ".py", "PY", ".spec.py"]})

    assert conf["extensions"] == ["py", "spec.py"]


@pytest.mark.parametrize("config, exc", [
    ({"recursive": "yes"}, TypeError),
    ({"indent": "4"}, ValueError),
    ({"output_format": "xml"}, ValueError),
    ({"extensions": "py,js"}, TypeError),
])
def test_validate_strict_mode_raises(config, exc):
    with pytest.raises(exc):
        validate_config(config, strict=True)


def test_load_config_without_path_returns_defaults():
    assert load_config(None) == get_default_config()


def test_load_config_merges_json_file(tmp_path: Path):
    path = tmp_path / "inventory.json"
    path.write_text(json.dumps({"root_path": "spec", "indent": 0, "unknown_key": True}), encoding="utf-8")

    config = load_config(str(path))

    assert config["root_path"] == "spec"
    assert config["indent"] == 0
    assert "unknown_key" not in config
    assert config["extensions"] == ["py"]


def test_load_config_missing_or_malformed_file(tmp_path: Path):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    listed = tmp_path / "list.json"
    listed.write_text("[1, 2]", encoding="utf-8")

    assert load_config(str(tmp_path / "absent.json")) == get_default_config()
    assert load_config(str(broken)) == get_default_config()
    assert load_config(str(listed)) == get_default_config()
