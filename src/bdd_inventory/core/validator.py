from __future__ import annotations

"""
Configuration Validation Service.

Normalizes the configuration dictionary assembled from defaults, an optional
JSON file and CLI overrides before discovery runs. Coerces types, fills
missing keys with defaults and collects human-readable warnings.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from bdd_inventory.domain.config import OUTPUT_FORMATS, get_default_config
from bdd_inventory.infra.fs import normalize_extensions

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a configuration dictionary.

    Args:
        config: Raw configuration data.
        strict: If True, raise on invalid values instead of falling back.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.

    Raises:
        TypeError: In strict mode, a field has the wrong type.
        ValueError: In strict mode, a field has an unsupported value.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    for field in ("root_path", "log_level"):
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in ("recursive", "tree_only"):
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    merged["log_file"] = _as_optional_str(merged.get("log_file"), "log_file", warnings, strict)
    merged["indent"] = _as_indent(merged.get("indent"), defaults["indent"], warnings, strict)
    merged["output_format"] = _as_choice(
        merged.get("output_format"), defaults["output_format"], OUTPUT_FORMATS,
        "output_format", warnings, strict,
    )

    raw_exts = _as_list_str(merged.get("extensions"), defaults["extensions"], "extensions", warnings, strict)
    merged["extensions"] = normalize_extensions(raw_exts) or list(defaults["extensions"])

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _reject(msg: str, warnings: List[str], strict: bool, exc: type = TypeError) -> None:
    if strict:
        raise exc(msg)
    warnings.append(f"{msg} Using fallback.")


def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    _reject(f"Invalid field '{field}': expected str, received {type(value).__name__}.", warnings, strict)
    return fallback


def _as_optional_str(value: Any, field: str, warnings: List[str], strict: bool) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip() or None

    _reject(f"Invalid field '{field}': expected str, received {type(value).__name__}.", warnings, strict)
    return None


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce booleans, accepting 0/1 and yes/no style strings when lenient."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    _reject(f"Invalid field '{field}': expected bool, received {type(value).__name__}.", warnings, strict)
    return fallback


def _as_indent(value: Any, fallback: int, warnings: List[str], strict: bool) -> int:
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    if value is None:
        return fallback

    _reject(f"Invalid field 'indent': expected a non-negative int, received {value!r}.",
            warnings, strict, ValueError)
    return fallback


def _as_choice(
        value: Any,
        fallback: str,
        choices: Tuple[str, ...],
        field: str,
        warnings: List[str],
        strict: bool,
) -> str:
    if isinstance(value, str) and value.strip().lower() in choices:
        return value.strip().lower()
    if value is None:
        return fallback

    _reject(f"Invalid field '{field}': expected one of {', '.join(choices)}, received {value!r}.",
            warnings, strict, ValueError)
    return fallback


def _as_list_str(value: Any, fallback: List[str], field: str, warnings: List[str], strict: bool) -> List[str]:
    """Ensure a list of non-empty strings, accepting CSV strings when lenient."""
    if value is None:
        return list(fallback)

    if isinstance(value, str) and not strict:
        items = [x.strip() for x in value.split(",") if x.strip()]
        if items:
            warnings.append(f"Field '{field}' converted from CSV string to list.")
            return items
        return list(fallback)

    if isinstance(value, list):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str) and item.strip():
                out.append(item.strip())
            elif not isinstance(item, str):
                msg = f"Invalid item in '{field}[{i}]': expected str."
                if strict:
                    raise TypeError(msg)
                warnings.append(f"{msg} Item discarded.")
        return out if out else list(fallback)

    _reject(f"Invalid field '{field}': expected list[str], received {type(value).__name__}.", warnings, strict)
    return list(fallback)
