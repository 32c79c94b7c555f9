from __future__ import annotations

"""
Configuration Domain Management.

Default settings of the inventory CLI and loading of an optional JSON
configuration file that overrides them.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
DEFAULT_TEST_FOLDER = "test"
OUTPUT_FORMATS = ("json", "text")


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Discovery
        "root_path": DEFAULT_TEST_FOLDER,
        "extensions": ["py"],
        "recursive": True,

        # Output
        "output_format": "json",
        "tree_only": False,
        "indent": 2,

        # Diagnostics
        "log_level": "WARNING",
        "log_file": None,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from a JSON file, merged over the defaults.

    A missing, unreadable or malformed file is logged and ignored.

    Args:
        config_path: Path of the JSON file, or None for defaults only.

    Returns:
        Dict[str, Any]: The merged configuration (not yet validated).
    """
    config = get_default_config()
    if not config_path:
        return config

    if not os.path.exists(config_path):
        logger.warning(f"Config file not found: {config_path}. Using defaults.")
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load config '{config_path}': {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning(f"Config file '{config_path}' is not a JSON object. Using defaults.")
        return config

    unknown = sorted(set(data) - set(config))
    if unknown:
        logger.warning(f"Ignoring unknown config keys: {', '.join(unknown)}")

    config.update({k: v for k, v in data.items() if k in config})
    logger.debug(f"Configuration loaded from {config_path}")
    return config
