from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates a CLI run: argument parsing, configuration resolution
(defaults, optional JSON file, command-line overrides), logging bootstrap,
discovery, rendering and exit-code selection.
"""

import sys
import traceback
from typing import Any, Dict, List, Optional

from bdd_inventory.core.discovery import find_suites_and_tests
from bdd_inventory.core.validator import validate_config
from bdd_inventory.domain.config import load_config
from bdd_inventory.infra.fs import expand_user_path
from bdd_inventory.infra.logging import LoggingConfig, configure_logging, get_logger, shutdown_logging
from bdd_inventory.interface.cli import args as cli_args
from bdd_inventory.interface.cli.render import render_json, render_text

logger = get_logger(__name__)

FATAL_BANNER = "Fatal Error (try --help for help):"

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Command line arguments. Defaults to sys.argv[1:].

    Returns:
        int: Process exit code (0 on success, 1 on any fatal error, 130 on interrupt).
    """
    # 1. Argument parsing ('-h' exits 0 from inside argparse)
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Configuration: defaults < JSON file < command line
    raw_conf = _merge_config(load_config(args.config_path), cli_args.args_to_overrides(args))
    conf, warnings = validate_config(raw_conf, strict=False)

    # 3. Logging bootstrap (stderr only; stdout carries the inventory)
    configure_logging(
        LoggingConfig(level=conf["log_level"], console=True, log_file=conf["log_file"]),
        force=True,
    )
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    try:
        # 4. Discovery
        root_path = expand_user_path(conf["root_path"])
        logger.debug(f"Discovering tests under '{root_path}' ({', '.join(conf['extensions'])})")
        result = find_suites_and_tests(root_path, conf["extensions"], recursive=conf["recursive"])

        # 5. Output rendering
        if conf["output_format"] == "text":
            output = render_text(result, tree_only=conf["tree_only"])
        else:
            output = render_json(result, indent=conf["indent"], tree_only=conf["tree_only"])
        print(output)
        return 0

    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130
    except Exception as e:
        logger.debug("Discovery aborted:\n" + traceback.format_exc())
        print(FATAL_BANNER, file=sys.stderr)
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        return 1
    finally:
        shutdown_logging()

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow-merge non-None overrides into the base configuration."""
    out = dict(base)
    for k, v in overrides.items():
        if v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
