from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema of the inventory tool and translates the
parsed namespace into configuration overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

from bdd_inventory import __version__
from bdd_inventory.domain.config import DEFAULT_TEST_FOLDER

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the bdd-inventory CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="bdd-inventory",
        description=(
            "List the suites and tests declared by describe/it test files "
            "without running them."
        ),
        epilog="Prints the inventory as JSON on stdout; diagnostics go to stderr.",
    )

    # --- Discovery ---
    p.add_argument(
        "root_path",
        nargs="?",
        default=None,
        metavar="test-folder",
        help=f"Folder (or file) holding the test files. Default: '{DEFAULT_TEST_FOLDER}'.",
    )
    p.add_argument(
        "--ext",
        dest="extensions",
        default=None,
        help="Comma-separated test file extensions. Default: py.",
    )
    p.add_argument(
        "--no-recursive",
        action="store_true",
        help="Do not descend into subdirectories.",
    )

    # --- Output ---
    p.add_argument(
        "--text",
        action="store_true",
        help="Render an ASCII tree instead of JSON.",
    )
    p.add_argument(
        "--tree-only",
        action="store_true",
        help="Emit only the simplified tree.",
    )
    p.add_argument(
        "--indent",
        type=int,
        default=None,
        help="JSON indentation width (0 for compact output).",
    )

    # --- Configuration and Diagnostics ---
    p.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="JSON file with default settings.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to this rotating log file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Only options given on the command line appear in the result.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.root_path is not None:
        overrides["root_path"] = args.root_path
    if args.extensions:
        overrides["extensions"] = _split_csv(args.extensions)
    if args.no_recursive:
        overrides["recursive"] = False

    if args.text:
        overrides["output_format"] = "text"
    if args.tree_only:
        overrides["tree_only"] = True
    if args.indent is not None:
        overrides["indent"] = args.indent

    if args.log_file:
        overrides["log_file"] = args.log_file
    if args.debug:
        overrides["log_level"] = "DEBUG"

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """Convert a comma-separated string into a list of non-empty items."""
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
