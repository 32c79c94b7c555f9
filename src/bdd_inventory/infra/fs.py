from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Locates test files below a root path: bare-path resolution against known
extensions, recursive directory listing in lexical order, hidden-file and
extension filtering.
"""

import logging
import os
import re
from typing import Iterable, List

from bdd_inventory.domain.errors import PathResolutionError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def expand_user_path(path: str) -> str:
    """
    Expand '~' and environment variables in a user-supplied path.

    Relative paths stay relative so that reported provenance remains
    workspace-relative.
    """
    p = (path or "").strip()
    try:
        return os.path.expandvars(os.path.expanduser(p))
    except Exception:
        return p


def normalize_extensions(extensions: Iterable[str]) -> List[str]:
    """
    Canonicalize extensions to lowercase names without a leading dot.

    Args:
        extensions: Raw extensions such as '.py', 'PY' or 'py'.

    Returns:
        List[str]: Unique extensions in first-seen order.
    """
    seen: List[str] = []
    for ext in extensions:
        clean = str(ext).strip().lstrip(".").lower()
        if clean and clean not in seen:
            seen.append(clean)
    return seen


def resolve_root(file_path: str, extensions: List[str]) -> str:
    """
    Resolve a root path, appending a known extension when the exact path is missing.

    Raises:
        PathResolutionError: Neither the path nor any augmented variant exists.
    """
    if os.path.exists(file_path):
        return file_path

    candidates = [f"{file_path}.{ext}" for ext in extensions]
    for candidate in candidates:
        if os.path.exists(candidate):
            logger.debug(f"Resolved '{file_path}' to '{candidate}'")
            return candidate

    raise PathResolutionError(file_path, [file_path] + candidates)

# -----------------------------------------------------------------------------
# DISCOVERY API
# -----------------------------------------------------------------------------

def lookup_files(file_path: str, extensions: List[str], recursive: bool = True) -> List[str]:
    """
    Look up test file names at the given path.

    A file resolves to itself. Directory entries are visited in sorted order;
    subdirectories are descended into when `recursive` is set; files are kept
    when they are not hidden and end with one of the extensions. Entries that
    cannot be inspected are skipped.

    Args:
        file_path: Base path to start searching from.
        extensions: File extensions to look for (without the dot).
        recursive: Whether or not to recurse into subdirectories.

    Returns:
        List[str]: Matching paths, joined onto `file_path`.

    Raises:
        PathResolutionError: The root path cannot be resolved.
    """
    extensions = normalize_extensions(extensions)
    file_path = resolve_root(file_path, extensions)

    try:
        if os.path.isfile(file_path):
            return [file_path]
        entries = sorted(os.listdir(file_path))
    except OSError as e:
        logger.debug(f"Skipping unreadable path '{file_path}': {e}")
        return []

    ext_rx = _extension_pattern(extensions)
    files: List[str] = []

    for entry in entries:
        full_path = os.path.join(file_path, entry)
        try:
            is_dir = os.path.isdir(full_path)
            is_file = os.path.isfile(full_path)
        except OSError as e:
            logger.debug(f"Skipping entry '{full_path}': {e}")
            continue

        if is_dir:
            if recursive:
                files.extend(lookup_files(full_path, extensions, recursive))
            continue

        if not is_file or entry.startswith(".") or not ext_rx.search(entry):
            continue
        files.append(full_path)

    return files

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _extension_pattern(extensions: List[str]) -> re.Pattern:
    alternatives = "|".join(re.escape(ext) for ext in extensions)
    return re.compile(rf"\.(?:{alternatives})$", re.IGNORECASE)
