from __future__ import annotations

"""
Declaration-Site Resolver.

Recovers the file and line of the user code that invoked a DSL entry point
by walking the live interpreter frames. Provenance is best effort: any
failure degrades to the sentinel location and never interrupts discovery.
"""

import logging
import os
import sys
from types import FrameType
from typing import Optional, Sequence
from urllib.parse import unquote

from bdd_inventory.domain.models import UNKNOWN_LOCATION, SourceLocation

logger = logging.getLogger(__name__)

FILE_URL_PREFIX = "file://"

# Frames from these modules belong to the recorder, not to the user
_INTERNAL_MODULES = ("bdd_inventory.core.discovery",)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def resolve_declaration_site(
        depth: int = 0,
        cwd: Optional[str] = None,
        internal_modules: Sequence[str] = _INTERNAL_MODULES,
) -> SourceLocation:
    """
    Determine the location of the immediate caller of a recording function.

    The walk starts `depth` frames above the caller of this function and
    skips every frame whose module belongs to `internal_modules`.

    Args:
        depth: Extra frames to skip before the internal-frame filter applies.
        cwd: Working directory stripped from absolute paths. Defaults to
             the process working directory.
        internal_modules: Module name prefixes treated as recorder frames.

    Returns:
        SourceLocation: The resolved site, or the ('unknown', 0) sentinel.
    """
    frame: Optional[FrameType] = None
    try:
        frame = sys._getframe(depth + 1)
        while frame is not None and _is_internal(frame, internal_modules):
            frame = frame.f_back

        if frame is None:
            logger.debug("No user frame found above the recorder; using sentinel location.")
            return UNKNOWN_LOCATION

        file_name = relativize_source_path(frame.f_code.co_filename, cwd)
        line = frame.f_lineno
        if not file_name or not line or line < 0:
            return UNKNOWN_LOCATION
        return SourceLocation(file_name, line)

    except Exception as e:
        logger.debug(f"Declaration site resolution failed: {e}")
        return UNKNOWN_LOCATION

    finally:
        # Frame references keep whole call chains alive
        del frame


def relativize_source_path(file_name: str, cwd: Optional[str] = None) -> str:
    """
    Normalize a code-object filename into a workspace-relative path.

    Strips a 'file://' URL prefix when present, then a leading
    working-directory-plus-separator prefix.

    Args:
        file_name: Raw filename reported by the interpreter.
        cwd: Working directory to strip. Defaults to os.getcwd().

    Returns:
        str: The relative path, or the input unchanged when it lies outside cwd.
    """
    if file_name.startswith(FILE_URL_PREFIX):
        file_name = unquote(file_name[len(FILE_URL_PREFIX):])

    base = cwd if cwd is not None else os.getcwd()
    prefix = base.rstrip(os.sep) + os.sep
    if base and file_name.startswith(prefix):
        return file_name[len(prefix):]
    return file_name

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _is_internal(frame: FrameType, internal_modules: Sequence[str]) -> bool:
    module_name = frame.f_globals.get("__name__") or ""
    return any(
        module_name == prefix or module_name.startswith(prefix + ".")
        for prefix in internal_modules
    )
