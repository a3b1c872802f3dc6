"""Environment utilities for GVT."""

from __future__ import annotations

import os
from pathlib import Path


def is_debug_mode() -> bool:
    """Check if debug mode is enabled.

    Returns:
        True if GVT_DEBUG is set to a truthy value
    """
    val = os.environ.get("GVT_DEBUG", "").lower()
    return val in ("1", "true", "yes", "on")


def get_home_dir() -> Path:
    """Get user home directory.

    Returns:
        Path to home directory
    """
    return Path.home()


def get_global_gvt_dir() -> Path:
    """Get global GVT directory (~/.gvt).

    Returns:
        Path to global GVT config directory
    """
    return get_home_dir() / ".gvt"


def get_project_root() -> Path:
    """Resolve the working directory GVT operates on.

    GVT_PROJECT_ROOT overrides the current directory.
    """
    val = os.environ.get("GVT_PROJECT_ROOT")
    if isinstance(val, str) and val.strip():
        return Path(val.strip()).expanduser()
    return Path.cwd()
