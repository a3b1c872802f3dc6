"""Diagnostic output for GVT.

User-facing messages go through the CLI; this module only writes
debug traces and failure details to stderr.
"""

from __future__ import annotations

import sys
import traceback

from .env import is_debug_mode


def log_debug(message: str) -> None:
    """Log debug message to stderr.

    Only outputs if GVT_DEBUG is set.
    """
    if is_debug_mode():
        print(f"[gvt] {message}", file=sys.stderr)


def log_exception(exc: BaseException) -> None:
    """Write the traceback of exc to stderr (the ERR stream)."""
    print(file=sys.stderr)
    traceback.print_exception(type(exc), exc, exc.__traceback__, file=sys.stderr)
