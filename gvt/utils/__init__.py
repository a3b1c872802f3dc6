"""Utility modules for GVT."""

from .fs import atomic_write, copy_file, link_or_copy, safe_json_load, write_json
from .env import get_global_gvt_dir, get_home_dir, get_project_root, is_debug_mode
from .log import log_debug, log_exception

__all__ = [
    "atomic_write",
    "copy_file",
    "link_or_copy",
    "safe_json_load",
    "write_json",
    "get_global_gvt_dir",
    "get_home_dir",
    "get_project_root",
    "is_debug_mode",
    "log_debug",
    "log_exception",
]
