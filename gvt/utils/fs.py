"""File system utilities for GVT.

Provides atomic writes, file copies and safe JSON loading.
"""

from __future__ import annotations

import json
import os
import shutil
import stat
import tempfile
from pathlib import Path
from typing import Any


def atomic_write(file_path: Path | str, content: str | bytes, mode: str = "w") -> None:
    """Write content atomically using tempfile + rename pattern.

    Args:
        file_path: Target file path
        content: Content to write
        mode: Write mode ('w' for text, 'wb' for binary)
    """
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    # Temp file must live in the target directory for os.replace to be atomic
    fd, tmp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp"
    )

    try:
        with os.fdopen(fd, mode) as f:
            f.write(content)
        # mkstemp creates 0600; keep the mode a plain write would leave
        os.chmod(tmp_path, _file_mode(path))
        os.replace(tmp_path, path)
    except Exception:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def _file_mode(path: Path) -> int:
    """Permission bits of an existing file, or the umask default for a new one."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_json(file_path: Path | str, data: Any) -> None:
    """Atomically write a JSON document.

    Args:
        file_path: Target file path
        data: JSON-serializable payload
    """
    atomic_write(file_path, json.dumps(data, indent=2) + "\n", mode="w")


def copy_file(src: Path | str, dst: Path | str) -> None:
    """Copy file bytes, creating parent directories of dst.

    Only content is copied; permissions and timestamps are not preserved.
    """
    dst_path = Path(dst)
    dst_path.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(src, dst_path)


def link_or_copy(src: Path | str, dst: Path | str) -> bool:
    """Hard-link src to dst, falling back to a byte copy.

    Args:
        src: Existing file
        dst: Destination path (replaced if present)

    Returns:
        True if a hard link was created, False if bytes were copied
    """
    dst_path = Path(dst)
    dst_path.parent.mkdir(parents=True, exist_ok=True)
    if dst_path.exists():
        dst_path.unlink()
    try:
        os.link(src, dst_path)
        return True
    except OSError:
        shutil.copyfile(src, dst_path)
        return False


def safe_json_load(file_path: Path | str, default: Any = None) -> Any:
    """Safely load JSON file with fallback.

    Args:
        file_path: Path to JSON file
        default: Default value if file doesn't exist or is invalid

    Returns:
        Parsed JSON or default value
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError):
        return default if default is not None else {}
