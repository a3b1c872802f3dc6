"""Working directory access for GVT."""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Protocol

from ..utils.fs import atomic_write


class WorkingTree(Protocol):
    """The user's files, as seen by the engine."""

    def normalize(self, name: str) -> str | None: ...

    def exists(self, name: str) -> bool: ...

    def read(self, name: str) -> bytes: ...

    def write(self, name: str, data: bytes) -> None: ...


def normalize_name(name: str, repo_dir: str) -> str | None:
    """Canonical relative form of a user-supplied file name.

    Returns None for names that cannot be tracked: empty, absolute,
    escaping the working directory, or inside the repository directory.
    """
    if not name or not name.strip():
        return None
    path = PurePosixPath(name.replace("\\", "/"))
    if path.is_absolute() or ".." in path.parts:
        return None
    parts = [p for p in path.parts if p != "."]
    if not parts or parts[0] == repo_dir:
        return None
    return "/".join(parts)


class FileWorkingTree:
    """Working tree rooted at a directory on disk."""

    def __init__(self, root: Path, repo_dir: str):
        """Initialize working tree.

        Args:
            root: Working directory
            repo_dir: Name of the repository directory inside root
        """
        self.root = Path(root)
        self.repo_dir = repo_dir

    def normalize(self, name: str) -> str | None:
        return normalize_name(name, self.repo_dir)

    def exists(self, name: str) -> bool:
        return (self.root / name).is_file()

    def read(self, name: str) -> bytes:
        return (self.root / name).read_bytes()

    def write(self, name: str, data: bytes) -> None:
        atomic_write(self.root / name, data, mode="wb")
