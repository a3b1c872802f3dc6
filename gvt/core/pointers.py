"""Repository pointer storage for GVT.

The `last`/`active` pair is the only mutable cross-command state. It is
loaded at the start of every command and stored at the end of any
command that changed it.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Protocol

from ..utils.fs import write_json
from .errors import UninitializedError
from .types import RepositoryPointers


class PointerStore(Protocol):
    """Persistence for RepositoryPointers."""

    def load(self) -> RepositoryPointers: ...

    def store(self, pointers: RepositoryPointers) -> None: ...

    def is_initialized(self) -> bool: ...


class FilePointerStore:
    """Pointers kept in a small JSON record (meta.json)."""

    def __init__(self, meta_path: Path):
        self.meta_path = Path(meta_path)

    def is_initialized(self) -> bool:
        return self.meta_path.is_file()

    def load(self) -> RepositoryPointers:
        """Read the current pointers.

        Raises:
            UninitializedError: If the repository was never initialized
        """
        try:
            with open(self.meta_path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise UninitializedError() from e
        return RepositoryPointers.from_dict(data)

    def store(self, pointers: RepositoryPointers) -> None:
        """Persist both pointers in one atomic write."""
        write_json(self.meta_path, pointers.to_dict())
