"""Object storage for GVT.

Keeps one full byte copy of every tracked file per version under
`objects/<version>/<filename>`. There is no deduplication and no cache:
every read goes to disk.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Iterable, Protocol

from ..config.types import ObjectMode
from ..utils.fs import atomic_write, copy_file, link_or_copy
from .errors import ObjectNotFoundError


class ObjectStore(Protocol):
    """Version-scoped file content storage."""

    def put(self, version: int, filename: str, data: bytes) -> None: ...

    def get(self, version: int, filename: str) -> bytes: ...

    def exists(self, version: int, filename: str) -> bool: ...

    def copy_forward(self, from_version: int, to_version: int, filenames: Iterable[str]) -> list[str]: ...

    def clear(self, version: int) -> None: ...


class FileObjectStore:
    """Object store backed by a directory tree."""

    def __init__(self, objects_dir: Path, mode: ObjectMode = ObjectMode.COPY):
        """Initialize object store.

        Args:
            objects_dir: Root of the per-version object areas
            mode: Whether carried-forward objects are copied or hard-linked
        """
        self.objects_dir = Path(objects_dir)
        self.mode = mode

    def version_dir(self, version: int) -> Path:
        return self.objects_dir / str(version)

    def put(self, version: int, filename: str, data: bytes) -> None:
        """Store data as the object for (version, filename), replacing any previous one."""
        # Replace rather than write through, so hard-linked objects of
        # earlier versions keep their content.
        atomic_write(self._object_path(version, filename), data, mode="wb")

    def get(self, version: int, filename: str) -> bytes:
        """Read the object for (version, filename).

        Raises:
            ObjectNotFoundError: If no such object is stored
        """
        path = self._object_path(version, filename)
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise ObjectNotFoundError(version, filename) from e

    def exists(self, version: int, filename: str) -> bool:
        return self._object_path(version, filename).is_file()

    def copy_forward(self, from_version: int, to_version: int, filenames: Iterable[str]) -> list[str]:
        """Carry objects of from_version over to to_version.

        Names without an object at from_version are skipped.

        Returns:
            Names that were carried forward
        """
        copied = []
        for name in filenames:
            src = self._object_path(from_version, name)
            if not src.is_file():
                continue
            dst = self._object_path(to_version, name)
            if self.mode == ObjectMode.LINK:
                link_or_copy(src, dst)
            else:
                copy_file(src, dst)
            copied.append(name)
        return copied

    def clear(self, version: int) -> None:
        """Remove whatever is stored for version."""
        version_dir = self.version_dir(version)
        if version_dir.exists():
            shutil.rmtree(version_dir)

    def _object_path(self, version: int, filename: str) -> Path:
        return self.version_dir(version) / filename
