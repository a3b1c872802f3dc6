"""Version ledger for GVT.

One JSON record per version (`versions/<n>.json`) holding the commit
message and the ordered list of tracked files.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, Protocol

from ..utils.fs import write_json
from .errors import VersionNotFoundError
from .types import VersionRecord


RECORD_SUFFIX = ".json"


class VersionLedger(Protocol):
    """Per-version metadata storage."""

    def write_version(self, version: int, message: str, files: Iterable[str]) -> VersionRecord: ...

    def read_version(self, version: int) -> VersionRecord: ...

    def list_versions(self) -> list[int]: ...

    def exists(self, version: int) -> bool: ...


class FileVersionLedger:
    """Ledger backed by one JSON file per version."""

    def __init__(self, versions_dir: Path):
        self.versions_dir = Path(versions_dir)

    def write_version(self, version: int, message: str, files: Iterable[str]) -> VersionRecord:
        """Persist the record for version in a single atomic write."""
        record = VersionRecord(version=version, message=message or "", files=tuple(files))
        write_json(self._record_path(version), record.to_dict())
        return record

    def read_version(self, version: int) -> VersionRecord:
        """Load the record for version.

        Raises:
            VersionNotFoundError: If the record is absent
        """
        path = self._record_path(version)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise VersionNotFoundError(version) from e

        if not isinstance(data, dict):
            data = {}
        data["version"] = version
        return VersionRecord.from_dict(data)

    def list_versions(self) -> list[int]:
        """Known version numbers, ascending.

        Files whose stem is not a non-negative integer are ignored.
        """
        if not self.versions_dir.is_dir():
            return []

        versions = []
        for entry in self.versions_dir.iterdir():
            if not entry.is_file() or entry.suffix != RECORD_SUFFIX:
                continue
            stem = entry.stem
            if stem.isdigit() and stem.isascii() and str(int(stem)) == stem:
                versions.append(int(stem))
        versions.sort()
        return versions

    def exists(self, version: int) -> bool:
        return version >= 0 and self._record_path(version).is_file()

    def _record_path(self, version: int) -> Path:
        return self.versions_dir / f"{version}{RECORD_SUFFIX}"
