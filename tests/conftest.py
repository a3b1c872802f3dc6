from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pytest

from gvt.core.controller import GvtController
from gvt.core.engine import VersionEngine
from gvt.core.errors import ObjectNotFoundError, UninitializedError, VersionNotFoundError
from gvt.core.types import RepositoryPointers, VersionRecord
from gvt.core.working_tree import normalize_name


@pytest.fixture(autouse=True)
def _isolate_home(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Prevent developer machine `~/.gvt/config.json` from influencing tests."""

    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("GVT_DEBUG", raising=False)
    monkeypatch.delenv("GVT_PROJECT_ROOT", raising=False)


class MemoryObjectStore:
    def __init__(self):
        self.objects: dict[tuple[int, str], bytes] = {}

    def put(self, version: int, filename: str, data: bytes) -> None:
        self.objects[(version, filename)] = bytes(data)

    def get(self, version: int, filename: str) -> bytes:
        try:
            return self.objects[(version, filename)]
        except KeyError as e:
            raise ObjectNotFoundError(version, filename) from e

    def exists(self, version: int, filename: str) -> bool:
        return (version, filename) in self.objects

    def copy_forward(self, from_version: int, to_version: int, filenames: Iterable[str]) -> list[str]:
        copied = []
        for name in filenames:
            if (from_version, name) in self.objects:
                self.objects[(to_version, name)] = self.objects[(from_version, name)]
                copied.append(name)
        return copied

    def clear(self, version: int) -> None:
        for key in [k for k in self.objects if k[0] == version]:
            del self.objects[key]

    def names(self, version: int) -> set[str]:
        return {name for v, name in self.objects if v == version}


class MemoryLedger:
    def __init__(self):
        self.records: dict[int, VersionRecord] = {}

    def write_version(self, version: int, message: str, files: Iterable[str]) -> VersionRecord:
        record = VersionRecord(version=version, message=message or "", files=tuple(files))
        self.records[version] = record
        return record

    def read_version(self, version: int) -> VersionRecord:
        try:
            return self.records[version]
        except KeyError as e:
            raise VersionNotFoundError(version) from e

    def list_versions(self) -> list[int]:
        return sorted(self.records)

    def exists(self, version: int) -> bool:
        return version in self.records


class MemoryPointerStore:
    def __init__(self):
        self.pointers: RepositoryPointers | None = None

    def load(self) -> RepositoryPointers:
        if self.pointers is None:
            raise UninitializedError()
        return self.pointers

    def store(self, pointers: RepositoryPointers) -> None:
        self.pointers = pointers

    def is_initialized(self) -> bool:
        return self.pointers is not None


class MemoryWorkingTree:
    def __init__(self, files: dict[str, bytes] | None = None):
        self.files: dict[str, bytes] = dict(files or {})
        self.fail_reads = False

    def normalize(self, name: str) -> str | None:
        return normalize_name(name, ".gvt")

    def exists(self, name: str) -> bool:
        return name in self.files

    def read(self, name: str) -> bytes:
        if self.fail_reads:
            raise OSError("simulated read failure")
        return self.files[name]

    def write(self, name: str, data: bytes) -> None:
        self.files[name] = bytes(data)


@pytest.fixture
def memory_tree():
    return MemoryWorkingTree()


@pytest.fixture
def engine(memory_tree):
    """VersionEngine over in-memory stores."""
    return VersionEngine(
        objects=MemoryObjectStore(),
        ledger=MemoryLedger(),
        pointers=MemoryPointerStore(),
        tree=memory_tree,
    )


@pytest.fixture
def project(tmp_path) -> Path:
    """Empty working directory on disk."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def controller(project) -> GvtController:
    return GvtController(project_root=project)
