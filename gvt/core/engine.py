"""Version transition engine for GVT.

Implements the commands as transitions over the object store, the
version ledger and the pointer store. Versions form an append-only
chain: every mutating command creates exactly one new version holding a
complete copy of the tracked files, then advances the pointers.

Write order for a new version is objects, ledger record, pointers. The
pointers are what publishes a version, so a command interrupted before
storing them leaves the previous state intact apart from unreferenced
files.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from ..utils.log import log_debug
from .errors import (
    AlreadyInitializedError,
    FileNotFoundInTreeError,
    InvalidVersionError,
    StorageError,
    UsageError,
)
from .ledger import VersionLedger
from .object_store import ObjectStore
from .operands import parse_int
from .pointers import PointerStore
from .types import CommandResult, RepositoryPointers, VersionRecord
from .working_tree import WorkingTree


INIT_MESSAGE = "GVT initialized."
ADD_MESSAGE = "File added successfully."
DETACH_MESSAGE = "File detached successfully."
COMMIT_MESSAGE = "File committed successfully."


class VersionEngine:
    """Runs GVT commands against injected stores."""

    def __init__(
        self,
        objects: ObjectStore,
        ledger: VersionLedger,
        pointers: PointerStore,
        tree: WorkingTree,
        default_history_limit: int = 0,
    ):
        """Initialize engine.

        Args:
            objects: Per-version file content
            ledger: Per-version message and file list
            pointers: last/active pointer persistence
            tree: The working directory
            default_history_limit: Entries shown by history without a limit (0 = all)
        """
        self.objects = objects
        self.ledger = ledger
        self.pointers = pointers
        self.tree = tree
        self.default_history_limit = default_history_limit

    def init(self) -> CommandResult:
        """Create version 0 with an empty file set."""
        if self.pointers.is_initialized():
            raise AlreadyInitializedError()

        self.objects.clear(0)
        self.ledger.write_version(0, INIT_MESSAGE, [])
        self.pointers.store(RepositoryPointers(last=0, active=0))
        log_debug("initialized repository at version 0")
        return CommandResult(0, "Current directory initialized successfully.")

    def add(self, filename: str | None, message: str | None = None) -> CommandResult:
        """Start tracking filename in a new version."""
        if not filename:
            raise UsageError("Please specify file to add.", 20)
        name = self._require_file(filename, status=21)

        try:
            pointers = self.pointers.load()
            base = self.ledger.read_version(pointers.last)
            if base.tracks(name):
                return CommandResult(0, f"File already added. File: {filename}")

            self._create_version(
                pointers,
                files=base.files + (name,),
                message=message or ADD_MESSAGE,
                carry=base.files,
                fresh={name: self.tree.read(name)},
            )
        except OSError as e:
            raise StorageError(f"File cannot be added. See ERR for details. File: {filename}", 22, e) from e

        return CommandResult(0, f"File added successfully. File: {filename}")

    def detach(self, filename: str | None, message: str | None = None) -> CommandResult:
        """Stop tracking filename in a new version. The working file is left alone."""
        if not filename:
            raise UsageError("Please specify file to detach.", 30)
        name = self.tree.normalize(filename)

        try:
            pointers = self.pointers.load()
            base = self.ledger.read_version(pointers.last)
            if name is None or not base.tracks(name):
                return CommandResult(0, f"File is not added to gvt. File: {filename}")

            remaining = tuple(f for f in base.files if f != name)
            self._create_version(
                pointers,
                files=remaining,
                message=message or DETACH_MESSAGE,
                carry=remaining,
            )
        except OSError as e:
            raise StorageError(f"File cannot be detached. See ERR for details. File: {filename}", 31, e) from e

        return CommandResult(0, f"File detached successfully. File: {filename}")

    def commit(self, filename: str | None, message: str | None = None) -> CommandResult:
        """Record the current content of a tracked file in a new version.

        A new version is created even if the content did not change.
        """
        if not filename:
            raise UsageError("Please specify file to commit.", 50)
        name = self._require_file(filename, status=51)

        try:
            pointers = self.pointers.load()
            base = self.ledger.read_version(pointers.last)
            if not base.tracks(name):
                return CommandResult(0, f"File is not added to gvt. File: {filename}")

            self._create_version(
                pointers,
                files=base.files,
                message=message or COMMIT_MESSAGE,
                carry=tuple(f for f in base.files if f != name),
                fresh={name: self.tree.read(name)},
            )
        except OSError as e:
            raise StorageError(f"File cannot be committed. See ERR for details. File: {filename}", 52, e) from e

        return CommandResult(0, f"File committed successfully. File: {filename}")

    def checkout(self, operand: str | int | None) -> CommandResult:
        """Overwrite the working files with the content of a version.

        Files listed by the version but missing from the object store are
        skipped. Untracked working files are never touched.
        """
        pointers = self.pointers.load()
        version = self._resolve_version(operand, pointers)

        record = self.ledger.read_version(version)
        restored = 0
        for name in record.files:
            if not self.objects.exists(version, name):
                log_debug(f"checkout {version}: no object for {name}, skipped")
                continue
            self.tree.write(name, self.objects.get(version, name))
            restored += 1

        self.pointers.store(pointers.activate(version))
        log_debug(f"checked out version {version} ({restored} files)")
        return CommandResult(0, f"Checkout successful for version: {version}")

    def history(self, limit: int | None = None) -> CommandResult:
        """List versions newest first as `<version>: <summary>`.

        Args:
            limit: Show only the most recent `limit` versions if positive;
                None falls back to the configured default
        """
        if limit is None:
            limit = self.default_history_limit

        records = self._published_records(self.pointers.load())
        if limit > 0:
            records = records[-limit:]

        lines = [f"{record.version}: {record.summary}" for record in reversed(records)]
        return CommandResult(0, "\n".join(lines))

    def version(self, operand: str | int | None = None) -> CommandResult:
        """Show number and full message of a version (default: active)."""
        pointers = self.pointers.load()
        if operand is None:
            operand = pointers.active
        version = self._resolve_version(operand, pointers)

        record = self.ledger.read_version(version)
        return CommandResult(0, f"Version: {version}\n{record.message}")

    def _create_version(
        self,
        pointers: RepositoryPointers,
        *,
        files: Iterable[str],
        message: str,
        carry: Iterable[str],
        fresh: Mapping[str, bytes] | None = None,
    ) -> int:
        new_version = pointers.last + 1

        # Leftovers of an interrupted attempt at this version number
        self.objects.clear(new_version)
        copied = self.objects.copy_forward(pointers.last, new_version, carry)
        for name, data in (fresh or {}).items():
            self.objects.put(new_version, name, data)

        self.ledger.write_version(new_version, message, files)
        self.pointers.store(pointers.advance(new_version))

        log_debug(
            f"created version {new_version} from {pointers.last}: "
            f"carried {len(copied)}, stored {sorted(fresh or {})}"
        )
        return new_version

    def _require_file(self, filename: str, status: int) -> str:
        name = self.tree.normalize(filename)
        if name is None or not self.tree.exists(name):
            raise FileNotFoundInTreeError(f"File not found. File: {filename}", status)
        return name

    def _resolve_version(self, operand: str | int | None, pointers: RepositoryPointers) -> int:
        version = parse_int(operand)
        if version is None or not self._is_published(version, pointers):
            raise InvalidVersionError("" if operand is None else operand)
        return version

    def _is_published(self, version: int, pointers: RepositoryPointers) -> bool:
        return 0 <= version <= pointers.last and self.ledger.exists(version)

    def _published_records(self, pointers: RepositoryPointers) -> list[VersionRecord]:
        return [
            self.ledger.read_version(v)
            for v in self.ledger.list_versions()
            if v <= pointers.last
        ]
