"""Value types shared by the GVT stores and engine."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class RepositoryPointers:
    """The two mutable scalars of a repository.

    `last` is the highest version ever created, `active` the version
    currently materialized in the working directory.
    """
    last: int
    active: int

    def __post_init__(self) -> None:
        if not 0 <= self.active <= self.last:
            raise ValueError(f"Invalid repository pointers: last={self.last}, active={self.active}")

    def advance(self, version: int) -> RepositoryPointers:
        """Pointers after a new version has been created."""
        return RepositoryPointers(last=version, active=version)

    def activate(self, version: int) -> RepositoryPointers:
        """Pointers after `version` has been checked out."""
        return RepositoryPointers(last=self.last, active=version)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"last": self.last, "active": self.active}

    @classmethod
    def from_dict(cls, data: dict) -> RepositoryPointers:
        """Create from dictionary.

        Raises:
            ValueError: If the record is malformed
        """
        try:
            return cls(last=int(data["last"]), active=int(data["active"]))
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed repository pointers: {data!r}") from e


@dataclass(frozen=True, slots=True)
class VersionRecord:
    """Ledger entry for one version."""
    version: int
    message: str = ""
    files: tuple[str, ...] = field(default_factory=tuple)

    @property
    def summary(self) -> str:
        """First line of the message, as shown by history."""
        return self.message.splitlines()[0] if self.message else ""

    def tracks(self, name: str) -> bool:
        return name in self.files

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "version": self.version,
            "message": self.message,
            "files": list(self.files),
        }

    @classmethod
    def from_dict(cls, data: dict) -> VersionRecord:
        """Create from dictionary."""
        message = data.get("message")
        files = data.get("files")
        return cls(
            version=int(data["version"]),
            message=message if isinstance(message, str) else "",
            files=tuple(f for f in files if isinstance(f, str) and f) if isinstance(files, list) else (),
        )


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of one command: process status code and user message."""
    status: int
    message: str

    @property
    def ok(self) -> bool:
        return self.status == 0
