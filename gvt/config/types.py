"""Configuration schemas for GVT.

Defines dataclasses for all configuration structures.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


DEFAULT_REPO_DIR = ".gvt"


class ObjectMode(str, Enum):
    """How carried-forward objects are materialized in a new version."""
    COPY = "copy"  # independent byte copy per version
    LINK = "link"  # hard link to the previous version's object


@dataclass
class ObjectsConfig:
    """Object store settings."""
    mode: ObjectMode = ObjectMode.COPY

    @classmethod
    def from_dict(cls, data: dict) -> ObjectsConfig:
        """Create ObjectsConfig from dictionary."""
        mode_str = data.get("mode", "copy")
        if isinstance(mode_str, str) and mode_str in ("copy", "link"):
            return cls(mode=ObjectMode(mode_str))
        return cls()


@dataclass
class HistoryConfig:
    """Defaults for the history command."""
    default_limit: int = 0  # 0 = full history

    @classmethod
    def from_dict(cls, data: dict) -> HistoryConfig:
        """Create HistoryConfig from dictionary."""
        limit = data.get("defaultLimit", 0)
        if isinstance(limit, bool) or not isinstance(limit, int):
            limit = 0
        return cls(default_limit=max(limit, 0))


@dataclass
class GvtConfig:
    """Main GVT configuration."""
    repo_dir: str = DEFAULT_REPO_DIR
    objects: ObjectsConfig = field(default_factory=ObjectsConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)

    @classmethod
    def from_dict(cls, data: dict) -> GvtConfig:
        """Create GvtConfig from dictionary."""
        repo_dir = data.get("repoDir", DEFAULT_REPO_DIR)
        if not isinstance(repo_dir, str) or not _is_plain_dir_name(repo_dir):
            repo_dir = DEFAULT_REPO_DIR

        objects_data = data.get("objects", {})
        history_data = data.get("history", {})

        return cls(
            repo_dir=repo_dir,
            objects=ObjectsConfig.from_dict(objects_data if isinstance(objects_data, dict) else {}),
            history=HistoryConfig.from_dict(history_data if isinstance(history_data, dict) else {}),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "repoDir": self.repo_dir,
            "objects": {"mode": self.objects.mode.value},
            "history": {"defaultLimit": self.history.default_limit},
        }


def _is_plain_dir_name(name: str) -> bool:
    return bool(name.strip()) and name not in (".", "..") and "/" not in name and "\\" not in name
