"""Configuration loader for GVT.

Handles loading and merging configuration from multiple sources.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..utils.env import get_global_gvt_dir
from ..utils.fs import safe_json_load
from .types import GvtConfig


CONFIG_FILE_NAME = "config.json"


class ConfigLoader:
    """Loads and manages GVT configuration."""

    def __init__(self, project_root: Path | None = None):
        """Initialize config loader.

        Args:
            project_root: Working directory (for project-local config)
        """
        self.project_root = project_root
        self._config: GvtConfig | None = None

    @property
    def config(self) -> GvtConfig:
        """Get loaded configuration, loading if necessary."""
        if self._config is None:
            self._config = self.load()
        return self._config

    def load(self) -> GvtConfig:
        """Load configuration from all sources.

        Priority (highest to lowest):
        1. Project-local config (<root>/.gvt/config.json)
        2. Global config (~/.gvt/config.json)
        3. Default values

        The repository directory name itself is only read from the
        global config, since the project config lives inside it.

        Returns:
            Merged GvtConfig
        """
        merged: dict[str, Any] = {}

        global_data = self._read(get_global_gvt_dir() / CONFIG_FILE_NAME)
        merged = self._deep_merge(merged, global_data)

        repo_dir = GvtConfig.from_dict(global_data).repo_dir

        if self.project_root:
            project_data = self._read(self.project_root / repo_dir / CONFIG_FILE_NAME)
            project_data.pop("repoDir", None)
            merged = self._deep_merge(merged, project_data)

        merged["repoDir"] = repo_dir
        return GvtConfig.from_dict(merged)

    @staticmethod
    def _read(path: Path) -> dict[str, Any]:
        if not path.exists():
            return {}
        data = safe_json_load(path, {})
        return data if isinstance(data, dict) else {}

    @staticmethod
    def _deep_merge(base: dict, override: dict) -> dict:
        """Deep merge two dictionaries.

        Args:
            base: Base dictionary
            override: Dictionary to merge (takes precedence)

        Returns:
            Merged dictionary
        """
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = ConfigLoader._deep_merge(result[key], value)
            else:
                result[key] = value
        return result
