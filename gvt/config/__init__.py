"""Configuration management for GVT."""

from .types import (
    DEFAULT_REPO_DIR,
    GvtConfig,
    HistoryConfig,
    ObjectMode,
    ObjectsConfig,
)
from .loader import ConfigLoader

__all__ = [
    "DEFAULT_REPO_DIR",
    "GvtConfig",
    "HistoryConfig",
    "ObjectMode",
    "ObjectsConfig",
    "ConfigLoader",
]
