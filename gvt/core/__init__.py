"""Core modules for GVT."""

from .controller import GvtController
from .engine import VersionEngine
from .types import CommandResult, RepositoryPointers, VersionRecord

__all__ = [
    "CommandResult",
    "GvtController",
    "RepositoryPointers",
    "VersionEngine",
    "VersionRecord",
]
