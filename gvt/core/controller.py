"""GVT controller - main orchestrator.

Wires the filesystem stores for a working directory into the version
engine and turns `(command, operands)` into a `CommandResult`. This is
the command boundary: every failure is reported here, nothing is retried.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Sequence

from ..config import ConfigLoader, GvtConfig
from ..utils.log import log_debug, log_exception
from .engine import VersionEngine
from .errors import (
    UNDERLYING_FAILURE,
    UNDERLYING_FAILURE_MESSAGE,
    UNINITIALIZED,
    UNINITIALIZED_MESSAGE,
    UNKNOWN_COMMAND,
    GvtError,
    ObjectNotFoundError,
    StorageError,
    VersionNotFoundError,
)
from .ledger import FileVersionLedger
from .object_store import FileObjectStore
from .operands import first_operand, parse_file_and_message, parse_history_limit
from .pointers import FilePointerStore
from .types import CommandResult
from .working_tree import FileWorkingTree


META_FILE_NAME = "meta.json"
VERSIONS_DIR_NAME = "versions"
OBJECTS_DIR_NAME = "objects"

Handler = Callable[[Sequence[str]], CommandResult]


class GvtController:
    """Main controller for GVT operations."""

    def __init__(self, project_root: Path | str | None = None, config: GvtConfig | None = None):
        """Initialize controller.

        Args:
            project_root: Working directory (defaults to cwd)
            config: Explicit configuration; loaded from disk when omitted
        """
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self._config_loader = ConfigLoader(project_root=self.project_root)
        self._config = config
        self._engine: VersionEngine | None = None
        self._handlers: dict[str, Handler] = {
            "init": self._cmd_init,
            "add": self._cmd_add,
            "detach": self._cmd_detach,
            "commit": self._cmd_commit,
            "checkout": self._cmd_checkout,
            "history": self._cmd_history,
            "version": self._cmd_version,
        }

    @property
    def config(self) -> GvtConfig:
        """Get current configuration."""
        if self._config is None:
            self._config = self._config_loader.config
        return self._config

    @property
    def engine(self) -> VersionEngine:
        """Get version engine (lazy init)."""
        if self._engine is None:
            repo_dir = self.get_repo_dir()
            self._engine = VersionEngine(
                objects=FileObjectStore(repo_dir / OBJECTS_DIR_NAME, mode=self.config.objects.mode),
                ledger=FileVersionLedger(repo_dir / VERSIONS_DIR_NAME),
                pointers=FilePointerStore(repo_dir / META_FILE_NAME),
                tree=FileWorkingTree(self.project_root, self.config.repo_dir),
                default_history_limit=self.config.history.default_limit,
            )
        return self._engine

    def get_repo_dir(self) -> Path:
        """Get the repository directory (.gvt) path."""
        return self.project_root / self.config.repo_dir

    def is_initialized(self) -> bool:
        return self.engine.pointers.is_initialized()

    def run(self, command: str | None, operands: Sequence[str] = ()) -> CommandResult:
        """Execute one command.

        Args:
            command: Command name
            operands: Tokenized operands following the command

        Returns:
            Status code and user message
        """
        if not command:
            return CommandResult(UNKNOWN_COMMAND, "Please specify command.")

        handler = self._handlers.get(command)
        if handler is None:
            return CommandResult(UNKNOWN_COMMAND, f"Unknown command {command}.")

        if command != "init" and not self.is_initialized():
            return CommandResult(UNINITIALIZED, UNINITIALIZED_MESSAGE)

        log_debug(f"{command} {list(operands)} in {self.project_root}")
        try:
            return handler(list(operands))
        except StorageError as e:
            log_exception(e.cause)
            return CommandResult(e.status, e.message)
        except (ObjectNotFoundError, VersionNotFoundError) as e:
            # Store-level lookups only fail on a damaged repository
            log_exception(e)
            return CommandResult(UNDERLYING_FAILURE, UNDERLYING_FAILURE_MESSAGE)
        except GvtError as e:
            return CommandResult(e.status, e.message)
        except (OSError, ValueError) as e:
            log_exception(e)
            return CommandResult(UNDERLYING_FAILURE, UNDERLYING_FAILURE_MESSAGE)

    def _cmd_init(self, operands: Sequence[str]) -> CommandResult:
        return self.engine.init()

    def _cmd_add(self, operands: Sequence[str]) -> CommandResult:
        parsed = parse_file_and_message(operands)
        return self.engine.add(parsed.filename, parsed.message)

    def _cmd_detach(self, operands: Sequence[str]) -> CommandResult:
        parsed = parse_file_and_message(operands)
        return self.engine.detach(parsed.filename, parsed.message)

    def _cmd_commit(self, operands: Sequence[str]) -> CommandResult:
        parsed = parse_file_and_message(operands)
        return self.engine.commit(parsed.filename, parsed.message)

    def _cmd_checkout(self, operands: Sequence[str]) -> CommandResult:
        return self.engine.checkout(first_operand(operands))

    def _cmd_history(self, operands: Sequence[str]) -> CommandResult:
        return self.engine.history(parse_history_limit(operands))

    def _cmd_version(self, operands: Sequence[str]) -> CommandResult:
        return self.engine.version(first_operand(operands))
