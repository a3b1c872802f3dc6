"""Error taxonomy for GVT.

Every error carries the status code the command reports for it.
"""

from __future__ import annotations


UNKNOWN_COMMAND = 1
UNINITIALIZED = -2
UNDERLYING_FAILURE = -3

UNINITIALIZED_MESSAGE = 'Current directory is not initialized. Please use "init" command to initialize.'
UNDERLYING_FAILURE_MESSAGE = "Underlying system problem. See ERR for details."


class GvtError(Exception):
    """Base error for GVT commands."""

    status = UNDERLYING_FAILURE

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class UsageError(GvtError):
    """A required operand is missing or malformed."""


class NotFoundError(GvtError):
    """A referenced file or version does not exist."""


class FileNotFoundInTreeError(NotFoundError):
    """A file named on the command line is absent from the working tree."""


class InvalidVersionError(NotFoundError):
    """A version operand does not parse or names no existing version."""

    status = 60

    def __init__(self, operand: object):
        super().__init__(f"Invalid version number: {operand}")
        self.operand = operand


class ObjectNotFoundError(NotFoundError):
    """No object stored for (version, filename)."""

    def __init__(self, version: int, filename: str):
        super().__init__(f"Object not found: version {version}, file {filename}")
        self.version = version
        self.filename = filename


class VersionNotFoundError(NotFoundError):
    """No ledger record for a version."""

    def __init__(self, version: int):
        super().__init__(f"Version record not found: {version}")
        self.version = version


class AlreadyInitializedError(GvtError):
    """init was run on a directory that already holds a repository."""

    status = 10

    def __init__(self):
        super().__init__("Current directory is already initialized.")


class UninitializedError(GvtError):
    """A command other than init ran outside a repository."""

    status = UNINITIALIZED

    def __init__(self):
        super().__init__(UNINITIALIZED_MESSAGE)


class StorageError(GvtError):
    """An I/O failure interrupted a command; partial writes are possible."""

    def __init__(self, message: str, status: int, cause: BaseException):
        super().__init__(message, status)
        self.cause = cause
