"""Operand handling for GVT commands.

Operands arrive already split by the shell; these helpers only pick
them apart.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence


MESSAGE_FLAG = "-m"
LAST_FLAG = "-last"

_INT_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True, slots=True)
class FileOperands:
    """`<file> [-m <message>]` after parsing."""
    filename: str | None = None
    message: str | None = None


def parse_int(text: str | int | None) -> int | None:
    """Parse a decimal integer, returning None if text is not one."""
    if isinstance(text, bool):
        return None
    if isinstance(text, int):
        return text
    if text is None or not _INT_RE.fullmatch(text):
        return None
    return int(text)


def parse_file_and_message(operands: Sequence[str]) -> FileOperands:
    """Split file command operands into file name and message.

    The last `-m` takes the operand right after it as the message; the
    first operand left over is the file name. A trailing `-m` with
    nothing after it is treated as a file name candidate like any other
    operand.
    """
    args = list(operands)
    message = None

    flag_idx = -1
    for idx, arg in enumerate(args):
        if arg == MESSAGE_FLAG:
            flag_idx = idx
    if flag_idx != -1 and flag_idx + 1 < len(args):
        message = args[flag_idx + 1]
        del args[flag_idx:flag_idx + 2]

    filename = args[0] if args else None
    return FileOperands(filename=filename or None, message=message)


def parse_history_limit(operands: Sequence[str]) -> int | None:
    """Read `-last N` from history operands.

    Returns:
        N; 0 (full history) when N is not an integer; None when the
        flag is absent
    """
    args = list(operands)
    if len(args) >= 2 and args[0] == LAST_FLAG:
        limit = parse_int(args[1])
        return 0 if limit is None else limit
    return None


def first_operand(operands: Sequence[str]) -> str | None:
    return operands[0] if operands else None
