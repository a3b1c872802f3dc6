"""GVT command line interface.

Usage: gvt [--debug] <command> [operands]

Options before the command are parsed with argparse; everything from the
command on is handed to the controller untouched, so operands such as
`-m` and `-last` never clash with global options.
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import Sequence

from .. import __version__
from ..core.controller import GvtController
from ..core.types import CommandResult
from ..utils.env import get_project_root


COMMAND_HELP = """commands:
  init                          initialize the current directory
  add <file> [-m <message>]     start tracking a file
  detach <file> [-m <message>]  stop tracking a file
  commit <file> [-m <message>]  record the current content of a tracked file
  checkout <version>            restore tracked files of a version
  history [-last <n>]           list versions, newest first
  version [<version>]           show a version's message (default: active)
"""


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gvt",
        usage="%(prog)s [--debug] <command> [operands]",
        description="GVT - minimal local version tracking",
        epilog=COMMAND_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output",
    )
    return parser


GLOBAL_OPTIONS = frozenset({"--debug", "--version", "-v", "--help", "-h"})


def split_command_line(argv: Sequence[str]) -> tuple[list[str], str | None, list[str]]:
    """Split argv into global options, command and operands.

    Only known global options are taken before the command; any other
    leading token is the command, so it is reported as unknown.
    """
    args = list(argv)
    idx = 0
    while idx < len(args) and args[idx] in GLOBAL_OPTIONS:
        idx += 1
    command = args[idx] if idx < len(args) else None
    return args[:idx], command, args[idx + 1:]


def main(args: list[str] | None = None) -> int:
    argv = sys.argv[1:] if args is None else args
    global_args, command, operands = split_command_line(argv)

    parser = create_parser()
    parsed = parser.parse_args(global_args)

    if parsed.debug:
        os.environ["GVT_DEBUG"] = "1"

    controller = GvtController(project_root=get_project_root())
    result = controller.run(command, operands)
    return report(result)


def report(result: CommandResult) -> int:
    """Print the result message and return the exit status."""
    if result.ok:
        if result.message:
            print(result.message)
    else:
        print(result.message, file=sys.stderr)
    return result.status


if __name__ == "__main__":
    sys.exit(main())
