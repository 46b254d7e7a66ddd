from __future__ import annotations

import sys
from dataclasses import dataclass

from rich.console import Console
from rich.markup import escape

from . import __version__


class TicTacToeCliError(Exception):
    pass


class OpError(TicTacToeCliError):
    pass


PROG_NAME = "tictactoe"
BINDINGS_ENTRY_POINT_GROUP = "tictactoe.bindings"


@dataclass(frozen=True)
class RouterOptions:
    prog_name: str = PROG_NAME
    version: str = __version__
    complete_var: str = "_TICTACTOE_COMPLETE"
    # Help, version and completion output goes to stdout unless this is set.
    output_to_stderr: bool = False


DEFAULT_OPTIONS = RouterOptions()


_ERROR_CONSOLE = Console(stderr=True)


def _eprint(msg: str) -> None:
    print(msg, file=sys.stderr)


def _rich_error(msg: str) -> None:
    _ERROR_CONSOLE.print(f"[bold red]error:[/bold red] {escape(msg)}", highlight=False, soft_wrap=True)
