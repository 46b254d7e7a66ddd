"""Command subtrees contributed by installed bindings.

The router never imports game or metadata code directly. It asks a
``CommandProvider`` for a ready-made subtree and attaches it under the root
command. Bindings register a zero-argument factory in the
``tictactoe.bindings`` entry point group, e.g.::

    [project.entry-points."tictactoe.bindings"]
    game = "tictactoe_bindings.game:create_game_command"
    metadata = "tictactoe_bindings.metadata:create_metadata_command"
"""

from __future__ import annotations

from dataclasses import dataclass
from importlib.metadata import EntryPoint, entry_points
from typing import Protocol, Union, runtime_checkable

import click
import typer

from .cli_shared import BINDINGS_ENTRY_POINT_GROUP, OpError

Subtree = Union[click.Command, typer.Typer]


@runtime_checkable
class CommandProvider(Protocol):
    """Source of one opaque command subtree.

    ``build_subtree`` returns either a Click command (usually a group) or a
    Typer app. The subtree carries its own name, help text and actions.
    """

    def build_subtree(self) -> Subtree:
        ...


def as_click_command(subtree: Subtree) -> click.Command:
    if isinstance(subtree, typer.Typer):
        return typer.main.get_command(subtree)
    return subtree


def _find_entry_point(group: str, name: str) -> EntryPoint | None:
    for ep in entry_points(group=group):
        if ep.name == name:
            return ep
    return None


def _unavailable_subtree(*, name: str, help: str, group: str) -> typer.Typer:
    sub = typer.Typer(
        name=name,
        help=f"{help} (bindings not installed)",
        add_completion=False,
    )

    @sub.callback(invoke_without_command=True)
    def unavailable() -> None:
        raise OpError(
            f"no {name!r} bindings installed "
            f"(expected an entry point named {name!r} in group {group!r})"
        )

    return sub


@dataclass(frozen=True)
class EntryPointProvider:
    slot: str
    help: str
    group: str = BINDINGS_ENTRY_POINT_GROUP

    def build_subtree(self) -> Subtree:
        ep = _find_entry_point(self.group, self.slot)
        if ep is None:
            return _unavailable_subtree(name=self.slot, help=self.help, group=self.group)
        try:
            factory = ep.load()
        except Exception as e:
            raise OpError(f"failed to load {self.slot!r} bindings from {ep.value!r}: {e}") from e
        if not callable(factory):
            raise OpError(f"{self.slot!r} bindings entry point {ep.value!r} is not callable")
        try:
            return factory()
        except Exception as e:
            raise OpError(f"{self.slot!r} bindings failed to build their commands: {e}") from e


GAME_PROVIDER = EntryPointProvider(slot="game", help="Play TicTacToe games")
METADATA_PROVIDER = EntryPointProvider(slot="metadata", help="Query TicTacToe game metadata")
