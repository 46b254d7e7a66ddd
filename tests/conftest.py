from __future__ import annotations

import click
import pytest
import typer

from tictactoe_cli.router import build_root_command


class ClickGameProvider:
    """Click-built stand-in for the game bindings."""

    name = "tic-tac-toe"

    def __init__(self) -> None:
        self.builds = 0

    def build_subtree(self) -> click.Command:
        self.builds += 1

        @click.group(name=self.name, help="Play TicTacToe (stub bindings)")
        def game() -> None:
            pass

        @game.command("status", help="Show game status")
        @click.option("--game-id", type=int, default=0, show_default=True, help="Game number")
        def status(game_id: int) -> None:
            click.echo(f"game {game_id}: waiting for opponent")

        @game.command("fail", help="Exit with a delegated error code")
        @click.pass_context
        def fail(ctx: click.Context) -> None:
            ctx.exit(3)

        return game


class TyperMetadataProvider:
    """Typer-built stand-in for the metadata bindings."""

    name = "tic-tac-toe-metadata"

    def build_subtree(self) -> typer.Typer:
        app = typer.Typer(
            name=self.name,
            help="Query TicTacToe metadata (stub bindings)",
            add_completion=False,
        )

        @app.command("token-uri", help="Print the metadata URI of a game")
        def token_uri(game_id: int = typer.Argument(..., help="Game number")) -> None:
            typer.echo(f"data:application/json;game={game_id}")

        @app.command("name", help="Print the collection name")
        def name() -> None:
            typer.echo("TicTacToe")

        return app


@pytest.fixture
def game_provider() -> ClickGameProvider:
    return ClickGameProvider()


@pytest.fixture
def metadata_provider() -> TyperMetadataProvider:
    return TyperMetadataProvider()


@pytest.fixture
def root(game_provider: ClickGameProvider, metadata_provider: TyperMetadataProvider) -> click.Group:
    return build_root_command(game=game_provider, metadata=metadata_provider)
