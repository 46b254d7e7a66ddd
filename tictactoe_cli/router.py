from __future__ import annotations

import contextlib
import sys
from typing import Any, Callable

import click
import typer
from typer._completion_shared import get_completion_script
from typer.completion import completion_init

from .cli_shared import (
    DEFAULT_OPTIONS,
    OpError,
    RouterOptions,
    _eprint,
    _rich_error,
)
from .providers import GAME_PROVIDER, METADATA_PROVIDER, CommandProvider, as_click_command

SHELLS = ("bash", "zsh", "fish", "powershell")

COMPLETION_HELP = """Generate shell completion scripts for {prog}.

The command for each shell will print a completion script to stdout. You can source this script to get
completions in your current shell session. You can add this script to the completion directory for your
shell to get completions for all future sessions.

For example, to activate bash completions in your current shell:

    $ . <({prog} completion bash)

To add {prog} completions for all bash sessions:

    $ {prog} completion bash > /etc/bash_completion.d/{prog}_completions
"""


class _InsertionOrderTyperGroup(typer.core.TyperGroup):
    def list_commands(self, ctx: click.Context) -> list[str]:
        return list(self.commands)


def _echo(text: str, options: RouterOptions) -> None:
    typer.echo(text, err=options.output_to_stderr)


def _print_help(ctx: click.Context, options: RouterOptions) -> None:
    target = sys.stderr if options.output_to_stderr else sys.stdout
    # Typer's Rich renderer prints to whatever sys.stdout is and hands back "".
    with contextlib.redirect_stdout(target):
        help_text = ctx.get_help()
    if help_text:
        _echo(help_text, options)


def _help_when_bare(ctx: typer.Context, options: RouterOptions) -> None:
    if ctx.invoked_subcommand is None:
        _print_help(ctx, options)


def _completion_action(shell: str, options: RouterOptions) -> Callable[[], None]:
    def action() -> None:
        script = get_completion_script(
            prog_name=options.prog_name,
            complete_var=options.complete_var,
            shell=shell,
        )
        _echo(script, options)

    return action


def create_completion_app(options: RouterOptions = DEFAULT_OPTIONS) -> typer.Typer:
    completion_app = typer.Typer(
        name="completion",
        help=COMPLETION_HELP.format(prog=options.prog_name),
        short_help=f"Generate shell completion scripts for {options.prog_name}",
        add_completion=False,
        cls=_InsertionOrderTyperGroup,
    )

    @completion_app.callback(invoke_without_command=True)
    def completion_callback(ctx: typer.Context) -> None:
        _help_when_bare(ctx, options)

    for shell in SHELLS:
        completion_app.command(
            shell,
            help=f"{shell} completions for {options.prog_name}",
        )(_completion_action(shell, options))
    return completion_app


def create_version_app(options: RouterOptions = DEFAULT_OPTIONS) -> typer.Typer:
    version_app = typer.Typer(add_completion=False)

    @version_app.command("version", help=f"Print the version of {options.prog_name} that you are currently using")
    def version_command() -> None:
        _echo(options.version, options)

    return version_app


def create_root_app(options: RouterOptions = DEFAULT_OPTIONS) -> typer.Typer:
    """Build the bare root: help by default plus the eager ``--version`` flag.

    Children are attached at the Click level by ``build_root_command`` so
    they keep their registration order.
    """

    def version_callback(value: bool) -> None:
        if value:
            _echo(f"{options.prog_name} {options.version}", options)
            raise typer.Exit(code=0)

    app = typer.Typer(
        name=options.prog_name,
        help=f"{options.prog_name}: CLI to the TicTacToe Game",
        add_completion=False,
        cls=_InsertionOrderTyperGroup,
    )

    @app.callback(invoke_without_command=True)
    def root_callback(
        ctx: typer.Context,
        version: bool = typer.Option(
            False,
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ) -> None:
        del version
        _help_when_bare(ctx, options)

    return app


def build_root_command(
    *,
    game: CommandProvider,
    metadata: CommandProvider,
    options: RouterOptions = DEFAULT_OPTIONS,
) -> click.Group:
    """Assemble the full command tree.

    Order of the root children is ``completion``, ``version``, then the game
    subtree and the metadata subtree exactly as their providers built them.
    """
    root = typer.main.get_command(create_root_app(options))
    if not isinstance(root, click.Group):
        raise OpError(
            f"root command is a {type(root).__name__}, not a click.Group "
            "(is the installed typer built on a different click?)"
        )
    for subtree in (create_completion_app(options), create_version_app(options)):
        root.add_command(as_click_command(subtree))
    for provider in (game, metadata):
        root.add_command(as_click_command(provider.build_subtree()))
    return root


def _render_usage_error(e: click.UsageError) -> None:
    _rich_error(e.format_message())
    ctx = e.ctx
    if isinstance(ctx, click.Context):
        _eprint(ctx.get_usage())
        _eprint(f"Try '{ctx.command_path} --help' for help.")


def run(
    root: click.Command,
    argv: list[str] | None = None,
    *,
    options: RouterOptions = DEFAULT_OPTIONS,
) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    # Registers Typer's completion classes (powershell included) for the
    # callbacks issued by the generated scripts.
    completion_init()
    try:
        result: Any = root.main(
            args=argv,
            prog_name=options.prog_name,
            complete_var=options.complete_var,
            standalone_mode=False,
        )
    except typer.Exit as e:
        return int(e.exit_code)
    except click.exceptions.NoArgsIsHelpError as e:
        # A namespace invoked without a child shows its help.
        _print_help(e.ctx, options)
        return 0
    except click.UsageError as e:
        _render_usage_error(e)
        return int(e.exit_code)
    except click.ClickException as e:
        _rich_error(e.format_message())
        return int(e.exit_code)
    except click.Abort:
        _eprint("Aborted!")
        return 1
    except OpError as e:
        _rich_error(str(e))
        return 1
    if isinstance(result, int):
        return result
    return 0


def main(argv: list[str] | None = None) -> int:
    try:
        root = build_root_command(game=GAME_PROVIDER, metadata=METADATA_PROVIDER)
    except OpError as e:
        _rich_error(str(e))
        return 1
    return run(root, argv)
