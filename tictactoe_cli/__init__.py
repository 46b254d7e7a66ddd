"""Command-line shell for the TicTacToe game.

The command surface is implemented with Typer and Rich for help and error
ergonomics. Game play and metadata commands come from installed bindings and
are attached to the root command as-is.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
