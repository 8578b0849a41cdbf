from __future__ import annotations

from typing import Annotated

import typer

from .base import configure_logging
from .commands.build import build_command, run_command
from .commands.clean import clean_command
from .commands.develop import develop_command
from .commands.tree import tree_command

configure_logging()
app = typer.Typer(
    name="frontbuild",
    help="Front-end asset build: compile, minify, optimize, watch and serve.",
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("build")(build_command)
app.command("develop")(develop_command)
app.command("run")(run_command)
app.command("clean")(clean_command)


@app.callback(invoke_without_command=True)
def default(ctx: typer.Context) -> None:
    """Without a subcommand, run the develop loop."""
    if ctx.invoked_subcommand is None:
        develop_command()


@app.command("tree")
def tree(
    filter_verb: Annotated[
        str | None,
        typer.Option(
            "-f",
            "--filter",
            help="Only show this command (e.g., 'build', 'run')",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show descriptions and options"),
    ] = False,
) -> None:
    """Display all CLI commands in a hierarchical tree."""
    tree_command(typer_app=app, filter_verb=filter_verb, verbose=verbose)


def main() -> None:
    """Main entry point for package CLI.

    Invokes the Typer application, which handles command parsing and
    execution.
    """
    app()


if __name__ == "__main__":
    main()
