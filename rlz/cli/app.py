from __future__ import annotations

import os
from pathlib import Path

import typer

from rlz import __version__
from rlz.cli.commands.config_cmd import config_app
from rlz.cli.commands.repo_cmd import repo_app
from rlz.cli.context import WORKSPACE_ENV
from rlz.core.errors import ErrorCode

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Sub-apps
app.add_typer(config_app, name="config")
app.add_typer(repo_app, name="repo")


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Show version and exit.",
    ),
    workspace: Path | None = typer.Option(
        None,
        "--workspace",
        help="Workspace root (default: current directory)",
    ),
) -> None:
    if workspace is not None:
        root = workspace.expanduser().resolve()
        if not root.is_dir():
            typer.echo(f"error: --workspace '{root}' is not a directory", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        os.environ[WORKSPACE_ENV] = str(root)


def main() -> None:
    app()
