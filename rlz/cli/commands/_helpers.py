"""Shared helpers for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

import typer

from rlz.config import Config, load_config, load_config_or_default
from rlz.core.errors import ErrorCode
from rlz.core.result import Err, Result
from rlz.output.console import Style

if TYPE_CHECKING:
    from rlz.cli.context import CLIContext


T = TypeVar("T")
E = TypeVar("E")


def exit_on_error[T, E](
    result: Result[T, E],
    ctx: CLIContext,
    error_code: ErrorCode,
) -> T:
    """Return the Ok value, or print the error and exit with ``error_code``.

    Error objects are expected to have a ``message`` and an optional ``hint``.
    """
    if isinstance(result, Err):
        error = result.error
        pretty = getattr(error, "pretty", None)
        message: str = pretty() if callable(pretty) else getattr(error, "message", str(error))
        ctx.console.error(message)
        hint: str | None = getattr(error, "hint", None)
        if hint and not callable(pretty):
            ctx.console.print(f"hint: {hint}", Style.DIM)
        raise typer.Exit(code=int(error_code))
    return result.value


def load_workspace_config(ctx: CLIContext, path: Path | None) -> Config:
    """Load ``path``, or discover the configuration file of the workspace."""
    if path is not None:
        result = load_config(path)
    else:
        result = load_config_or_default(ctx.root)
    return exit_on_error(result, ctx, ErrorCode.CONFIG_ERROR)
