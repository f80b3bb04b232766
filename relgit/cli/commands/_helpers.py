"""Shared helpers for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

import typer

from relgit.core.result import Err, Result
from relgit.git.errors import GitOpsError
from relgit.output.errors import git_error_exit_code, print_git_error

if TYPE_CHECKING:
    from relgit.cli.context import CLIContext

T = TypeVar("T")


def exit_on_error(result: Result[T, GitOpsError], ctx: CLIContext) -> T:
    """Return the Ok value, or print the error and exit with its code.

    Replaces the common pattern:
        match result:
            case Err(e):
                print_git_error(e, ctx.console)
                raise typer.Exit(code=git_error_exit_code(e))
            case Ok(value):
                ...
    """
    if isinstance(result, Err):
        print_git_error(result.error, ctx.console)
        raise typer.Exit(code=git_error_exit_code(result.error))
    return result.value


def history_scope(ctx: CLIContext, override: Path | None = None) -> Path:
    """Path that history reads are limited to: ``--path`` or ``[history] path``."""
    return override if override is not None else Path(ctx.config.history.path)
