"""History commands - read commits and locate reference commits."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer

from relgit.cli.commands._helpers import exit_on_error, history_scope
from relgit.cli.context import build_context
from relgit.git.history import get_commits, get_last_commit_hash
from relgit.git.refs import get_first_commit_ref


def commits(
    since: str | None = typer.Option(None, "--since", help="Start after this commit or tag"),
    path: Path | None = typer.Option(None, "--path", help="Limit history to this path"),
) -> None:
    """Print commit bodies (merges excluded), newest first."""
    ctx = build_context()
    result = asyncio.run(
        get_commits(
            project_root=history_scope(ctx, path),
            since=since,
            cwd=ctx.repo,
        )
    )
    bodies = exit_on_error(result, ctx)
    for body in bodies:
        ctx.console.print(body.rstrip("\n"))
        ctx.console.print("")


def last_hash(
    path: Path | None = typer.Option(None, "--path", help="Limit history to this path"),
) -> None:
    """Print the hash of the last commit."""
    ctx = build_context()
    result = asyncio.run(
        get_last_commit_hash(project_root=history_scope(ctx, path), cwd=ctx.repo)
    )
    ctx.console.print(exit_on_error(result, ctx))


def first_commit() -> None:
    """Print the root commit of HEAD."""
    ctx = build_context()
    result = asyncio.run(get_first_commit_ref(cwd=ctx.repo))
    ctx.console.print(exit_on_error(result, ctx))
