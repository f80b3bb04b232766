from __future__ import annotations

import os
from pathlib import Path

import typer

from relgit import __version__
from relgit.cli.commands.history import commits, first_commit, last_hash
from relgit.cli.commands.release import push, stage, tag
from relgit.cli.context import CONFIG_ENV, PROJECT_ENV, REPO_ENV
from relgit.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(commits)
app.command("last-hash")(last_hash)
app.command("first-commit")(first_commit)
app.command()(stage)
app.command()(tag)
app.command()(push)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    repo: Path | None = typer.Option(None, "--repo", help="Repository root (default: cwd)"),
    config: Path | None = typer.Option(None, "--config", help="Config file (default: <repo>/relgit.toml)"),
    project: str | None = typer.Option(None, "--project", help="Project name shown in progress output"),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if repo is not None:
        root = repo.expanduser().resolve()
        if not root.is_dir():
            typer.echo(f"error: --repo '{root}' is not a directory", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        os.environ[REPO_ENV] = str(root)

    if config is not None:
        os.environ[CONFIG_ENV] = str(config.expanduser())

    if project is not None:
        os.environ[PROJECT_ENV] = project


def main() -> None:
    app()
