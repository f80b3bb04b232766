from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from relgit.core.config import CONFIG_FILENAME, Config, load_config
from relgit.core.errors import ErrorCode
from relgit.core.result import Err
from relgit.output.console import ConsoleProtocol, RichConsole
from relgit.output.notify import ConsoleNotifier, NotifierProtocol

REPO_ENV = "RELGIT_REPO"
CONFIG_ENV = "RELGIT_CONFIG"
PROJECT_ENV = "RELGIT_PROJECT"


@dataclass(frozen=True, slots=True)
class CLIContext:
    repo: Path
    config: Config
    project: str
    console: ConsoleProtocol
    notifier: NotifierProtocol


def build_context() -> CLIContext:
    """Resolve repo, config and output sinks from the global CLI options."""
    repo = Path(os.environ.get(REPO_ENV) or Path.cwd())
    config_path = Path(os.environ.get(CONFIG_ENV) or repo / CONFIG_FILENAME)
    console = RichConsole()

    config = Config()
    if config_path.exists():
        config_result = load_config(config_path)
        if isinstance(config_result, Err):
            typer.echo(f"error: {config_result.error.message}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        config = config_result.value

    return CLIContext(
        repo=repo,
        config=config,
        project=os.environ.get(PROJECT_ENV, ""),
        console=console,
        notifier=ConsoleNotifier(console),
    )
