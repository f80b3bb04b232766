"""Release commands - stage, tag and push."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer

from relgit.cli.commands._helpers import exit_on_error, history_scope
from relgit.cli.context import build_context
from relgit.core.errors import ErrorCode
from relgit.git.history import get_last_commit_hash
from relgit.git.push import PushRequest, try_push
from relgit.git.stage import add_to_stage
from relgit.git.tag import TagRequest, create_tag
from relgit.output.console import Style


def stage(
    paths: list[str] = typer.Argument(None, help="Paths to stage"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Pass --dry-run to git add"),
    skip: bool = typer.Option(False, "--skip", help="Skip staging but report success"),
) -> None:
    """Stage release files."""
    ctx = build_context()
    items = paths or []
    skip_stage = skip or ctx.config.stage.skip
    result = asyncio.run(
        add_to_stage(
            items,
            dry_run=dry_run,
            skip_stage=skip_stage,
            cwd=ctx.repo,
        )
    )
    exit_on_error(result, ctx)
    if skip_stage:
        ctx.console.print("staging skipped", Style.DIM)
    elif items:
        ctx.console.success(f"staged {len(items)} path(s)")


def tag(
    name: str = typer.Argument(..., help="Tag name"),
    message: str = typer.Option(..., "--message", "-m", help="Annotation message"),
    commit: str | None = typer.Option(None, "--commit", help="Commit to tag (default: last commit)"),
    path: Path | None = typer.Option(None, "--path", help="Path the default commit must touch"),
    retries: int | None = typer.Option(None, "--retries", min=0, help="Retry budget"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Do not create the tag"),
) -> None:
    """Create an annotated tag."""
    ctx = build_context()

    async def _run() -> None:
        commit_hash = commit
        if commit_hash is None:
            commit_hash = exit_on_error(
                await get_last_commit_hash(project_root=history_scope(ctx, path), cwd=ctx.repo),
                ctx,
            )
            if not commit_hash:
                ctx.console.error(f"no commit found to tag under {history_scope(ctx, path)}")
                raise typer.Exit(code=int(ErrorCode.GIT_ERROR))
        request = TagRequest(
            tag=name,
            commit_hash=commit_hash,
            message=message,
            dry_run=dry_run,
            retries=ctx.config.tag.retries if retries is None else retries,
            project=ctx.project,
        )
        created = exit_on_error(
            await create_tag(request, cwd=ctx.repo, notifier=ctx.notifier),
            ctx,
        )
        if created is None:
            ctx.console.print(f"dry-run: would tag {commit_hash} as {name}", Style.DIM)

    asyncio.run(_run())


def push(
    name: str = typer.Argument(..., help="Tag to push with the branch"),
    remote: str | None = typer.Option(None, "--remote", help="Remote name"),
    branch: str | None = typer.Option(None, "--branch", help="Branch to push"),
    no_verify: bool = typer.Option(False, "--no-verify", help="Skip git push hooks"),
) -> None:
    """Push branch and tag atomically (non-atomic fallback)."""
    ctx = build_context()
    request = PushRequest(
        remote=remote or ctx.config.push.remote,
        branch=branch or ctx.config.push.branch,
        tag=name,
        no_verify=no_verify or ctx.config.push.no_verify,
        project=ctx.project,
    )
    result = asyncio.run(try_push(request, cwd=ctx.repo, notifier=ctx.notifier))
    exit_on_error(result, ctx)
