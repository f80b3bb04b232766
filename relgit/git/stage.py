from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from relgit.core.result import Err, Ok, Result
from relgit.git.timeouts import GIT_TIMEOUT_SECONDS
from relgit.platform.process import ProcessError
from relgit.platform.process import run as run_process


async def add_to_stage(
    paths: Sequence[str],
    *,
    dry_run: bool,
    skip_stage: bool,
    cwd: Path | None = None,
) -> Result[None, ProcessError]:
    """Stage ``paths`` for the release commit.

    Nothing to stage and ``skip_stage`` both complete with Ok(None) without
    running git, so a chained pipeline keeps going. ``dry_run`` is passed
    through to ``git add --dry-run``.
    """
    if not paths:
        return Ok(None)
    if skip_stage:
        return Ok(None)

    args = ["git", "add", *(["--dry-run"] if dry_run else []), *paths]
    result = await run_process(args, cwd=cwd or Path.cwd(), timeout=GIT_TIMEOUT_SECONDS)
    if isinstance(result, Err):
        return result
    return Ok(None)
