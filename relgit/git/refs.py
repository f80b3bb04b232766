from __future__ import annotations

from pathlib import Path

from relgit.core.result import Err, Ok, Result
from relgit.git.timeouts import GIT_TIMEOUT_SECONDS
from relgit.platform.process import ProcessError
from relgit.platform.process import run as run_process


def pick_root_commit(output: str) -> str:
    """Return the last non-blank line of ``git rev-list`` output, or ""."""
    refs = [line.strip() for line in output.split("\n")]
    refs = [ref for ref in refs if ref]
    return refs[-1] if refs else ""


async def get_first_commit_ref(*, cwd: Path | None = None) -> Result[str, ProcessError]:
    """Return the root commit of HEAD (a commit without parents).

    When the history has several roots (grafted or merged unrelated
    histories), the last one listed wins.
    """
    result = await run_process(
        ["git", "rev-list", "--max-parents=0", "HEAD"],
        cwd=cwd or Path.cwd(),
        timeout=GIT_TIMEOUT_SECONDS,
    )
    match result:
        case Err(_):
            return result
        case Ok(stdout):
            return Ok(pick_root_commit(stdout))
