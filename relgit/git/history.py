"""Commit history extraction.

``git log`` output is unbounded, so it is streamed: each line is fed into a
``CommitStream`` as it arrives and the stream cuts it into one record per
commit on a delimiter line. The records are only handed to the caller once
the stream completes; a failed read returns an error and nothing else.

Usage:
    match await get_commits(project_root=Path("packages/app"), since="v1.2.0"):
        case Ok(bodies):
            changelog = render(bodies)
        case Err(error):
            print_git_error(error, console)
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from relgit.core.result import Err, Ok, Result
from relgit.git.errors import HistoryReadError
from relgit.git.timeouts import GIT_LOG_TIMEOUT_SECONDS
from relgit.platform.process import ProcessError
from relgit.platform.process import stream as stream_process

__all__ = [
    "COMMIT_DELIMITER",
    "CommitStream",
    "get_commits",
    "get_formatted_commits",
    "get_last_commit_hash",
]

COMMIT_DELIMITER = "------------------------"


class CommitStream:
    """Accumulates streamed commit records into one ordered result.

    Records are kept in arrival order. ``close()`` and ``finish()`` both mean
    "the stream ended normally"; whichever comes first settles the result and
    any later completion (or failure) signal is ignored. ``fail()`` settles
    with an error and drops what was accumulated.
    """

    def __init__(self) -> None:
        self._records: list[str] = []
        self._pending: list[str] = []
        self._outcome: Result[list[str], HistoryReadError] | None = None
        self._settled = asyncio.Event()

    @property
    def done(self) -> bool:
        return self._outcome is not None

    def feed_line(self, line: str) -> None:
        """Buffer one raw output line; a delimiter line closes the current record."""
        if self.done:
            return
        if line.rstrip("\r\n") == COMMIT_DELIMITER:
            self.push("".join(self._pending))
            self._pending.clear()
            return
        self._pending.append(line)

    def push(self, chunk: str) -> None:
        if self.done:
            return
        self._records.append(chunk)

    def close(self) -> None:
        self._complete()

    def finish(self) -> None:
        self._complete()

    def fail(self, error: HistoryReadError) -> None:
        if self.done:
            return
        self._records.clear()
        self._pending.clear()
        self._settle(Err(error))

    async def wait(self) -> Result[list[str], HistoryReadError]:
        await self._settled.wait()
        assert self._outcome is not None
        return self._outcome

    def _complete(self) -> None:
        if self.done:
            return
        if any(line.strip() for line in self._pending):
            self.push("".join(self._pending))
        self._pending.clear()
        self._settle(Ok(list(self._records)))

    def _settle(self, outcome: Result[list[str], HistoryReadError]) -> None:
        self._outcome = outcome
        self._settled.set()


def _log_args(*, project_root: Path, format: str, ignore_merge_commits: bool, since: str) -> list[str]:
    args = [
        "git",
        "log",
        f"--format={format}%n{COMMIT_DELIMITER}",
        "--full-history",
    ]
    if ignore_merge_commits:
        args.append("--no-merges")
    args.append(f"{since}..HEAD" if since else "HEAD")
    args.extend(["--", str(project_root)])
    return args


def _read_error(error: ProcessError) -> HistoryReadError:
    return HistoryReadError(
        message=f"failed to read commit history: {error}",
        stderr=error.stderr,
        returncode=error.returncode,
    )


async def get_formatted_commits(
    *,
    project_root: Path,
    format: str,
    ignore_merge_commits: bool,
    since: str | None = None,
    cwd: Path | None = None,
) -> Result[list[str], HistoryReadError]:
    """Return one formatted record per commit touching ``project_root``.

    Args:
        project_root: Path scope of the history.
        format: ``git log`` pretty format of a single record (``%B``, ``%H``...).
        ignore_merge_commits: Exclude merge commits.
        since: Lower-bound reference (exclusive); None or "" reads the whole history.
        cwd: Directory to run git in (defaults to the current directory).

    Returns:
        Ok(records) in the order git emits them, Err(HistoryReadError) on failure.
    """
    commits = CommitStream()
    args = _log_args(
        project_root=project_root,
        format=format,
        ignore_merge_commits=ignore_merge_commits,
        since=since or "",
    )

    result = await stream_process(
        args,
        cwd=cwd or Path.cwd(),
        on_line=commits.feed_line,
        timeout=GIT_LOG_TIMEOUT_SECONDS,
    )
    match result:
        case Err(e):
            commits.fail(_read_error(e))
        case Ok(_):
            commits.close()
            commits.finish()

    return await commits.wait()


async def get_commits(
    *,
    project_root: Path,
    since: str | None = None,
    cwd: Path | None = None,
) -> Result[list[str], HistoryReadError]:
    """Return full commit bodies since ``since``, merges excluded."""
    return await get_formatted_commits(
        project_root=project_root,
        since=since,
        format="%B",
        ignore_merge_commits=True,
        cwd=cwd,
    )


async def get_last_commit_hash(
    *,
    project_root: Path,
    cwd: Path | None = None,
) -> Result[str, HistoryReadError]:
    """Return the hash of the most recent commit touching ``project_root``.

    An empty history yields an empty string.
    """
    result = await get_formatted_commits(
        project_root=project_root,
        format="%H",
        ignore_merge_commits=False,
        cwd=cwd,
    )
    return result.map(lambda commits: commits[0].strip() if commits else "")
