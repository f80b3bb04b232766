"""Annotated tag creation with retry and backoff.

A failed ``git tag`` is retried with a doubling delay (1s, 2s, 4s, ...)
until the retry budget is spent, except when git reports that the tag
already exists: that is a real naming collision and fails at once.
"""

from __future__ import annotations

from asyncio import sleep
from dataclasses import dataclass
from pathlib import Path

from relgit.core.result import Err, Ok, Result
from relgit.git.errors import TagAlreadyExistsError, TagError
from relgit.git.timeouts import GIT_TIMEOUT_SECONDS, TAG_RETRY_BASE_SECONDS
from relgit.output.notify import NotifierProtocol, NullNotifier, StepEvent, emit
from relgit.platform.process import ProcessError
from relgit.platform.process import run as run_process

__all__ = ["TagRequest", "create_tag", "is_tag_conflict", "tag_retry_delay"]

_ALREADY_EXISTS = "already exists"


@dataclass(frozen=True, slots=True)
class TagRequest:
    """What to tag and how hard to try.

    Attributes:
        tag: Tag name (e.g. ``v1.4.0``).
        commit_hash: Commit the tag points at.
        message: Annotation message.
        dry_run: Do nothing and succeed without a value.
        retries: Retry budget after the first attempt.
        project: Project name used in notifications.
    """

    tag: str
    commit_hash: str
    message: str
    dry_run: bool = False
    retries: int = 0
    project: str = ""


def is_tag_conflict(error: ProcessError) -> bool:
    return _ALREADY_EXISTS in f"{error.stderr}\n{error.stdout}"


def tag_retry_delay(retries: int, retries_left: int) -> float:
    """Seconds to wait before the next attempt.

    ``retries - retries_left`` is the number of retries already made, so the
    first wait is 1s and every following one doubles.
    """
    return TAG_RETRY_BASE_SECONDS * 2 ** (retries - retries_left)


async def create_tag(
    request: TagRequest,
    *,
    cwd: Path | None = None,
    notifier: NotifierProtocol | None = None,
) -> Result[str | None, TagError]:
    """Create an annotated tag on ``request.commit_hash``.

    Returns:
        Ok(tag) once created, Ok(None) in dry-run mode,
        Err(TagAlreadyExistsError) on a name collision (never retried),
        Err(ProcessError) with the last git error once retries are spent.
    """
    if request.dry_run:
        return Ok(None)

    args = ["git", "tag", "-a", request.tag, request.commit_hash, "-m", request.message]
    retries_left = request.retries

    while True:
        result = await run_process(args, cwd=cwd or Path.cwd(), timeout=GIT_TIMEOUT_SECONDS)
        if isinstance(result, Ok):
            break

        error = result.error
        if is_tag_conflict(error):
            return Err(TagAlreadyExistsError(tag=request.tag))
        if retries_left <= 0:
            return Err(error)

        await sleep(tag_retry_delay(request.retries, retries_left))
        retries_left -= 1

    emit(
        notifier or NullNotifier(),
        StepEvent(
            step="tag_success",
            level="info",
            message=f'Tagged "{request.tag}".',
            project=request.project,
        ),
    )
    return Ok(request.tag)
