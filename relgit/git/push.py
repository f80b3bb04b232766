"""Push a release branch and its tag.

The branch and tag go out in one ``git push --atomic``. Remotes that cannot
do atomic pushes answer with an error mentioning "atomic"; in that case the
push is tried once more without the flag.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relgit.core.result import Err, Ok, Result
from relgit.git.errors import ConfigurationError, PushError
from relgit.git.timeouts import GIT_NETWORK_TIMEOUT_SECONDS
from relgit.output.notify import NotifierProtocol, NullNotifier, StepEvent, emit
from relgit.platform.process import ProcessError
from relgit.platform.process import run as run_process

__all__ = ["PushRequest", "is_atomic_unsupported", "try_push"]


@dataclass(frozen=True, slots=True)
class PushRequest:
    remote: str | None
    branch: str | None
    tag: str
    no_verify: bool = False
    project: str = ""


def is_atomic_unsupported(error: ProcessError) -> bool:
    return "atomic" in f"{error.stderr}\n{error.stdout}"


def _missing_options(request: PushRequest) -> list[str]:
    missing: list[str] = []
    if not request.remote:
        missing.append("--remote")
    if not request.branch:
        missing.append("--branch")
    return missing


async def try_push(
    request: PushRequest,
    *,
    cwd: Path | None = None,
    notifier: NotifierProtocol | None = None,
) -> Result[str, PushError]:
    """Push ``request.branch`` and ``request.tag`` to ``request.remote``.

    Returns:
        Ok(remote) on success, Err(ConfigurationError) if remote or branch
        is missing (nothing is run), Err(ProcessError) otherwise.
    """
    missing = _missing_options(request)
    if missing:
        return Err(ConfigurationError(message=f"Missing option {' and '.join(missing)}"))

    assert request.remote is not None
    assert request.branch is not None
    sink = notifier or NullNotifier()
    options = ["--no-verify"] if request.no_verify else []
    targets = [request.remote, request.branch, request.tag]
    workdir = cwd or Path.cwd()

    result = await run_process(
        ["git", "push", *options, "--atomic", *targets],
        cwd=workdir,
        timeout=GIT_NETWORK_TIMEOUT_SECONDS,
    )
    if isinstance(result, Err) and is_atomic_unsupported(result.error):
        emit(
            sink,
            StepEvent(
                step="warning",
                level="warn",
                message="Git push --atomic failed, attempting non-atomic push.",
                project=request.project,
            ),
        )
        result = await run_process(
            ["git", "push", *options, *targets],
            cwd=workdir,
            timeout=GIT_NETWORK_TIMEOUT_SECONDS,
        )

    if isinstance(result, Err):
        return result

    emit(
        sink,
        StepEvent(
            step="push_success",
            level="info",
            message=f'Pushed to "{request.remote}" "{request.branch}".',
            project=request.project,
        ),
    )
    return Ok(request.remote)
