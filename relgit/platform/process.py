"""Async subprocess execution with Result-based error handling.

Two shapes of invocation are provided:

- ``run``: request/response. Waits for the process and returns its stdout.
- ``stream``: long-running. Hands each stdout line to a callback as soon as
  it arrives, for commands whose output is unbounded (``git log``).

Usage:
    result = await run(["git", "rev-parse", "HEAD"], cwd=repo)
    match result:
        case Ok(stdout):
            print(stdout)
        case Err(error):
            print(f"Failed: {error.stderr}")
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from relgit.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run", "stream"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code of the process (-1 if it never ran or timed out).
        stdout: Standard output (may be empty).
        stderr: Standard error (contains error details).
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        """Format error for display."""
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


def _spawn_error(cmd: list[str], e: OSError) -> Err[ProcessError]:
    return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e)))


def _timeout_error(cmd: list[str], timeout: float | None, stdout: str = "") -> Err[ProcessError]:
    return Err(
        ProcessError(
            command=tuple(cmd),
            returncode=-1,
            stdout=stdout,
            stderr=f"Command timed out after {timeout}s",
        )
    )


async def _kill(proc: asyncio.subprocess.Process) -> None:
    if proc.returncode is None:
        proc.kill()
        await proc.wait()


async def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and return stdout or error.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).
        timeout: Maximum seconds to wait (None for no limit).

    Returns:
        Ok(stdout) on success, Err(ProcessError) on failure.
    """
    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            cwd=str(cwd),
            env=env,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        return _spawn_error(cmd, e)

    try:
        out, err = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except TimeoutError:
        await _kill(proc)
        return _timeout_error(cmd, timeout)

    stdout = out.decode("utf-8", errors="replace")
    stderr = err.decode("utf-8", errors="replace")

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode if proc.returncode is not None else -1,
                stdout=stdout,
                stderr=stderr,
            )
        )

    return Ok(stdout)


async def stream(
    cmd: list[str],
    cwd: Path,
    on_line: Callable[[str], None],
    *,
    env: dict[str, str] | None = None,
    timeout: float | None = None,
) -> Result[None, ProcessError]:
    """Execute a command, delivering stdout line by line.

    ``on_line`` receives each line with its trailing newline, in the order
    the process writes them. stderr is drained concurrently so a chatty
    process cannot stall on a full pipe.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        on_line: Called once per stdout line.
        env: Environment variables (uses current env if None).
        timeout: Maximum seconds for the whole invocation (None for no limit).

    Returns:
        Ok(None) on success, Err(ProcessError) with captured stderr on failure.
    """
    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            cwd=str(cwd),
            env=env,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        return _spawn_error(cmd, e)

    assert proc.stdout is not None
    assert proc.stderr is not None
    stdout_pipe = proc.stdout
    stderr_pipe = proc.stderr

    async def pump() -> None:
        while True:
            raw = await stdout_pipe.readline()
            if not raw:
                return
            on_line(raw.decode("utf-8", errors="replace"))

    async def consume() -> bytes:
        _, err = await asyncio.gather(pump(), stderr_pipe.read())
        await proc.wait()
        return err

    try:
        err = await asyncio.wait_for(consume(), timeout=timeout)
    except TimeoutError:
        await _kill(proc)
        return _timeout_error(cmd, timeout)

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode if proc.returncode is not None else -1,
                stdout="",
                stderr=err.decode("utf-8", errors="replace"),
            )
        )

    return Ok(None)
