"""Error presentation utilities.

Centralized error formatting and exit code mapping for git operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from relgit.core.errors import ErrorCode
from relgit.git.errors import (
    ConfigurationError,
    GitOpsError,
    HistoryReadError,
    TagAlreadyExistsError,
)
from relgit.output.console import Style
from relgit.platform.process import ProcessError

if TYPE_CHECKING:
    from relgit.output.console import ConsoleProtocol

__all__ = ["print_git_error", "git_error_exit_code"]


def print_git_error(error: GitOpsError, console: ConsoleProtocol) -> None:
    """Print a git operation error with its hint or captured stderr."""
    match error:
        case ConfigurationError(message=message, hint=hint):
            console.error(message)
            if hint:
                console.print(f"hint: {hint}", Style.DIM)
        case TagAlreadyExistsError():
            console.error(error.message)
        case HistoryReadError(message=message):
            console.error(message)
            if error.hint:
                console.print(error.hint, Style.DIM)
        case ProcessError(stderr=stderr):
            console.error(str(error))
            if stderr.strip():
                console.print(stderr.strip(), Style.DIM)


def git_error_exit_code(error: GitOpsError) -> int:
    """Get exit code for a git operation error."""
    match error:
        case ConfigurationError():
            return int(ErrorCode.USER_ERROR)
        case TagAlreadyExistsError():
            return int(ErrorCode.CONFLICT)
        case HistoryReadError():
            return int(ErrorCode.GIT_ERROR)
        case ProcessError(returncode=-1):
            return int(ErrorCode.ENV_ERROR)
        case ProcessError():
            return int(ErrorCode.GIT_ERROR)
    # Fallback for exhaustiveness
    return int(ErrorCode.GIT_ERROR)
