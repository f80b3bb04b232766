"""Exit codes for relgit commands.

The numeric values are process exit codes and should remain stable:
- 0: Success
- 1: User error (missing option, bad input)
- 2: Environment error (git missing, command timed out)
- 3: Git error (command failed, unreadable history)
- 4: Conflict (tag already exists)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    GIT_ERROR = 3
    CONFLICT = 4
