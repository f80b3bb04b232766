"""Platform abstraction layer."""

from .process import (
    ProcessError,
    run,
    stream,
)

__all__ = [
    "ProcessError",
    "run",
    "stream",
]
