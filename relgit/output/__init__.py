"""Output abstraction layer."""

from .console import (
    ConsoleProtocol,
    MockConsole,
    RichConsole,
    Style,
)
from .notify import (
    ConsoleNotifier,
    NotifierProtocol,
    NullNotifier,
    RecordingNotifier,
    StepEvent,
    emit,
)

__all__ = [
    # console
    "ConsoleProtocol",
    "MockConsole",
    "RichConsole",
    "Style",
    # notify
    "ConsoleNotifier",
    "NotifierProtocol",
    "NullNotifier",
    "RecordingNotifier",
    "StepEvent",
    "emit",
]
