"""Progress notifications emitted by git operations.

Notifications are a side channel: a tag or push reports ``tag_success`` or
``push_success`` here, but the operation's Result never depends on what the
notifier does with the event.

Usage:
    notifier = ConsoleNotifier(RichConsole())
    await try_push(request, cwd=repo, notifier=notifier)
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import Literal, Protocol

from relgit.output.console import ConsoleProtocol

__all__ = [
    "ConsoleNotifier",
    "NotifierProtocol",
    "NullNotifier",
    "RecordingNotifier",
    "StepEvent",
    "emit",
]

Level = Literal["info", "warn"]


@dataclass(frozen=True, slots=True)
class StepEvent:
    """A single progress event.

    Attributes:
        step: Machine-readable step id (``tag_success``, ``push_success``, ``warning``).
        level: ``info`` or ``warn``.
        message: Human-readable message.
        project: Name of the project the step ran for (may be empty).
    """

    step: str
    level: Level
    message: str
    project: str = ""


class NotifierProtocol(Protocol):
    def notify(self, event: StepEvent) -> None: ...


class NullNotifier:
    """Drops every event."""

    def notify(self, event: StepEvent) -> None:
        del event


def _empty_events() -> list[StepEvent]:
    return []


@dataclass
class RecordingNotifier:
    """Keeps events in memory, in emission order."""

    events: list[StepEvent] = field(default_factory=_empty_events)

    def notify(self, event: StepEvent) -> None:
        self.events.append(event)

    @property
    def steps(self) -> list[str]:
        return [e.step for e in self.events]


class ConsoleNotifier:
    """Renders events on a console."""

    def __init__(self, console: ConsoleProtocol) -> None:
        self._console = console

    def notify(self, event: StepEvent) -> None:
        message = f"[{event.project}] {event.message}" if event.project else event.message
        if event.level == "warn":
            self._console.warning(message)
        elif event.step.endswith("_success"):
            self._console.success(message)
        else:
            self._console.info(message)


def emit(notifier: NotifierProtocol, event: StepEvent) -> None:
    """Deliver an event; a failing notifier is reported as a warning only."""
    try:
        notifier.notify(event)
    except Exception as e:  # noqa: BLE001
        warnings.warn(
            f"notifier failed on {event.step!r}: {e}",
            RuntimeWarning,
            stacklevel=2,
        )
