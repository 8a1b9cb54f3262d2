"""Cancelable one-shot task scheduling on an injectable clock.

Responsibilities:
- Queue callbacks to run after a delay and hand back a cancelable handle.
- Run due callbacks when the owning loop calls `run_due()`.

Tests drive a fake clock instead of waiting on wall-clock time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import count
from time import monotonic
from typing import Callable


@dataclass(slots=True)
class ScheduledTask:
    """Handle for one queued callback."""

    due_at: float
    callback: Callable[[], None]
    sequence: int
    cancelled: bool = False
    done: bool = False

    def cancel(self) -> bool:
        """Cancel the task; returns `False` when it already ran or was cancelled."""

        if self.cancelled or self.done:
            return False
        self.cancelled = True
        return True

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.done)


@dataclass(slots=True)
class TaskScheduler:
    """Single-threaded scheduler; callbacks run inside `run_due()`."""

    clock: Callable[[], float] = monotonic
    _tasks: list[ScheduledTask] = field(default_factory=list)
    _sequence: count = field(default_factory=count)

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> ScheduledTask:
        """Queue `callback` to run once `delay_seconds` have elapsed."""

        return self.call_at(self.clock() + max(0.0, delay_seconds), callback)

    def call_at(self, due_at: float, callback: Callable[[], None]) -> ScheduledTask:
        """Queue `callback` to run once the clock reaches `due_at`."""

        task = ScheduledTask(due_at=due_at, callback=callback, sequence=next(self._sequence))
        self._tasks.append(task)
        return task

    def run_due(self) -> int:
        """Run every active task whose due time has passed, earliest first.

        Tasks queued by a running callback are picked up in the same call
        when they are already due.
        """

        executed = 0
        while True:
            now = self.clock()
            self._tasks = [task for task in self._tasks if task.active]
            due = [task for task in self._tasks if task.due_at <= now]
            if not due:
                return executed
            task = min(due, key=lambda item: (item.due_at, item.sequence))
            task.done = True
            self._tasks.remove(task)
            task.callback()
            executed += 1

    def pending(self) -> int:
        """Return the number of queued, not yet run or cancelled tasks."""

        return sum(1 for task in self._tasks if task.active)

    def cancel_all(self) -> None:
        for task in self._tasks:
            task.cancel()
        self._tasks = []
