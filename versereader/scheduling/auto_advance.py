"""Auto-advance countdown state machine.

States move `IDLE -> COUNTING -> (CONFIRMED | CANCELLED) -> IDLE`. The two
terminal states are only observable while outcome listeners run; the
resting state afterwards is always `IDLE`. Ticks are chained one-shot tasks
on a `TaskScheduler`, so at most one countdown timer exists at a time.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..events import EventEmitter
from ..models.datatypes import AutoAdvancePrompt
from ..telemetry.logger import SessionLogger
from .tasks import ScheduledTask, TaskScheduler


DEFAULT_COUNTDOWN_SECONDS = 5
TICK_SECONDS = 1.0


class CountdownState(str, Enum):
    IDLE = "idle"
    COUNTING = "counting"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


@dataclass(frozen=True, slots=True)
class CountdownOutcome:
    """How one countdown instance ended.

    Attributes:
        countdown_id: Sequence number of the countdown instance.
        reason: `timeout`, `confirmed`, or `cancelled`.
    """

    countdown_id: int
    reason: str

    @property
    def advances(self) -> bool:
        return self.reason in {"timeout", "confirmed"}


class AutoAdvanceScheduler:
    """Offer a cancelable window before advancing to the next verse."""

    def __init__(
        self,
        tasks: TaskScheduler,
        countdown_seconds: int = DEFAULT_COUNTDOWN_SECONDS,
        logger: SessionLogger | None = None,
    ) -> None:
        if countdown_seconds <= 0:
            raise ValueError("`countdown_seconds` must be a positive integer.")
        self._tasks = tasks
        self._countdown_seconds = countdown_seconds
        self._logger = logger or SessionLogger(configure=False)
        self._state = CountdownState.IDLE
        self._seconds_remaining = 0
        self._tick_task: ScheduledTask | None = None
        self._countdown_id = 0
        self.outcomes: EventEmitter[CountdownOutcome] = EventEmitter()
        self.changes: EventEmitter[AutoAdvancePrompt] = EventEmitter()

    @property
    def state(self) -> CountdownState:
        return self._state

    @property
    def prompt(self) -> AutoAdvancePrompt:
        if self._state is not CountdownState.COUNTING:
            return AutoAdvancePrompt()
        return AutoAdvancePrompt(active=True, seconds_remaining=self._seconds_remaining)

    def start(self) -> None:
        """Begin a fresh countdown, cancelling one that is already running."""

        if self._state is CountdownState.COUNTING:
            self.cancel()

        self._countdown_id += 1
        self._state = CountdownState.COUNTING
        self._seconds_remaining = self._countdown_seconds
        self._tick_task = self._tasks.call_later(TICK_SECONDS, self._tick)
        self._logger.info(
            "countdown", "start", countdown=self._countdown_id, seconds=self._seconds_remaining
        )
        self.changes.emit(self.prompt)

    def confirm(self) -> bool:
        """Confirm immediately; returns `False` when no countdown is running."""

        return self._finish(CountdownState.CONFIRMED, "confirmed")

    def cancel(self) -> bool:
        """Cancel immediately; returns `False` when no countdown is running."""

        return self._finish(CountdownState.CANCELLED, "cancelled")

    def _tick(self) -> None:
        if self._state is not CountdownState.COUNTING or self._tick_task is None:
            return
        due_at = self._tick_task.due_at
        self._seconds_remaining -= 1
        self._logger.debug(
            "countdown", "tick", countdown=self._countdown_id, remaining=self._seconds_remaining
        )
        if self._seconds_remaining <= 0:
            self._seconds_remaining = 0
            self._tick_task = None
            self._finish(CountdownState.CONFIRMED, "timeout")
            return
        self._tick_task = self._tasks.call_at(due_at + TICK_SECONDS, self._tick)
        self.changes.emit(self.prompt)

    def _finish(self, terminal: CountdownState, reason: str) -> bool:
        if self._state is not CountdownState.COUNTING:
            return False
        if self._tick_task is not None:
            self._tick_task.cancel()
            self._tick_task = None

        countdown_id = self._countdown_id
        self._state = terminal
        self._logger.info("countdown", reason, countdown=countdown_id)
        self.outcomes.emit(CountdownOutcome(countdown_id=countdown_id, reason=reason))
        if self._state is terminal:
            self._state = CountdownState.IDLE
            self._seconds_remaining = 0
        self.changes.emit(self.prompt)
        return True
