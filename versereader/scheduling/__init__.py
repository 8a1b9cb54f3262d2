"""Timed scheduling and the auto-advance countdown."""

from .auto_advance import AutoAdvanceScheduler, CountdownOutcome, CountdownState
from .tasks import ScheduledTask, TaskScheduler

__all__ = [
    "AutoAdvanceScheduler",
    "CountdownOutcome",
    "CountdownState",
    "ScheduledTask",
    "TaskScheduler",
]
