"""Runtime primitives for scheduling indicator timers."""

from loadbar.runtime.schedulers import asyncio_scheduler, textual_scheduler
from loadbar.runtime.timers import (
    Clock,
    Scheduler,
    TimerEntry,
    TimerHandle,
    TimerKind,
    TimerSet,
)

__all__ = [
    "Clock",
    "Scheduler",
    "TimerEntry",
    "TimerHandle",
    "TimerKind",
    "TimerSet",
    "asyncio_scheduler",
    "textual_scheduler",
]
