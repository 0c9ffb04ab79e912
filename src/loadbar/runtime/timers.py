"""Named, cancelable delayed callbacks."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

logger = logging.getLogger(__name__)


class TimerKind(str, Enum):
    """Roles a scheduled callback can play in a loading cycle."""

    DELAY = "delay"
    MIN_HOLD = "min_hold"
    MAX_HOLD = "max_hold"
    READY_SETTLE = "ready_settle"


class TimerHandle(Protocol):
    """Anything a scheduler returns that can be cancelled."""

    def cancel(self) -> object: ...


Scheduler = Callable[[float, Callable[[], None]], TimerHandle]
"""Schedules ``callback`` after ``delay`` seconds and returns a handle."""

Clock = Callable[[], float]
"""Monotonic time source in seconds."""


@dataclass
class TimerEntry:
    """A single scheduled callback owned by a TimerSet."""

    kind: TimerKind
    fire_at: float
    handle: TimerHandle | None = None
    fired: bool = False
    canceled: bool = False
    _callback: Callable[[], None] | None = field(default=None, repr=False)

    @property
    def live(self) -> bool:
        """True until the entry fires or is cancelled."""
        return not (self.fired or self.canceled)

    def cancel(self) -> None:
        """Cancel the entry. Safe to call repeatedly or after firing."""
        if not self.live:
            return
        self.canceled = True
        self._callback = None
        if self.handle is not None:
            self.handle.cancel()


class TimerSet:
    """Owns at most one live timer per kind.

    Starting a timer of a kind cancels the previous one of that kind.
    Callbacks are wrapped so a superseded or cancelled entry never runs,
    even if the scheduler delivers it anyway.
    """

    def __init__(self, scheduler: Scheduler, clock: Clock = time.monotonic) -> None:
        self._scheduler = scheduler
        self._clock = clock
        self._live: dict[TimerKind, TimerEntry] = {}

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def clock(self) -> Clock:
        return self._clock

    def start(
        self,
        kind: TimerKind,
        delay_ms: float,
        callback: Callable[[], None],
    ) -> TimerEntry:
        """Schedule ``callback`` to run once after ``delay_ms`` milliseconds."""
        self.cancel(kind)
        delay_ms = max(0.0, float(delay_ms))
        entry = TimerEntry(
            kind=kind,
            fire_at=self._clock() + delay_ms / 1000.0,
            _callback=callback,
        )
        self._live[kind] = entry
        entry.handle = self._scheduler(delay_ms / 1000.0, lambda: self._fire(entry))
        logger.debug("Scheduled %s timer in %.0fms", kind.value, delay_ms)
        return entry

    def _fire(self, entry: TimerEntry) -> None:
        if not entry.live or self._live.get(entry.kind) is not entry:
            logger.debug("Dropped stale %s timer", entry.kind.value)
            return
        callback = entry._callback
        entry.fired = True
        entry._callback = None
        del self._live[entry.kind]
        if callback is not None:
            callback()

    def cancel(self, kind: TimerKind) -> None:
        """Cancel the live timer of ``kind``, if any."""
        entry = self._live.pop(kind, None)
        if entry is not None:
            entry.cancel()

    def cancel_all(self) -> None:
        """Cancel every live timer."""
        entries = list(self._live.values())
        self._live.clear()
        for entry in entries:
            entry.cancel()

    def get(self, kind: TimerKind) -> TimerEntry | None:
        """Return the live entry of ``kind``, or None."""
        return self._live.get(kind)

    def is_live(self, kind: TimerKind) -> bool:
        return kind in self._live

    @property
    def live_kinds(self) -> set[TimerKind]:
        return set(self._live)

    def __len__(self) -> int:
        return len(self._live)
