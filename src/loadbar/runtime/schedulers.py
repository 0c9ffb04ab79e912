"""Adapters that turn event-loop timer APIs into loadbar schedulers."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Protocol

from textual.timer import Timer

from loadbar.runtime.timers import Scheduler


class _SupportsSetTimer(Protocol):
    def set_timer(
        self, delay: float, callback: Callable[[], None]
    ) -> Timer: ...


class TextualTimerHandle:
    """Cancelable wrapper around a Textual timer."""

    def __init__(self, timer: Timer) -> None:
        self._timer = timer
        self._stopped = False

    def cancel(self) -> None:
        if self._stopped:
            return
        self._stopped = True
        self._timer.stop()


def textual_scheduler(node: _SupportsSetTimer) -> Scheduler:
    """Schedule callbacks with a Textual app or widget's ``set_timer``."""

    def schedule(delay: float, callback: Callable[[], None]) -> TextualTimerHandle:
        return TextualTimerHandle(node.set_timer(delay, callback))

    return schedule


def asyncio_scheduler(
    loop: asyncio.AbstractEventLoop | None = None,
) -> Scheduler:
    """Schedule callbacks on an asyncio loop via ``call_later``.

    When no loop is given, the running loop is looked up on each call, so
    the scheduler must then be used from inside a coroutine or callback.
    """

    def schedule(delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        target = loop or asyncio.get_running_loop()
        return target.call_later(delay, callback)

    return schedule
