from __future__ import annotations

import copy
import heapq
from collections.abc import Callable, Iterator

import pytest

from loadbar.config.settings import settings
from loadbar.models import LoadingConfig
from loadbar.orchestration import LoadingStateMachine

# Timers due within this many seconds of the target time fire on advance
_EPSILON = 1e-9


@pytest.fixture(autouse=True)
def isolate_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Prevent tests from persisting settings to disk."""
    original_data = copy.deepcopy(settings._data)

    def _noop_save() -> None:
        return None

    monkeypatch.setattr(settings, "_save", _noop_save)
    settings._data = {}
    try:
        yield
    finally:
        settings._data = original_data


class VirtualHandle:
    def __init__(self) -> None:
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class VirtualScheduler:
    """Deterministic scheduler driven by an explicit virtual clock."""

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: list[tuple[float, int, VirtualHandle, Callable[[], None]]] = []
        self._seq = 0

    def time(self) -> float:
        return self.now

    def __call__(self, delay: float, callback: Callable[[], None]) -> VirtualHandle:
        handle = VirtualHandle()
        self._seq += 1
        heapq.heappush(self._queue, (self.now + delay, self._seq, handle, callback))
        return handle

    def advance(self, ms: float) -> None:
        """Move the clock forward, firing due callbacks in time order."""
        target = self.now + ms / 1000.0
        while self._queue and self._queue[0][0] <= target + _EPSILON:
            fire_at, _, handle, callback = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self.now = max(self.now, fire_at)
            callback()
        self.now = target

    def advance_to(self, ms: float) -> None:
        """Advance until the clock reads ``ms`` milliseconds."""
        self.advance(ms - self.now * 1000.0)

    @property
    def pending(self) -> int:
        return sum(1 for entry in self._queue if not entry[2].cancelled)


@pytest.fixture
def scheduler() -> VirtualScheduler:
    return VirtualScheduler()


@pytest.fixture
def make_machine(
    scheduler: VirtualScheduler,
) -> Callable[..., LoadingStateMachine]:
    """Build a machine on the virtual clock; timings default to 100/300/5000."""

    def _make(
        delay_start_ms: int = 100,
        min_loading_time_ms: int = 300,
        max_loading_time_ms: int = 5000,
    ) -> LoadingStateMachine:
        config = LoadingConfig(
            delay_start_ms=delay_start_ms,
            min_loading_time_ms=min_loading_time_ms,
            max_loading_time_ms=max_loading_time_ms,
        )
        return LoadingStateMachine(config, scheduler, clock=scheduler.time)

    return _make
