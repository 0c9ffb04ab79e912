"""Bind external work signals to a LoadingStateMachine."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from types import TracebackType
from typing import Protocol

from loadbar.orchestration.state_machine import (
    LoadingStateMachine,
    VisibilityListener,
)
from loadbar.runtime.timers import TimerKind, TimerSet

logger = logging.getLogger(__name__)

SignalHandler = Callable[[str | None], None]


class TriggerEvent(str, Enum):
    """Signals a trigger source can deliver."""

    NAVIGATION = "navigation"  # A new logical transition began
    READY = "ready"  # Work for the current transition finished


class TriggerSource(Protocol):
    """Anything that announces navigation and page-ready signals."""

    def subscribe(
        self, event: TriggerEvent, handler: SignalHandler
    ) -> Callable[[], None]: ...

    def is_ready(self) -> bool: ...


class SignalHub:
    """In-process trigger source.

    NAVIGATION clears the ready flag and READY sets it, so ``is_ready``
    reports whether the current transition has already finished.
    """

    def __init__(self) -> None:
        self._handlers: dict[TriggerEvent, list[SignalHandler]] = {
            event: [] for event in TriggerEvent
        }
        self._ready = False

    def subscribe(
        self, event: TriggerEvent, handler: SignalHandler
    ) -> Callable[[], None]:
        self._handlers[event].append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers[event]:
                self._handlers[event].remove(handler)

        return unsubscribe

    def emit(self, event: TriggerEvent, payload: str | None = None) -> None:
        """Deliver ``event`` to every subscriber."""
        if event is TriggerEvent.NAVIGATION:
            self._ready = False
        elif event is TriggerEvent.READY:
            self._ready = True
        for handler in list(self._handlers[event]):
            handler(payload)

    def is_ready(self) -> bool:
        return self._ready

    def listener_count(self, event: TriggerEvent | None = None) -> int:
        """Number of attached handlers, for one event or all of them."""
        if event is not None:
            return len(self._handlers[event])
        return sum(len(handlers) for handlers in self._handlers.values())


class TriggerAdapter:
    """Routes automatic and manual triggers into one state machine.

    Automatic and manual triggers are not independent: a manual start can
    be completed by a READY signal and vice versa.

    Usable as a context manager; leaving the block disposes the adapter.
    """

    def __init__(
        self,
        machine: LoadingStateMachine,
        *,
        ready_settle_ms: int = 50,
    ) -> None:
        self._machine = machine
        self._ready_settle_ms = max(0, ready_settle_ms)
        self._timers = TimerSet(machine.scheduler, machine.clock)
        self._source: TriggerSource | None = None
        self._unsubscribers: list[Callable[[], None]] = []
        self._current_path: str | None = None
        self._disposed = False

    @property
    def machine(self) -> LoadingStateMachine:
        return self._machine

    @property
    def visible(self) -> bool:
        return self._machine.visible

    @property
    def current_path(self) -> str | None:
        return self._current_path

    @property
    def bound(self) -> bool:
        return self._source is not None

    @property
    def disposed(self) -> bool:
        return self._disposed

    def subscribe(self, listener: VisibilityListener) -> Callable[[], None]:
        """Attach a visibility listener to the underlying machine."""
        return self._machine.subscribe(listener)

    # --- Binding ---

    def bind(self, source: TriggerSource) -> None:
        """Attach to ``source``, detaching from any previous source first.

        Bindings stay in place across phase transitions; only another
        ``bind``, ``unbind`` or ``dispose`` replaces them.
        """
        if self._disposed:
            logger.debug("bind() ignored: adapter disposed")
            return
        if self._source is source:
            return
        self.unbind()
        self._source = source
        self._unsubscribers = [
            source.subscribe(TriggerEvent.NAVIGATION, self._on_navigation),
            source.subscribe(TriggerEvent.READY, self._on_ready),
        ]
        logger.debug("Bound trigger source %r", source)

    def unbind(self) -> None:
        """Detach every listener from the current source."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        self._source = None
        self._timers.cancel(TimerKind.READY_SETTLE)

    # --- Manual API ---

    def start_loading(self) -> None:
        """Start a cycle without a navigation signal."""
        if self._disposed:
            return
        self._timers.cancel(TimerKind.READY_SETTLE)
        self._machine.start()

    def complete_loading(self) -> None:
        """Complete the current cycle, whoever started it."""
        if self._disposed:
            return
        self._machine.complete()

    # --- Signal handlers ---

    def _on_navigation(self, path: str | None) -> None:
        if path is not None and path == self._current_path:
            logger.debug("Ignoring navigation to current path %s", path)
            return
        self._current_path = path
        self.start_loading()
        if self._source is not None and self._source.is_ready():
            self._schedule_complete()

    def _on_ready(self, _payload: str | None) -> None:
        self._schedule_complete()

    def _schedule_complete(self) -> None:
        if self._ready_settle_ms == 0:
            self._machine.complete()
            return
        if self._timers.is_live(TimerKind.READY_SETTLE):
            return
        self._timers.start(
            TimerKind.READY_SETTLE, self._ready_settle_ms, self._machine.complete
        )

    # --- Teardown ---

    def dispose(self) -> None:
        """Detach all listeners and cancel all timers, in any phase."""
        if self._disposed:
            return
        self.unbind()
        self._timers.cancel_all()
        self._machine.dispose()
        self._disposed = True
        logger.info("Loading trigger adapter disposed")

    def __enter__(self) -> TriggerAdapter:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.dispose()
