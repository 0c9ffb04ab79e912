"""Loading indicator controller.

Decides when a busy indicator becomes visible and when it is hidden for a
stream of start/complete signals. Three timings compete:

- a start delay, so work that finishes almost instantly never flashes
  the indicator;
- a minimum visible time, so a shown indicator does not flicker away;
- a maximum visible time, so a lost completion cannot leave it up forever.

All waits are timers in a TimerSet. Every transition that supersedes a
cycle cancels that cycle's timers, so no callback from an ended cycle can
touch the current session.
"""

from __future__ import annotations

import logging
import time
from collections import deque
from collections.abc import Callable

from loadbar.models import LoadingConfig, LoadingPhase, Session
from loadbar.runtime.timers import Clock, Scheduler, TimerKind, TimerSet

logger = logging.getLogger(__name__)

VisibilityListener = Callable[[bool], None]


class LoadingStateMachine:
    """Single-threaded controller for one loading indicator.

    Every public method is total: it is accepted in every phase and never
    raises. Timer callbacks re-enter the machine from the event loop.

    Listeners may call back into the machine. Changes made while listeners
    are being notified are queued and delivered in order once the current
    round finishes, so every listener sees the same sequence of values and
    ends on ``visible``. A listener that raises is logged and skipped.

    A restart while the indicator is shown keeps it shown: the new cycle
    inherits the time the indicator appeared, so the minimum hold still
    counts from that moment.
    """

    def __init__(
        self,
        config: LoadingConfig,
        scheduler: Scheduler,
        clock: Clock = time.monotonic,
    ) -> None:
        self._config = config
        self._clock = clock
        self._timers = TimerSet(scheduler, clock)
        self._session: Session | None = None
        self._visible = False
        self._visible_since: float | None = None
        self._listeners: list[VisibilityListener] = []
        self._pending: deque[bool] = deque()
        self._notifying = False
        self._disposed = False

    # --- Introspection ---

    @property
    def config(self) -> LoadingConfig:
        return self._config

    @property
    def scheduler(self) -> Scheduler:
        return self._timers.scheduler

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def phase(self) -> LoadingPhase:
        """Current phase, IDLE when no session is live."""
        if self._session is None:
            return LoadingPhase.IDLE
        return self._session.phase

    @property
    def visible(self) -> bool:
        """Whether the indicator should currently be shown."""
        return self._visible

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def timers(self) -> TimerSet:
        return self._timers

    def subscribe(self, listener: VisibilityListener) -> Callable[[], None]:
        """Call ``listener(visible)`` on every visibility change.

        Returns:
            A callable that detaches the listener. Detaching twice is a no-op.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- Entry points ---

    def start(self) -> None:
        """Begin a new cycle, superseding any cycle in flight.

        A shown indicator stays shown through the new delay.
        """
        if self._disposed:
            logger.debug("start() ignored: controller disposed")
            return
        previous = self.phase
        self._timers.cancel_all()
        self._session = Session.begin()
        logger.debug("start: %s -> delaying", previous.value)

        if self._config.delay_start_ms == 0:
            self._on_delay_elapsed()
            return
        self._timers.start(
            TimerKind.DELAY, self._config.delay_start_ms, self._on_delay_elapsed
        )

    def complete(self) -> None:
        """Signal that the current unit of work has finished.

        Safe to call redundantly: idle and settling machines ignore it.
        """
        if self._disposed or self._session is None:
            return

        if self._session.phase is LoadingPhase.DELAYING:
            if not self._visible:
                logger.debug("complete: finished before the indicator appeared")
                self._finish()
                return
            # Restarted while shown: the indicator is already up, so the
            # minimum hold applies from when it appeared.
            self._activate()

        if self._session.phase is LoadingPhase.ACTIVE:
            elapsed = self._session.visible_elapsed_ms(self._clock())
            remaining = self._config.min_loading_time_ms - elapsed
            if remaining <= 0:
                logger.debug("complete: visible %.0fms, hiding now", elapsed)
                self._finish()
                return
            self._session = self._session.settle()
            logger.debug("complete: holding for another %.0fms", remaining)
            self._timers.start(TimerKind.MIN_HOLD, remaining, self._on_min_hold)

        # SETTLING: a completion is already pending

    def dispose(self) -> None:
        """Cancel every timer and go idle without announcing visibility.

        Used when nothing observes the indicator any more. A disposed
        machine ignores all later calls.
        """
        if self._disposed:
            return
        self._disposed = True
        self._timers.cancel_all()
        self._session = None
        self._visible_since = None
        self._listeners.clear()
        self._pending.clear()
        logger.debug("Controller disposed")

    # --- Timer handlers ---

    def _on_delay_elapsed(self) -> None:
        if self._session is None or self._session.phase is not LoadingPhase.DELAYING:
            return
        logger.debug("delay elapsed: delaying -> active")
        self._activate()
        self._set_visible(True)

    def _on_min_hold(self) -> None:
        if self._session is None or self._session.phase is not LoadingPhase.SETTLING:
            return
        logger.debug("minimum hold elapsed: settling -> idle")
        self._finish()

    def _on_max_hold(self) -> None:
        if self._session is None or not self._session.is_visible:
            return
        logger.info(
            "Loading indicator hit the %dms cap without completing; hiding",
            self._config.max_loading_time_ms,
        )
        self._finish()

    # --- Helpers ---

    def _activate(self) -> None:
        """Move the delaying session to ACTIVE and arm the cap."""
        if self._session is None:
            return
        now = self._clock()
        if not self._visible or self._visible_since is None:
            self._visible_since = now
        self._timers.cancel(TimerKind.DELAY)
        self._session = self._session.activate(self._visible_since)
        self._timers.start(
            TimerKind.MAX_HOLD, self._config.max_loading_time_ms, self._on_max_hold
        )

    def _finish(self) -> None:
        self._timers.cancel_all()
        self._session = None
        self._visible_since = None
        self._set_visible(False)

    def _set_visible(self, visible: bool) -> None:
        if visible == self._visible:
            return
        self._visible = visible
        self._pending.append(visible)
        if self._notifying:
            return
        self._notifying = True
        try:
            while self._pending:
                value = self._pending.popleft()
                for listener in list(self._listeners):
                    try:
                        listener(value)
                    except Exception:
                        logger.exception("Visibility listener %r failed", listener)
        finally:
            self._notifying = False
