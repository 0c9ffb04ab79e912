"""Route loading progress bar widget."""

from __future__ import annotations

import random

from textual.reactive import reactive
from textual.timer import Timer
from textual.widgets import Static

PROGRESS_CEILING = 90.0
BAR_GLYPH = "━"


def next_progress(current: float, rng: random.Random) -> float:
    """Advance simulated progress by a random step, never past the ceiling."""
    if current >= PROGRESS_CEILING:
        return current
    return min(current + rng.uniform(5.0, 20.0), PROGRESS_CEILING)


def next_tick_delay(rng: random.Random) -> float:
    """Seconds until the next simulated progress step."""
    return rng.uniform(0.05, 0.15)


def render_bar(progress: float, width: int) -> str:
    """Render ``progress`` (0-100) as a bar ``width`` cells wide."""
    width = max(0, width)
    clamped = min(max(progress, 0.0), 100.0)
    filled = round(width * clamped / 100.0)
    return BAR_GLYPH * filled + " " * (width - filled)


class LoadingBar(Static):
    """
    Thin bar docked to the top of the screen.

    - Loading: progress creeps towards 90% in random steps
    - Completed: jumps to 100%, lingers, fades, then hides
    """

    DEFAULT_CSS = """
    LoadingBar {
        dock: top;
        width: 100%;
        height: 1;
        background: transparent;
        color: $accent;
        display: none;
    }

    LoadingBar.-shown {
        display: block;
    }

    LoadingBar.-complete {
        color: $success;
    }

    LoadingBar.-fading {
        text-opacity: 40%;
    }
    """

    loading: reactive[bool] = reactive(False)
    progress: reactive[float] = reactive(0.0)

    def __init__(
        self,
        *,
        hide_delay_ms: int = 200,
        duration_ms: int = 300,
        rng: random.Random | None = None,
        **kwargs: object,
    ) -> None:
        super().__init__("", **kwargs)
        self.hide_delay_ms = hide_delay_ms
        self.duration_ms = duration_ms
        self._rng = rng or random.Random()
        self._timer: Timer | None = None
        self._progress_timer: Timer | None = None
        self.shown = False

    def watch_loading(self, loading: bool) -> None:
        """Drive the bar through its show/complete/hide sequence."""
        self._stop_timers()
        if loading:
            self.shown = True
            self.remove_class("-complete", "-fading")
            self.add_class("-shown")
            self.progress = 0.0
            self._progress_timer = self.set_timer(0.05, self._advance)
        elif self.shown:
            self.progress = 100.0
            self.add_class("-complete")
            self._timer = self.set_timer(self.hide_delay_ms / 1000, self._fade)

    def watch_progress(self, progress: float) -> None:
        self.update(render_bar(progress, max(1, self.size.width)))

    def _advance(self) -> None:
        self.progress = next_progress(self.progress, self._rng)
        if self.progress < PROGRESS_CEILING:
            self._progress_timer = self.set_timer(
                next_tick_delay(self._rng), self._advance
            )
        else:
            self._progress_timer = None

    def _fade(self) -> None:
        self.add_class("-fading")
        self._timer = self.set_timer(self.duration_ms / 1000, self._hide)

    def _hide(self) -> None:
        self._timer = None
        self.shown = False
        self.remove_class("-shown", "-complete", "-fading")
        self.progress = 0.0

    def _stop_timers(self) -> None:
        for timer in (self._timer, self._progress_timer):
            if timer is not None:
                timer.stop()
        self._timer = None
        self._progress_timer = None

    def on_unmount(self) -> None:
        self._stop_timers()
