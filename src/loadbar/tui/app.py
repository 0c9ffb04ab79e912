"""Demo TUI showing the route loading indicator."""

import logging
from typing import Any

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.timer import Timer
from textual.widgets import ContentSwitcher, Footer, Header, Static

from loadbar.config import settings
from loadbar.models import LoadingConfig
from loadbar.orchestration import (
    LoadingStateMachine,
    SignalHub,
    TriggerAdapter,
    TriggerEvent,
)
from loadbar.runtime import textual_scheduler
from loadbar.tui.messages import PageReady
from loadbar.tui.widgets import LoadingBar

logger = logging.getLogger(__name__)

# Simulated load time per page, in seconds. "archive" never finishes
# within the default cap, "settings" finishes inside the start delay.
PAGES: dict[str, float] = {
    "dashboard": 0.4,
    "articles": 1.2,
    "settings": 0.03,
    "archive": 8.0,
}


class LoadbarApp(App[None]):
    """Pages behind a content switcher with a shared loading bar."""

    TITLE = "loadbar"
    SUB_TITLE = "route loading demo"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
        Binding("1", "navigate('dashboard')", "Dashboard"),
        Binding("2", "navigate('articles')", "Articles"),
        Binding("3", "navigate('settings')", "Settings"),
        Binding("4", "navigate('archive')", "Archive"),
        Binding("s", "start_loading", "Start"),
        Binding("c", "complete_loading", "Complete"),
    ]

    CSS = """
    Screen {
        background: $surface;
    }

    .page {
        padding: 1 2;
    }
    """

    def __init__(
        self,
        config: LoadingConfig | None = None,
        *,
        ready_settle_ms: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.loading_config = config or settings.loading_config()
        self.ready_settle_ms = (
            settings.ready_settle_ms if ready_settle_ms is None else ready_settle_ms
        )
        self._signals = SignalHub()
        self._adapter: TriggerAdapter | None = None
        self._page_timer: Timer | None = None
        self._current_page: str | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield LoadingBar(id="route-loading")
        with ContentSwitcher(initial="dashboard"):
            for page, load_seconds in PAGES.items():
                yield Static(
                    f"{page.title()}\n\nSimulated load time: {load_seconds:.2f}s",
                    id=page,
                    classes="page",
                )
        yield Footer()

    def on_mount(self) -> None:
        self.theme = settings.theme
        machine = LoadingStateMachine(self.loading_config, textual_scheduler(self))
        self._adapter = TriggerAdapter(machine, ready_settle_ms=self.ready_settle_ms)
        self._adapter.bind(self._signals)
        self._adapter.subscribe(self._on_visibility_change)
        logger.info("Loading controller ready: %s", self.loading_config)
        self.action_navigate("dashboard")

    def on_unmount(self) -> None:
        if self._page_timer is not None:
            self._page_timer.stop()
        if self._adapter is not None:
            self._adapter.dispose()

    def watch_theme(self, new_theme: str) -> None:
        """Save theme whenever it changes (from any source)."""
        logger.info("Theme changed to: %s, saving...", new_theme)
        settings.theme = new_theme

    def _on_visibility_change(self, visible: bool) -> None:
        self.query_one("#route-loading", LoadingBar).loading = visible

    def action_navigate(self, page: str) -> None:
        """Switch pages and announce the navigation."""
        if page == self._current_page or page not in PAGES:
            return
        self._current_page = page
        self.query_one(ContentSwitcher).current = page
        self._signals.emit(TriggerEvent.NAVIGATION, page)

        if self._page_timer is not None:
            self._page_timer.stop()
        self._page_timer = self.set_timer(
            PAGES[page], lambda: self.post_message(PageReady(page))
        )

    def on_page_ready(self, message: PageReady) -> None:
        if message.page != self._current_page:
            return
        self._signals.emit(TriggerEvent.READY, message.page)

    def action_start_loading(self) -> None:
        if self._adapter is not None:
            self._adapter.start_loading()

    def action_complete_loading(self) -> None:
        if self._adapter is not None:
            self._adapter.complete_loading()
