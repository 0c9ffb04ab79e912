"""Tests for the route loading demo app wiring."""

import asyncio

from textual.widgets import ContentSwitcher

from loadbar.config import settings
from loadbar.models import LoadingConfig
from loadbar.orchestration import TriggerEvent
from loadbar.tui.app import LoadbarApp
from loadbar.tui.messages import PageReady
from loadbar.tui.widgets import LoadingBar


def make_app() -> LoadbarApp:
    config = LoadingConfig(
        delay_start_ms=0, min_loading_time_ms=0, max_loading_time_ms=5000
    )
    return LoadbarApp(config, ready_settle_ms=0)


def test_mount_navigates_to_dashboard_and_shows_bar() -> None:
    observed: dict[str, object] = {}

    async def scenario() -> None:
        app = make_app()
        async with app.run_test() as pilot:
            await pilot.pause()
            observed["path"] = app._adapter.current_path
            observed["bar_loading"] = app.query_one(LoadingBar).loading
            observed["hub_listeners"] = app._signals.listener_count()

    asyncio.run(scenario())

    assert observed["path"] == "dashboard"
    assert observed["bar_loading"] is True
    assert observed["hub_listeners"] == 2


def test_navigation_binding_switches_page_and_emits_navigation() -> None:
    observed: dict[str, object] = {}

    async def scenario() -> None:
        app = make_app()
        async with app.run_test() as pilot:
            navigations: list[str | None] = []
            app._signals.subscribe(TriggerEvent.NAVIGATION, navigations.append)

            await pilot.press("2")
            await pilot.pause()
            observed["navigations"] = list(navigations)
            observed["current"] = app.query_one(ContentSwitcher).current
            observed["path"] = app._adapter.current_path

            # Same page again is not a new transition
            await pilot.press("2")
            await pilot.pause()
            observed["navigations_after_repeat"] = list(navigations)

    asyncio.run(scenario())

    assert observed["navigations"] == ["articles"]
    assert observed["current"] == "articles"
    assert observed["path"] == "articles"
    assert observed["navigations_after_repeat"] == ["articles"]


def test_stale_page_ready_is_dropped() -> None:
    observed: dict[str, object] = {}

    async def scenario() -> None:
        app = make_app()
        async with app.run_test() as pilot:
            app.action_navigate("archive")
            app._page_timer.stop()
            await pilot.pause()

            app.on_page_ready(PageReady("dashboard"))
            observed["ready_after_stale"] = app._signals.is_ready()
            observed["loading_after_stale"] = app.query_one(LoadingBar).loading

            app.on_page_ready(PageReady("archive"))
            await pilot.pause()
            observed["ready_after_current"] = app._signals.is_ready()
            observed["loading_after_current"] = app.query_one(LoadingBar).loading

    asyncio.run(scenario())

    assert observed["ready_after_stale"] is False
    assert observed["loading_after_stale"] is True
    assert observed["ready_after_current"] is True
    assert observed["loading_after_current"] is False


def test_manual_bindings_drive_the_indicator() -> None:
    observed: dict[str, object] = {}

    async def scenario() -> None:
        app = make_app()
        async with app.run_test() as pilot:
            await pilot.press("c")
            await pilot.pause()
            observed["after_complete"] = app._adapter.visible
            await pilot.press("s")
            await pilot.pause()
            observed["after_start"] = app._adapter.visible

    asyncio.run(scenario())

    assert observed["after_complete"] is False
    assert observed["after_start"] is True


def test_unmount_disposes_adapter() -> None:
    holder: dict[str, object] = {}

    async def scenario() -> None:
        app = make_app()
        async with app.run_test() as pilot:
            await pilot.pause()
            holder["adapter"] = app._adapter
            holder["signals"] = app._signals

    asyncio.run(scenario())

    adapter = holder["adapter"]
    assert adapter.disposed is True
    assert adapter.machine.disposed is True
    assert holder["signals"].listener_count() == 0


def test_theme_change_is_saved_to_settings() -> None:
    async def scenario() -> None:
        app = make_app()
        async with app.run_test() as pilot:
            app.theme = "textual-light"
            await pilot.pause()

    asyncio.run(scenario())

    assert settings.theme == "textual-light"
