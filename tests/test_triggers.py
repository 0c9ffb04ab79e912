"""Tests for binding trigger sources to the loading controller."""

from loadbar.models import LoadingPhase
from loadbar.orchestration import SignalHub, TriggerAdapter, TriggerEvent
from loadbar.runtime import TimerKind


def make_adapter(make_machine, *, ready_settle_ms: int = 50, **timings):
    machine = make_machine(**timings)
    adapter = TriggerAdapter(machine, ready_settle_ms=ready_settle_ms)
    hub = SignalHub()
    adapter.bind(hub)
    changes: list[bool] = []
    adapter.subscribe(changes.append)
    return adapter, hub, changes


class TestSignalHub:
    """Tests for the in-process trigger source."""

    def test_ready_flag_follows_signals(self) -> None:
        hub = SignalHub()
        assert hub.is_ready() is False

        hub.emit(TriggerEvent.READY)
        assert hub.is_ready() is True

        hub.emit(TriggerEvent.NAVIGATION, "/posts")
        assert hub.is_ready() is False

    def test_unsubscribe_detaches_handler(self) -> None:
        hub = SignalHub()
        received: list[str | None] = []
        unsubscribe = hub.subscribe(TriggerEvent.NAVIGATION, received.append)

        hub.emit(TriggerEvent.NAVIGATION, "/a")
        unsubscribe()
        hub.emit(TriggerEvent.NAVIGATION, "/b")

        assert received == ["/a"]
        assert hub.listener_count() == 0


class TestAutomaticTriggers:
    """Tests for navigation and ready signals."""

    def test_navigation_starts_a_cycle(self, make_machine, scheduler) -> None:
        adapter, hub, changes = make_adapter(make_machine)

        hub.emit(TriggerEvent.NAVIGATION, "/posts")

        assert adapter.machine.phase == LoadingPhase.DELAYING
        assert adapter.current_path == "/posts"
        scheduler.advance(100)
        assert changes == [True]

    def test_quick_ready_never_shows_indicator(self, make_machine, scheduler) -> None:
        adapter, hub, changes = make_adapter(make_machine, ready_settle_ms=20)

        hub.emit(TriggerEvent.NAVIGATION, "/posts")
        scheduler.advance(30)
        hub.emit(TriggerEvent.READY)
        scheduler.advance(10_000)

        assert changes == []
        assert adapter.machine.phase == LoadingPhase.IDLE

    def test_ready_completes_after_settle_delay(self, make_machine, scheduler) -> None:
        adapter, hub, changes = make_adapter(
            make_machine, ready_settle_ms=50, min_loading_time_ms=0
        )

        hub.emit(TriggerEvent.NAVIGATION, "/posts")
        scheduler.advance_to(200)
        hub.emit(TriggerEvent.READY)
        scheduler.advance_to(249)
        assert adapter.visible is True

        scheduler.advance_to(250)
        assert adapter.visible is False
        assert changes == [True, False]

    def test_duplicate_ready_signals_are_harmless(
        self, make_machine, scheduler
    ) -> None:
        adapter, hub, changes = make_adapter(make_machine, ready_settle_ms=0)

        hub.emit(TriggerEvent.NAVIGATION, "/posts")
        scheduler.advance_to(150)
        hub.emit(TriggerEvent.READY)
        hub.emit(TriggerEvent.READY)
        hub.emit(TriggerEvent.READY)

        assert adapter.machine.phase == LoadingPhase.SETTLING
        scheduler.advance_to(1000)
        assert changes == [True, False]

    def test_navigation_to_current_path_is_ignored(
        self, make_machine, scheduler
    ) -> None:
        adapter, hub, _ = make_adapter(make_machine)

        hub.emit(TriggerEvent.NAVIGATION, "/posts")
        scheduler.advance_to(80)
        hub.emit(TriggerEvent.NAVIGATION, "/posts")
        scheduler.advance_to(100)

        assert adapter.machine.phase == LoadingPhase.ACTIVE

    def test_navigation_to_new_path_restarts(self, make_machine, scheduler) -> None:
        adapter, hub, _ = make_adapter(make_machine)

        hub.emit(TriggerEvent.NAVIGATION, "/posts")
        scheduler.advance_to(80)
        hub.emit(TriggerEvent.NAVIGATION, "/tags")
        scheduler.advance_to(100)

        assert adapter.machine.phase == LoadingPhase.DELAYING
        assert adapter.current_path == "/tags"

    def test_already_ready_source_completes_after_navigation(
        self, make_machine, scheduler
    ) -> None:
        machine = make_machine()
        adapter = TriggerAdapter(machine, ready_settle_ms=50)

        class ReadySource(SignalHub):
            def is_ready(self) -> bool:
                return True

        source = ReadySource()
        adapter.bind(source)
        source.emit(TriggerEvent.NAVIGATION, "/posts")

        assert adapter._timers.is_live(TimerKind.READY_SETTLE)
        scheduler.advance(1000)
        assert machine.phase == LoadingPhase.IDLE
        assert machine.visible is False


class TestManualTriggers:
    """Tests for the manual start/complete pair."""

    def test_manual_start_completed_by_ready_signal(
        self, make_machine, scheduler
    ) -> None:
        adapter, hub, changes = make_adapter(make_machine, ready_settle_ms=0)

        adapter.start_loading()
        scheduler.advance_to(500)
        hub.emit(TriggerEvent.READY)

        assert adapter.visible is False
        assert changes == [True, False]

    def test_navigation_completed_manually(self, make_machine, scheduler) -> None:
        adapter, hub, changes = make_adapter(make_machine)

        hub.emit(TriggerEvent.NAVIGATION, "/posts")
        scheduler.advance_to(500)
        adapter.complete_loading()

        assert changes == [True, False]

    def test_manual_start_cancels_pending_settle(
        self, make_machine, scheduler
    ) -> None:
        adapter, hub, _ = make_adapter(
            make_machine, ready_settle_ms=50, delay_start_ms=0
        )

        hub.emit(TriggerEvent.NAVIGATION, "/posts")
        hub.emit(TriggerEvent.READY)
        adapter.start_loading()
        scheduler.advance_to(1000)

        assert adapter.machine.phase == LoadingPhase.ACTIVE


class TestBindingLifecycle:
    """Tests for binding stability and teardown."""

    def test_bindings_survive_phase_changes(self, make_machine, scheduler) -> None:
        adapter, hub, _ = make_adapter(make_machine)

        hub.emit(TriggerEvent.NAVIGATION, "/posts")
        scheduler.advance_to(200)
        hub.emit(TriggerEvent.READY)
        scheduler.advance_to(1000)

        assert hub.listener_count(TriggerEvent.NAVIGATION) == 1
        assert hub.listener_count(TriggerEvent.READY) == 1

    def test_rebinding_detaches_previous_source(self, make_machine) -> None:
        adapter, first, _ = make_adapter(make_machine)
        second = SignalHub()

        adapter.bind(second)
        first.emit(TriggerEvent.NAVIGATION, "/posts")

        assert first.listener_count() == 0
        assert second.listener_count() == 2
        assert adapter.machine.phase == LoadingPhase.IDLE

    def test_dispose_detaches_and_cancels_everything(
        self, make_machine, scheduler
    ) -> None:
        adapter, hub, changes = make_adapter(make_machine)

        hub.emit(TriggerEvent.NAVIGATION, "/posts")
        scheduler.advance_to(150)
        hub.emit(TriggerEvent.READY)
        adapter.dispose()
        scheduler.advance_to(10_000)

        assert hub.listener_count() == 0
        assert scheduler.pending == 0
        assert changes == [True]
        assert adapter.disposed is True

    def test_context_manager_disposes_on_exit(self, make_machine, scheduler) -> None:
        machine = make_machine()
        hub = SignalHub()

        with TriggerAdapter(machine) as adapter:
            adapter.bind(hub)
            hub.emit(TriggerEvent.NAVIGATION, "/posts")

        assert hub.listener_count() == 0
        assert machine.disposed is True
        assert scheduler.pending == 0

    def test_disposed_adapter_ignores_manual_calls(self, make_machine) -> None:
        adapter, _, changes = make_adapter(make_machine, delay_start_ms=0)
        adapter.dispose()

        adapter.start_loading()
        adapter.complete_loading()

        assert changes == []
