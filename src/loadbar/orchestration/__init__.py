"""Loading indicator orchestration: the controller and its triggers."""

from loadbar.orchestration.simulation import (
    TraceParseError,
    TraceStep,
    VisibilityChange,
    parse_trace,
    replay_trace,
    run_trace,
)
from loadbar.orchestration.state_machine import (
    LoadingStateMachine,
    VisibilityListener,
)
from loadbar.orchestration.triggers import (
    SignalHub,
    TriggerAdapter,
    TriggerEvent,
    TriggerSource,
)

__all__ = [
    "LoadingStateMachine",
    "SignalHub",
    "TraceParseError",
    "TraceStep",
    "TriggerAdapter",
    "TriggerEvent",
    "TriggerSource",
    "VisibilityChange",
    "VisibilityListener",
    "parse_trace",
    "replay_trace",
    "run_trace",
]
