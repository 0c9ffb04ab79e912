"""Replay scripted trigger traces against a real event loop.

A trace is a whitespace- or comma-separated list of ``action[:arg]@ms``
steps, for example ``navigate:/posts@0 ready@40 start@500 complete@520``.
Supported actions are ``start``, ``complete``, ``navigate``, ``ready``
and ``dispose``.
"""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass

from loadbar.models import LoadingConfig
from loadbar.orchestration.state_machine import LoadingStateMachine
from loadbar.orchestration.triggers import SignalHub, TriggerAdapter, TriggerEvent
from loadbar.runtime.schedulers import asyncio_scheduler

logger = logging.getLogger(__name__)

TRACE_ACTIONS = frozenset({"start", "complete", "navigate", "ready", "dispose"})

_STEP_PATTERN = re.compile(r"^(?P<action>[a-z]+)(?::(?P<arg>[^@]+))?@(?P<at>\d+)$")

# Slack after the last possible timer before the replay stops
_HORIZON_MARGIN_MS = 50


class TraceParseError(ValueError):
    """Raised when a trace step cannot be parsed."""


@dataclass(frozen=True, slots=True)
class TraceStep:
    """One scripted signal at an offset from the start of the replay."""

    at_ms: int
    action: str
    arg: str | None = None


@dataclass(frozen=True, slots=True)
class VisibilityChange:
    """Indicator visibility observed at an offset from the replay start."""

    at_ms: int
    visible: bool


def parse_trace(text: str) -> list[TraceStep]:
    """Parse a trace string into steps ordered by time.

    Raises:
        TraceParseError: On malformed steps or unknown actions.
    """
    steps: list[TraceStep] = []
    for token in re.split(r"[\s,]+", text.strip()):
        if not token:
            continue
        match = _STEP_PATTERN.match(token)
        if match is None:
            raise TraceParseError(f"Malformed trace step: {token!r}")
        action = match.group("action")
        if action not in TRACE_ACTIONS:
            raise TraceParseError(f"Unknown trace action: {action!r}")
        steps.append(
            TraceStep(
                at_ms=int(match.group("at")),
                action=action,
                arg=match.group("arg"),
            )
        )
    return sorted(steps, key=lambda step: step.at_ms)


def default_horizon_ms(
    steps: list[TraceStep], config: LoadingConfig, ready_settle_ms: int
) -> int:
    """Time by which every timer the trace can schedule has fired."""
    last = max((step.at_ms for step in steps), default=0)
    return (
        last
        + ready_settle_ms
        + config.delay_start_ms
        + config.max_loading_time_ms
        + _HORIZON_MARGIN_MS
    )


def _apply(adapter: TriggerAdapter, hub: SignalHub, step: TraceStep) -> None:
    logger.debug("Trace step %s", step)
    if step.action == "start":
        adapter.start_loading()
    elif step.action == "complete":
        adapter.complete_loading()
    elif step.action == "navigate":
        hub.emit(TriggerEvent.NAVIGATION, step.arg)
    elif step.action == "ready":
        hub.emit(TriggerEvent.READY, step.arg)
    elif step.action == "dispose":
        adapter.dispose()


async def replay_trace(
    steps: list[TraceStep],
    config: LoadingConfig,
    *,
    ready_settle_ms: int = 0,
    until_ms: int | None = None,
) -> list[VisibilityChange]:
    """Replay ``steps`` on the running loop and record visibility changes."""
    loop = asyncio.get_running_loop()
    origin = loop.time()
    horizon = (
        until_ms
        if until_ms is not None
        else default_horizon_ms(steps, config, ready_settle_ms)
    )
    timeline: list[VisibilityChange] = []

    def record(visible: bool) -> None:
        elapsed_ms = round((loop.time() - origin) * 1000)
        timeline.append(VisibilityChange(at_ms=elapsed_ms, visible=visible))

    machine = LoadingStateMachine(config, asyncio_scheduler(loop), clock=loop.time)
    hub = SignalHub()
    with TriggerAdapter(machine, ready_settle_ms=ready_settle_ms) as adapter:
        adapter.bind(hub)
        adapter.subscribe(record)
        handles = [
            loop.call_later(step.at_ms / 1000.0, _apply, adapter, hub, step)
            for step in steps
        ]
        try:
            await asyncio.sleep(horizon / 1000.0)
        finally:
            for handle in handles:
                handle.cancel()
    return timeline


def run_trace(
    steps: list[TraceStep],
    config: LoadingConfig,
    *,
    ready_settle_ms: int = 0,
    until_ms: int | None = None,
) -> list[VisibilityChange]:
    """Synchronous wrapper around :func:`replay_trace`."""
    return asyncio.run(
        replay_trace(
            steps, config, ready_settle_ms=ready_settle_ms, until_ms=until_ms
        )
    )
