"""Headless trace replay command."""

from __future__ import annotations

import argparse
import logging
import sys

from loadbar.cli.context import resolve_loading_config, resolve_ready_settle_ms
from loadbar.models import InvalidLoadingConfigError
from loadbar.orchestration.simulation import (
    TraceParseError,
    VisibilityChange,
    parse_trace,
    run_trace,
)

logger = logging.getLogger(__name__)


def format_timeline(timeline: list[VisibilityChange]) -> str:
    """Render visibility changes one per line."""
    if not timeline:
        return "indicator never shown"
    return "\n".join(
        f"{change.at_ms:>7}ms  {'shown' if change.visible else 'hidden'}"
        for change in timeline
    )


def cmd_simulate(args: argparse.Namespace) -> int:
    """Replay a trace and print when the indicator showed and hid."""
    try:
        config = resolve_loading_config(args)
        steps = parse_trace(args.trace)
    except (InvalidLoadingConfigError, TraceParseError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    logger.info("Replaying %d trace steps with %s", len(steps), config)
    timeline = run_trace(
        steps,
        config,
        ready_settle_ms=resolve_ready_settle_ms(args),
        until_ms=args.until,
    )
    print(format_timeline(timeline))
    return 0
