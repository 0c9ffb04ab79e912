"""Argument parser construction for the loadbar CLI."""

from __future__ import annotations

import argparse
from collections.abc import Sequence


def _add_timing_arguments(parser: argparse.ArgumentParser) -> None:
    """Flags that override the stored loading timings for one run."""
    parser.add_argument(
        "--delay-start",
        type=int,
        metavar="MS",
        help="Milliseconds before the indicator may appear (default: settings)",
    )
    parser.add_argument(
        "--min-loading-time",
        type=int,
        metavar="MS",
        help="Milliseconds the indicator stays visible once shown",
    )
    parser.add_argument(
        "--max-loading-time",
        type=int,
        metavar="MS",
        help="Milliseconds after which the indicator is force-hidden",
    )
    parser.add_argument(
        "--ready-settle",
        type=int,
        metavar="MS",
        help="Grace period between a ready signal and completion",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level CLI parser."""
    parser = argparse.ArgumentParser(
        description="loadbar - bounded-latency loading indicator"
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    tui_parser = subparsers.add_parser(
        "tui",
        help="Run the interactive route loading demo (default)",
    )
    _add_timing_arguments(tui_parser)

    simulate_parser = subparsers.add_parser(
        "simulate",
        help="Replay a trigger trace headlessly and print visibility changes",
    )
    simulate_parser.add_argument(
        "trace",
        help="Steps like 'navigate:/posts@0 ready@40 start@500 complete@520'",
    )
    simulate_parser.add_argument(
        "--until",
        type=int,
        metavar="MS",
        help="Stop the replay after this many milliseconds "
        "(default: once every timer could have fired)",
    )
    _add_timing_arguments(simulate_parser)

    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments from argv (or sys.argv when omitted)."""
    parser = build_parser()
    if argv is None:
        return parser.parse_args()
    return parser.parse_args(list(argv))
