"""CLI orchestration and command routing."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable, Sequence

from loadbar.cli.commands import cmd_simulate, cmd_tui
from loadbar.cli.parser import parse_args

logger = logging.getLogger(__name__)


def dispatch(args: argparse.Namespace) -> int:
    """Route parsed args to the correct command handler."""
    command_handlers: dict[str, Callable[[argparse.Namespace], int]] = {
        "simulate": cmd_simulate,
        "tui": cmd_tui,
    }

    handler = command_handlers.get(args.command or "tui", cmd_tui)
    return handler(args)


def run(
    argv: Sequence[str] | None = None,
    *,
    configure_logging: Callable[[], None] | None = None,
) -> int:
    """Parse args, apply shared CLI setup, and execute command."""
    args = parse_args(argv)

    if configure_logging is not None:
        configure_logging()

    logger.info("Running command: %s", args.command or "tui")
    return dispatch(args)
