"""TUI launch command."""

from __future__ import annotations

import argparse
import sys

from loadbar.cli.context import resolve_loading_config, resolve_ready_settle_ms
from loadbar.models import InvalidLoadingConfigError
from loadbar.tui.app import LoadbarApp


def cmd_tui(args: argparse.Namespace) -> int:
    """Launch the TUI application."""
    try:
        config = resolve_loading_config(args)
    except InvalidLoadingConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    app = LoadbarApp(config, ready_settle_ms=resolve_ready_settle_ms(args))
    app.run()
    return 0
