"""CLI command handlers."""

from .simulate import cmd_simulate
from .tui import cmd_tui

__all__ = ["cmd_simulate", "cmd_tui"]
