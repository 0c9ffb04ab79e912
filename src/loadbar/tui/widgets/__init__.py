"""TUI widgets for loadbar."""

from .loading_bar import LoadingBar, next_progress, render_bar

__all__ = ["LoadingBar", "next_progress", "render_bar"]
