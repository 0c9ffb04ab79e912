"""Custom Textual messages for inter-widget communication."""
from __future__ import annotations

from textual.message import Message


class PageReady(Message):
    """A page finished loading its content."""

    def __init__(self, page: str) -> None:
        self.page = page
        super().__init__()
