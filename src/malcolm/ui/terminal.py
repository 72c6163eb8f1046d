"""Terminal port used by the layout, and its rich-backed implementation."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from rich.console import Console
from rich.control import Control
from rich.segment import ControlType

from .models import TerminalSize

ResizeHandler = Callable[[TerminalSize], None]

logger = logging.getLogger(__name__)


class TerminalUI(Protocol):
    """Cursor-addressed screen primitives (rows and columns are 1-based)."""

    def clear_screen(self) -> None: ...

    def move_cursor(self, row: int, col: int) -> None: ...

    def clear_line(self) -> None: ...

    def write(self, text: str) -> None: ...

    def get_size(self) -> TerminalSize: ...

    def on_resize(self, handler: ResizeHandler) -> None: ...

    def hide_cursor(self) -> None: ...

    def show_cursor(self) -> None: ...

    def enter_alternate_screen(self) -> None: ...

    def exit_alternate_screen(self) -> None: ...


class RichTerminal:
    """Drive a real terminal through a rich ``Console``.

    Cursor movement and clearing go through rich ``Control`` codes; text is
    written as-is because it already carries its own style sequences.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        self._resize_handlers: list[ResizeHandler] = []

    def clear_screen(self) -> None:
        self.console.control(Control.clear(), Control.home())

    def move_cursor(self, row: int, col: int) -> None:
        self.console.control(Control.move_to(max(0, col - 1), max(0, row - 1)))

    def clear_line(self) -> None:
        self.console.control(Control((ControlType.ERASE_IN_LINE, 2)))

    def write(self, text: str) -> None:
        self.console.file.write(text)
        self.console.file.flush()

    def get_size(self) -> TerminalSize:
        width, height = self.console.size
        return TerminalSize(rows=height or 24, cols=width or 80)

    def on_resize(self, handler: ResizeHandler) -> None:
        self._resize_handlers.append(handler)

    def notify_resize(self) -> TerminalSize:
        """Re-query the size and tell every resize handler about it."""
        size = self.get_size()
        logger.debug("Terminal resized to %sx%s", size.cols, size.rows)
        for handler in self._resize_handlers:
            handler(size)
        return size

    def hide_cursor(self) -> None:
        self.console.control(Control.show_cursor(False))

    def show_cursor(self) -> None:
        self.console.control(Control.show_cursor(True))

    def enter_alternate_screen(self) -> None:
        self.console.control(Control.alt_screen(True))

    def exit_alternate_screen(self) -> None:
        self.console.control(Control.alt_screen(False))
