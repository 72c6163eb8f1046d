"""Tests for the rich-backed terminal binding."""

from __future__ import annotations

import io
from typing import Any

import pytest
from rich.console import Console

from malcolm.ui.models import TerminalSize
from malcolm.ui.terminal import RichTerminal


@pytest.fixture
def rich_terminal(monkeypatch: Any) -> tuple[RichTerminal, io.StringIO]:
    monkeypatch.setenv("TERM", "xterm-256color")
    buffer = io.StringIO()
    console = Console(file=buffer, force_terminal=True, width=80, height=24)
    return RichTerminal(console), buffer


def test_cursor_and_line_primitives(rich_terminal: tuple[RichTerminal, io.StringIO]) -> None:
    terminal, buffer = rich_terminal
    terminal.move_cursor(3, 5)
    terminal.clear_line()
    terminal.write("\x1b[32mok\x1b[0m")
    assert buffer.getvalue() == "\x1b[3;5H\x1b[2K\x1b[32mok\x1b[0m"


def test_screen_and_cursor_controls(rich_terminal: tuple[RichTerminal, io.StringIO]) -> None:
    terminal, buffer = rich_terminal
    terminal.enter_alternate_screen()
    terminal.hide_cursor()
    terminal.clear_screen()
    terminal.show_cursor()
    terminal.exit_alternate_screen()
    output = buffer.getvalue()
    assert output.index("\x1b[?1049h") < output.index("\x1b[?25l")
    assert "\x1b[2J\x1b[H" in output
    assert output.endswith("\x1b[?25h\x1b[?1049l")


def test_size_comes_from_console(rich_terminal: tuple[RichTerminal, io.StringIO]) -> None:
    terminal, _ = rich_terminal
    assert terminal.get_size() == TerminalSize(rows=24, cols=80)


def test_notify_resize_calls_handlers_in_order(
    rich_terminal: tuple[RichTerminal, io.StringIO],
) -> None:
    terminal, _ = rich_terminal
    seen: list[tuple[str, TerminalSize]] = []
    terminal.on_resize(lambda size: seen.append(("first", size)))
    terminal.on_resize(lambda size: seen.append(("second", size)))
    terminal.console.size = (40, 10)

    size = terminal.notify_resize()

    assert size == TerminalSize(rows=10, cols=40)
    assert seen == [("first", size), ("second", size)]
