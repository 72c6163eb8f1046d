"""Shared fixtures: a recording terminal and an exchange factory."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from datetime import datetime

import pytest

from malcolm.models import HttpExchange, HttpRequest, HttpResponse
from malcolm.ui.color_scheme import strip_styles
from malcolm.ui.models import TerminalSize
from malcolm.ui.terminal import ResizeHandler


class FakeTerminal:
    """Records every primitive and keeps the last text written on each row."""

    def __init__(self, rows: int = 24, cols: int = 80) -> None:
        self.size = TerminalSize(rows=rows, cols=cols)
        self.operations: list[str] = []
        self.written: list[str] = []
        self.rows: dict[int, str] = {}
        self.cursor_row = 1
        self.cursor_hidden = False
        self.in_alternate_screen = False
        self._resize_handlers: list[ResizeHandler] = []

    def set_size(self, rows: int, cols: int) -> None:
        self.size = TerminalSize(rows=rows, cols=cols)
        for handler in self._resize_handlers:
            handler(self.size)

    def clear_screen(self) -> None:
        self.operations.append("clear_screen")
        self.rows.clear()
        self.cursor_row = 1

    def move_cursor(self, row: int, col: int) -> None:
        self.operations.append(f"move_cursor({row},{col})")
        self.cursor_row = row

    def clear_line(self) -> None:
        self.operations.append(f"clear_line@{self.cursor_row}")
        self.rows.pop(self.cursor_row, None)

    def write(self, text: str) -> None:
        self.operations.append(f"write@{self.cursor_row}")
        self.written.append(text)
        self.rows[self.cursor_row] = self.rows.get(self.cursor_row, "") + text

    def get_size(self) -> TerminalSize:
        return self.size

    def on_resize(self, handler: ResizeHandler) -> None:
        self._resize_handlers.append(handler)

    def hide_cursor(self) -> None:
        self.operations.append("hide_cursor")
        self.cursor_hidden = True

    def show_cursor(self) -> None:
        self.operations.append("show_cursor")
        self.cursor_hidden = False

    def enter_alternate_screen(self) -> None:
        self.operations.append("enter_alternate_screen")
        self.in_alternate_screen = True

    def exit_alternate_screen(self) -> None:
        self.operations.append("exit_alternate_screen")
        self.in_alternate_screen = False

    def reset_log(self) -> None:
        self.operations.clear()
        self.written.clear()

    def row_text(self, row: int) -> str:
        """Visible text currently on ``row``."""
        return strip_styles(self.rows.get(row, ""))

    def screen_text(self) -> str:
        return "\n".join(self.row_text(row) for row in sorted(self.rows))


@pytest.fixture(autouse=True)
def package_logger(monkeypatch: pytest.MonkeyPatch) -> Iterator[logging.Logger]:
    """Give each test a fresh handler list on the package logger."""
    logger = logging.getLogger("malcolm")
    monkeypatch.setattr(logger, "handlers", [])
    monkeypatch.setattr(logger, "propagate", logger.propagate)
    level = logger.level
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.setLevel(level)


@pytest.fixture
def terminal() -> FakeTerminal:
    return FakeTerminal(rows=24, cols=80)


@pytest.fixture
def make_exchange() -> Callable[..., HttpExchange]:
    counter = {"n": 0}

    def _make(
        *,
        method: str = "GET",
        path: str = "/",
        status_code: int | None = 200,
        request_headers: dict[str, str] | None = None,
        request_body: str | None = None,
        response_headers: dict[str, str] | None = None,
        response_body: str | None = None,
        duration_ms: int | None = 42,
        timestamp: datetime | None = None,
        exchange_id: str | None = None,
    ) -> HttpExchange:
        counter["n"] += 1
        response: HttpResponse | None = None
        if status_code is not None:
            response = HttpResponse(
                status_code=status_code,
                headers=response_headers or {},
                body=response_body,
            )
        return HttpExchange(
            id=exchange_id or f"ex-{counter['n']}",
            timestamp=timestamp or datetime(2026, 3, 1, 9, 5, 7),
            request=HttpRequest(
                method=method,
                path=path,
                headers=request_headers or {},
                body=request_body,
            ),
            response=response,
            duration_ms=duration_ms if status_code is not None else None,
        )

    return _make
