"""Typed value objects describing what the viewer shows and how."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar, Literal

SelectionMode = Literal["none", "active"]


class StatusCategory(StrEnum):
    """Coarse status buckets that drive colour coding."""

    UNREACHABLE = "unreachable"
    INFORMATIONAL = "informational"
    SUCCESS = "success"
    REDIRECT = "redirect"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"


def categorize_status(status_code: int | None) -> StatusCategory:
    """Bucket a status code; ``None`` means the target never answered."""
    if status_code is None:
        return StatusCategory.UNREACHABLE
    if 100 <= status_code < 200:
        return StatusCategory.INFORMATIONAL
    if 200 <= status_code < 300:
        return StatusCategory.SUCCESS
    if 300 <= status_code < 400:
        return StatusCategory.REDIRECT
    if 400 <= status_code < 500:
        return StatusCategory.CLIENT_ERROR
    # 5xx and anything outside the known ranges.
    return StatusCategory.SERVER_ERROR


@dataclass(frozen=True, slots=True)
class DetailLevel:
    """Verbosity of rendered exchanges, 1 (dots) through 6 (full bodies).

    Build instances with :meth:`of` or :meth:`default`. ``increment`` and
    ``decrement`` return ``self`` at the bounds so callers can skip redraws
    with a plain equality check.
    """

    value: int

    MIN: ClassVar[int] = 1
    MAX: ClassVar[int] = 6
    DEFAULT: ClassVar[int] = 3

    @classmethod
    def of(cls, value: float) -> DetailLevel:
        return cls(math.floor(max(cls.MIN, min(cls.MAX, value))))

    @classmethod
    def default(cls) -> DetailLevel:
        return cls(cls.DEFAULT)

    def increment(self) -> DetailLevel:
        if self.value >= self.MAX:
            return self
        return DetailLevel(self.value + 1)

    def decrement(self) -> DetailLevel:
        if self.value <= self.MIN:
            return self
        return DetailLevel(self.value - 1)

    def is_multi_line(self) -> bool:
        return self.value >= 4

    def shows_headers(self) -> bool:
        return self.value >= 4

    def shows_body(self) -> bool:
        return self.value >= 5

    def shows_full_body(self) -> bool:
        return self.value >= 6

    def __str__(self) -> str:
        return f"Level {self.value}"


@dataclass(frozen=True, slots=True)
class TerminalSize:
    rows: int
    cols: int


@dataclass(frozen=True, slots=True)
class LayoutRegions:
    """Screen regions derived from a terminal size (rows are 1-based)."""

    header_row: int
    viewport_start_row: int
    viewport_end_row: int
    viewport_height: int
    footer_row: int
    width: int


@dataclass(frozen=True, slots=True)
class SelectionState:
    """Selection summary for the footer; ``selected_item`` is 1-based."""

    mode: SelectionMode
    selected_item: int | None
    total_items: int


@dataclass(frozen=True, slots=True)
class ViewState:
    """Renderer state: detail level plus the selected history index, if any.

    Selection mode is derived from the index, so an active selection always
    carries one.
    """

    level: DetailLevel
    selected_index: int | None = None

    @property
    def mode(self) -> SelectionMode:
        return "none" if self.selected_index is None else "active"

    @property
    def selection_active(self) -> bool:
        return self.selected_index is not None


class Command(StrEnum):
    """Normalized commands delivered by the keyboard input source."""

    INCREMENT = "increment"
    DECREMENT = "decrement"
    SELECT_UP = "select_up"
    SELECT_DOWN = "select_down"
    RESET_SELECTION = "reset_selection"
    INSPECT = "inspect"
    QUIT = "quit"
