"""Interactive exchange view: detail level, selection and full redraws."""

from __future__ import annotations

import logging
from dataclasses import replace

from ..models import Address, HttpExchange
from .color_scheme import StyleToken, highlight_selected, wrap
from .exchange_formatter import BODY_PREVIEW_LENGTH, FormattedExchange, format_exchange
from .exchange_history import ExchangeHistory
from .models import Command, DetailLevel, SelectionState, TerminalSize, ViewState
from .screen_layout import ScreenLayout

WAITING_MESSAGE = "  Waiting for requests..."

# (display line, whether the whole line belongs to the selected exchange)
ViewportLine = tuple[str, bool]
LineSpan = tuple[int, int]

logger = logging.getLogger(__name__)


def next_view_state(state: ViewState, command: Command, item_count: int) -> ViewState:
    """Apply one command to the view state.

    Returns ``state`` itself when the command changes nothing, so callers can
    compare with ``==`` to decide whether a redraw is needed.
    """
    index = state.selected_index

    if command is Command.INCREMENT:
        level = state.level.increment()
        return state if level == state.level else replace(state, level=level)
    if command is Command.DECREMENT:
        level = state.level.decrement()
        return state if level == state.level else replace(state, level=level)
    if command is Command.SELECT_UP:
        if index is None:
            if item_count == 0:
                return state
            return replace(state, selected_index=item_count - 1)
        if index > 0:
            return replace(state, selected_index=index - 1)
        return state
    if command is Command.SELECT_DOWN:
        if index is None:
            return state
        if index < item_count - 1:
            return replace(state, selected_index=index + 1)
        return replace(state, selected_index=None)
    if command is Command.RESET_SELECTION:
        if index is None:
            return state
        return replace(state, selected_index=None)
    # inspect and quit are handled by whoever owns the session.
    return state


def visible_window(total: int, height: int, selected: LineSpan | None) -> tuple[int, int]:
    """Pick the ``[start, end)`` slice of ``total`` lines to show in ``height`` rows.

    Without a selection the newest lines (the tail) are shown. With one, the
    window is centred on the selected span and then shifted so the span is
    fully visible, even if that puts it off centre.
    """
    height = max(1, height)
    if total <= height:
        return 0, total
    if selected is None:
        return total - height, total

    sel_start, sel_end = selected
    midpoint = (sel_start + sel_end) // 2
    start = max(0, midpoint - height // 2)
    end = start + height
    if end > total:
        end = total
        start = max(0, end - height)

    if sel_start < start:
        start = sel_start
        end = min(total, start + height)
    elif sel_end >= end:
        end = sel_end + 1
        start = max(0, end - height)
    return start, end


class ScreenRenderer:
    """Own the view state and redraw the whole screen after every change.

    Every incoming event (command, new exchange, resize) is handled to
    completion, redraw included, before the next one.
    """

    def __init__(
        self,
        *,
        history: ExchangeHistory,
        layout: ScreenLayout,
        from_address: Address,
        to_address: Address,
        storage_path: str,
        initial_level: DetailLevel | None = None,
        body_preview_length: int = BODY_PREVIEW_LENGTH,
    ) -> None:
        self.history = history
        self.layout = layout
        self.from_address = from_address
        self.to_address = to_address
        self.storage_path = storage_path
        self.body_preview_length = body_preview_length
        self._state = ViewState(level=initial_level or DetailLevel.default())

    @property
    def state(self) -> ViewState:
        return self._state

    def get_level(self) -> DetailLevel:
        return self._state.level

    def get_selected_index(self) -> int | None:
        return self._state.selected_index

    def is_selection_active(self) -> bool:
        return self._state.selection_active

    def get_selection_state(self) -> SelectionState:
        index = self._state.selected_index
        return SelectionState(
            mode=self._state.mode,
            selected_item=index + 1 if index is not None else None,
            total_items=self.history.size(),
        )

    def dispatch(self, command: Command) -> bool:
        """Apply ``command``; returns True when it changed state and redrew."""
        new_state = next_view_state(self._state, command, self.history.size())
        return self._apply(new_state, reason=command.value)

    def set_level(self, level: DetailLevel) -> bool:
        if level == self._state.level:
            return False
        # The selection survives level changes; indices do not depend on level.
        return self._apply(replace(self._state, level=level), reason="set_level")

    def increment_level(self) -> bool:
        return self.dispatch(Command.INCREMENT)

    def decrement_level(self) -> bool:
        return self.dispatch(Command.DECREMENT)

    def select_up(self) -> bool:
        return self.dispatch(Command.SELECT_UP)

    def select_down(self) -> bool:
        return self.dispatch(Command.SELECT_DOWN)

    def reset_selection(self) -> bool:
        return self.dispatch(Command.RESET_SELECTION)

    def initialize(self) -> None:
        """Clear the screen once and draw the first frame."""
        self.layout.terminal.clear_screen()
        self.redraw()

    def on_new_exchange(self, exchange: HttpExchange) -> None:
        # New exchanges are appended, so an existing selection index still
        # points at the same position.
        logger.debug("New exchange %s; redrawing", exchange.id)
        self.redraw()

    def on_resize(self, size: TerminalSize | None = None) -> None:
        if size is not None:
            logger.debug("Resize to %sx%s; redrawing", size.cols, size.rows)
        self.redraw()

    def redraw(self) -> None:
        """Header, cleared viewport, viewport body, footer; in that order."""
        self._clamp_selection()
        self.layout.render_header(self.from_address, self.to_address, self._state.level)
        self.layout.clear_viewport()
        self._render_viewport()
        self.layout.render_footer(
            self.history.size(),
            self.history.capacity(),
            self.storage_path,
            self.get_selection_state(),
        )

    def _apply(self, new_state: ViewState, *, reason: str) -> bool:
        if new_state == self._state:
            return False
        logger.debug(
            "View state %s -> %s (%s)",
            _describe(self._state),
            _describe(new_state),
            reason,
        )
        self._state = new_state
        self.redraw()
        return True

    def _clamp_selection(self) -> None:
        index = self._state.selected_index
        size = self.history.size()
        if index is None or index < size:
            return
        clamped = size - 1 if size > 0 else None
        self._state = replace(self._state, selected_index=clamped)

    def _render_viewport(self) -> None:
        regions = self.layout.regions()
        exchanges = self.history.get_all()
        if not exchanges:
            self.layout.write_viewport_line(0, wrap(WAITING_MESSAGE, StyleToken.DIM))
            return

        selected_index = self._state.selected_index
        formatted = [
            (
                format_exchange(
                    exchange,
                    self._state.level,
                    body_preview_length=self.body_preview_length,
                ),
                index == selected_index,
            )
            for index, exchange in enumerate(exchanges)
        ]

        if self._state.level.value == 1:
            lines, span = _pack_dots(formatted, regions.width)
        else:
            lines, span = _flatten(formatted)

        start, end = visible_window(len(lines), regions.viewport_height, span)
        for row, (line, is_selected) in enumerate(lines[start:end]):
            text = highlight_selected(line) if is_selected else line
            if not self.layout.write_viewport_line(row, text):
                break


def _flatten(
    formatted: list[tuple[FormattedExchange, bool]],
) -> tuple[list[ViewportLine], LineSpan | None]:
    """One global line list plus the line span of the selected exchange."""
    lines: list[ViewportLine] = []
    span: LineSpan | None = None
    for item, is_selected in formatted:
        if is_selected:
            span = (len(lines), len(lines) + item.line_count - 1)
        lines.extend((line, is_selected) for line in item.lines)
    return lines, span


def _pack_dots(
    formatted: list[tuple[FormattedExchange, bool]],
    width: int,
) -> tuple[list[ViewportLine], LineSpan | None]:
    """Pack level-1 glyphs several per row; only the selected glyph is highlighted."""
    dots_per_line = max(1, width - 2)
    lines: list[ViewportLine] = []
    span: LineSpan | None = None
    for start in range(0, len(formatted), dots_per_line):
        chunk = formatted[start : start + dots_per_line]
        parts: list[str] = []
        for offset, (item, is_selected) in enumerate(chunk):
            glyph = item.lines[0] if item.lines else ""
            if is_selected:
                glyph = highlight_selected(glyph)
                row = (start + offset) // dots_per_line
                span = (row, row)
            parts.append(glyph)
        lines.append(("".join(parts), False))
    return lines, span


def _describe(state: ViewState) -> str:
    return f"level={state.level.value} selected={state.selected_index}"
