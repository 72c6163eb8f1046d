"""Fixed header, scrollable viewport and fixed footer on a terminal."""

from __future__ import annotations

from ..models import Address
from .color_scheme import StyleToken, truncate_to_width, wrap
from .models import DetailLevel, LayoutRegions, SelectionState, TerminalSize
from .terminal import TerminalUI

BRAND = "Malcolm"


def calculate_regions(size: TerminalSize) -> LayoutRegions:
    """Header on row 1, footer on the last row, viewport in between."""
    rows = max(1, size.rows)
    return LayoutRegions(
        header_row=1,
        viewport_start_row=2,
        viewport_end_row=rows - 1,
        viewport_height=max(1, rows - 2),
        footer_row=rows,
        width=max(1, size.cols),
    )


class ScreenLayout:
    """Write into the fixed screen regions without touching their neighbours.

    Geometry is re-read from the terminal on every call so a resize between
    two writes is always honoured.
    """

    def __init__(self, terminal: TerminalUI) -> None:
        self.terminal = terminal

    def regions(self) -> LayoutRegions:
        return calculate_regions(self.terminal.get_size())

    def render_header(
        self,
        from_address: Address,
        to_address: Address,
        level: DetailLevel,
    ) -> None:
        regions = self.regions()
        self.terminal.move_cursor(regions.header_row, 1)
        self.terminal.clear_line()
        dim_arrow_in = wrap("←", StyleToken.DIM)
        dim_arrow_out = wrap("→", StyleToken.DIM)
        header = (
            f"{wrap(BRAND, StyleToken.BOLD)} {dim_arrow_in} {from_address} "
            f"{dim_arrow_out} {to_address}  {wrap(f'[{level}]', StyleToken.DIM)}"
        )
        self.terminal.write(header)

    def render_footer(
        self,
        exchange_count: int,
        capacity: int,
        storage_path: str,
        selection: SelectionState | None = None,
    ) -> None:
        """Summarize counts, storage and key bindings on the footer row."""
        regions = self.regions()
        self.terminal.move_cursor(regions.footer_row, 1)
        self.terminal.clear_line()

        active = selection is not None and selection.mode == "active"
        indicator = ""
        if active and selection is not None and selection.selected_item is not None:
            indicator = wrap(
                f"[{selection.selected_item}/{selection.total_items}]", StyleToken.BOLD
            ) + " "
        hint = "ESC exit • ↑↓ select • " if active else "↑↓ select • "
        controls = indicator + wrap(
            f"{hint}+/- level • i inspect • q quit • "
            f"{exchange_count}/{capacity} requests • {storage_path}",
            StyleToken.DIM,
        )
        # Bottom-right cell stays empty.
        self.terminal.write(truncate_to_width(controls, max(1, regions.width - 1)))

    def clear_viewport(self) -> None:
        regions = self.regions()
        for row in range(regions.viewport_start_row, regions.viewport_end_row + 1):
            self.terminal.move_cursor(row, 1)
            self.terminal.clear_line()
        self.terminal.move_cursor(regions.viewport_start_row, 1)

    def write_viewport_line(self, viewport_row: int, text: str) -> bool:
        """Write ``text`` on a viewport-relative row.

        Returns False, writing nothing, when the row falls outside the
        viewport.
        """
        regions = self.regions()
        if viewport_row < 0:
            return False
        absolute_row = regions.viewport_start_row + viewport_row
        if absolute_row > regions.viewport_end_row:
            return False

        self.terminal.move_cursor(absolute_row, 1)
        self.terminal.clear_line()
        self.terminal.write(truncate_to_width(text, regions.width))
        return True
