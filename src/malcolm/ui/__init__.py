"""Terminal rendering and interaction engine for the live exchange view."""

from .exchange_formatter import FormattedExchange, calculate_total_lines, format_exchange
from .exchange_history import ExchangeHistory
from .models import (
    Command,
    DetailLevel,
    LayoutRegions,
    SelectionState,
    StatusCategory,
    TerminalSize,
    ViewState,
    categorize_status,
)
from .screen_layout import ScreenLayout, calculate_regions
from .screen_renderer import ScreenRenderer
from .terminal import RichTerminal, TerminalUI

__all__ = [
    "Command",
    "DetailLevel",
    "ExchangeHistory",
    "FormattedExchange",
    "LayoutRegions",
    "RichTerminal",
    "ScreenLayout",
    "ScreenRenderer",
    "SelectionState",
    "StatusCategory",
    "TerminalSize",
    "TerminalUI",
    "ViewState",
    "calculate_regions",
    "calculate_total_lines",
    "categorize_status",
    "format_exchange",
]
