"""Wire the exchange history, renderer and terminal into one viewer session."""

from __future__ import annotations

import logging

from .config import ViewerSettings
from .log_setup import setup_logger
from .models import HttpExchange
from .ui.exchange_history import ExchangeHistory
from .ui.models import Command, DetailLevel, TerminalSize
from .ui.screen_layout import ScreenLayout
from .ui.screen_renderer import ScreenRenderer
from .ui.terminal import TerminalUI

logger = logging.getLogger(__name__)


class ViewerSession:
    """Outer coordinator around the rendering core.

    The proxy feeds exchanges through :meth:`record_exchange`, the keyboard
    reader feeds normalized commands through :meth:`handle_command`. Storage
    and export stay with the caller: ``inspect`` only hands back the selected
    exchange.
    """

    def __init__(self, *, terminal: TerminalUI, settings: ViewerSettings) -> None:
        self.terminal = terminal
        self.settings = settings
        self.history = ExchangeHistory(capacity=settings.history_capacity)
        self.renderer = ScreenRenderer(
            history=self.history,
            layout=ScreenLayout(terminal),
            from_address=settings.from_addr,
            to_address=settings.to_addr,
            storage_path=str(settings.storage_path),
            initial_level=DetailLevel.of(settings.initial_level),
            body_preview_length=settings.body_preview_length,
        )
        self.running = False
        self.history.on_added(self._on_exchange_added)
        self.terminal.on_resize(self._on_resize)

    def start(self) -> None:
        setup_logger(level=self.settings.log_level, log_file=self.settings.log_file)
        logger.info("Viewer session starting: %s", self.settings.safe_summary())
        self.terminal.enter_alternate_screen()
        self.terminal.hide_cursor()
        self.renderer.initialize()
        self.running = True

    def stop(self) -> None:
        if not self.running:
            return
        self.running = False
        self.terminal.show_cursor()
        self.terminal.exit_alternate_screen()
        logger.info("Viewer session stopped after %s exchanges", self.history.size())

    def record_exchange(self, exchange: HttpExchange) -> None:
        """Add a captured exchange; it is drawn only while the session runs."""
        self.history.add(exchange)

    def handle_command(self, command: Command) -> HttpExchange | None:
        """Route one keyboard command.

        Returns the selected exchange for ``inspect`` when a selection is
        active, otherwise None. Commands are ignored once the session stops.
        """
        if not self.running:
            return None
        if command is Command.QUIT:
            self.stop()
            return None
        if command is Command.INSPECT:
            return self.selected_exchange()
        self.renderer.dispatch(command)
        return None

    def selected_exchange(self) -> HttpExchange | None:
        if not self.renderer.is_selection_active():
            return None
        index = self.renderer.get_selected_index()
        if index is None:
            return None
        exchange = self.history.get_by_index(index)
        if exchange is not None:
            logger.info("Inspecting exchange %s", exchange.id)
        return exchange

    def _on_exchange_added(self, exchange: HttpExchange) -> None:
        if self.running:
            self.renderer.on_new_exchange(exchange)

    def _on_resize(self, size: TerminalSize) -> None:
        if self.running:
            self.renderer.on_resize(size)
