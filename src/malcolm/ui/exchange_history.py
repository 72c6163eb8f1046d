"""Bounded exchange history feeding the live viewer."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable

from ..models import HttpExchange

ExchangeListener = Callable[[HttpExchange], None]

DEFAULT_CAPACITY = 100

logger = logging.getLogger(__name__)


class ExchangeHistory:
    """Keep the most recent exchanges, oldest first, and announce additions."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self._capacity = capacity
        self._items: deque[HttpExchange] = deque(maxlen=capacity)
        self._listeners: list[ExchangeListener] = []

    def add(self, exchange: HttpExchange) -> None:
        """Append ``exchange``, evicting the oldest entry when full.

        Listeners run after the append, in registration order.
        """
        if len(self._items) == self._capacity:
            evicted = self._items.popleft()
            logger.debug("History full; evicted exchange %s", evicted.id)
        self._items.append(exchange)
        for listener in self._listeners:
            listener(exchange)

    def get_all(self) -> list[HttpExchange]:
        return list(self._items)

    def get_recent(self, count: int) -> list[HttpExchange]:
        """Return the last ``count`` exchanges, oldest of them first."""
        if count <= 0:
            return []
        if count >= len(self._items):
            return list(self._items)
        return list(self._items)[-count:]

    def get_by_index(self, index: int) -> HttpExchange | None:
        if 0 <= index < len(self._items):
            return self._items[index]
        return None

    def size(self) -> int:
        return len(self._items)

    def capacity(self) -> int:
        return self._capacity

    def on_added(self, listener: ExchangeListener) -> None:
        self._listeners.append(listener)

    def clear(self) -> None:
        """Drop every exchange without notifying listeners."""
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)
