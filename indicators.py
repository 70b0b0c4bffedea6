"""
indicators
==========

Rolling statistics used by the trading strategies to generate signals.
Keeping them apart from the strategies makes them easy to unit test.

Indicators provided:

* :class:`SignalWindow` - Per-symbol simple moving average over the last N prices.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Dict, Optional

from config import SMA_WINDOW

__all__ = ["SignalWindow"]


class SignalWindow:
    """Bounded FIFO history of recent prices per symbol.

    The simple moving average is only defined once a symbol has seen
    exactly ``window`` prices; before that the window is "cold" and
    :meth:`average` returns ``None``.

    Parameters
    ----------
    window : int, optional
        Number of prices averaged, default 10.
    """

    def __init__(self, window: int = SMA_WINDOW) -> None:
        self.window = window
        self._history: Dict[str, Deque[float]] = {}

    def push(self, symbol: str, price: float) -> None:
        # deque(maxlen=...) drops the oldest sample once the window is full.
        history = self._history.get(symbol)
        if history is None:
            history = self._history[symbol] = deque(maxlen=self.window)
        history.append(price)

    def size(self, symbol: str) -> int:
        return len(self._history.get(symbol, ()))

    def is_warm(self, symbol: str) -> bool:
        return self.size(symbol) == self.window

    def average(self, symbol: str) -> Optional[float]:
        """Return the unweighted mean of the window, or None while it is filling."""
        if not self.is_warm(symbol):
            return None
        history = self._history[symbol]
        return sum(history) / self.window
