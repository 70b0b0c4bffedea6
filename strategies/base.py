"""
strategies.base
===============

Defines an abstract base class for trading strategies.  Strategies
inherit from :class:`BaseStrategy` and implement `on_tick`; the base
class owns the portfolio, runs the end-of-day settlement in `on_finish`
and exposes a read-only snapshot.  This simple interface allows the
session driver to treat all strategies uniformly.
"""

from __future__ import annotations

from typing import Mapping

from models import PortfolioSnapshot
from portfolio import Portfolio
from settlement import settle

__all__ = ["BaseStrategy"]


class BaseStrategy:
    """Abstract base class for trading strategies."""

    def __init__(self, portfolio: Portfolio) -> None:
        # The strategy is the only writer of the portfolio during a session.
        self.portfolio = portfolio
        self.settled = False

    def on_start(self) -> None:
        """Called before the first tick of the session."""
        pass

    def on_tick(self, symbol: str, price: float, tick: int) -> None:
        """Called once per instrument per tick, in increasing tick order."""
        raise NotImplementedError

    def on_finish(self, final_prices: Mapping[str, float]) -> float:
        """Called at the end of the session with the last price of each instrument."""
        return self.settle(final_prices)

    def settle(self, final_prices: Mapping[str, float]) -> float:
        """Settle every open position once the last tick has been processed."""
        if self.settled:
            raise RuntimeError("session has already been settled")
        total = settle(self.portfolio, final_prices)
        self.settled = True
        return total

    def snapshot(self) -> PortfolioSnapshot:
        return self.portfolio.snapshot()
