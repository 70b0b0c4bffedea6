"""
config
======

Session defaults and the tunable parameters of the SMA/hedge strategy.

The module-level constants describe a default trading day: a price every
five minutes for six hours across five large-cap symbols.  Everything the
decision rules depend on is grouped in :class:`StrategyConfig` so that a
run can be reproduced from one object.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

__all__ = [
    "TICKS_PER_DAY",
    "DEFAULT_SYMBOLS",
    "INITIAL_BALANCE",
    "SMA_WINDOW",
    "LIMIT_SLIPPAGE",
    "StrategyConfig",
]

# --- Session ---

# One tick every 5 minutes for 6 hours.
TICKS_PER_DAY = 72

DEFAULT_SYMBOLS: Tuple[str, ...] = ("AAPL", "GOOGL", "AMZN", "MSFT", "TSLA")

INITIAL_BALANCE = 100_000.0


# --- Signals ---

# Number of ticks in the simple moving average.
SMA_WINDOW = 10

# Limit prices sit 1% away from the last price (buy lower, sell higher).
LIMIT_SLIPPAGE = 0.01


@dataclass(frozen=True)
class StrategyConfig:
    """Parameters of the SMA entry/exit rules and the protective hedges."""
    window: int = SMA_WINDOW
    slippage: float = LIMIT_SLIPPAGE
    # Hedge strikes relative to the spot price at entry (OTM call and put).
    call_strike_factor: float = 1.05
    put_strike_factor: float = 0.95
    hedge_maturity: float = 0.1
    risk_free_rate: float = 0.01
    volatility: float = 0.20
    # Normal exit needs the price at least 1% above the average cost.
    exit_margin: float = 1.01
    # Risk exit fires when the price falls 3% below the moving average.
    risk_drop_factor: float = 0.97
    # Risk exit and option sweep run on every Nth tick (every 10 minutes).
    checkpoint_interval: int = 2

    def __post_init__(self) -> None:
        if self.window < 1:
            raise ValueError("window must be at least 1")
        if self.checkpoint_interval < 1:
            raise ValueError("checkpoint_interval must be at least 1")
        if not 0 <= self.slippage < 1:
            raise ValueError("slippage must be in [0, 1)")
        if self.volatility < 0:
            raise ValueError("volatility must be non-negative")
        if self.hedge_maturity <= 0:
            raise ValueError("hedge_maturity must be positive")

    def is_checkpoint(self, tick: int) -> bool:
        return tick % self.checkpoint_interval == 0
