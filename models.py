"""
models
======

This module defines simple data containers for price samples, option
contracts, positions, fills and portfolio snapshots.  Using `@dataclass`
for these structures keeps the engine code readable.  They are shared by
the portfolio, the strategies and the reporting code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

__all__ = [
    "OptionKind",
    "PriceSample",
    "OptionContract",
    "Position",
    "Fill",
    "HoldingSnapshot",
    "PortfolioSnapshot",
]


class OptionKind(str, Enum):
    CALL = "CALL"
    PUT = "PUT"


@dataclass(frozen=True)
class PriceSample:
    """One price observation handed to the engine by a feed."""
    symbol: str
    # Positive and already rounded to cents by the feed.
    price: float
    tick: int


@dataclass(frozen=True)
class OptionContract:
    """A hedge leg bought together with a share position."""
    strike: float
    # Cash paid when the contract was opened.
    premium: float
    time_to_maturity: float
    kind: OptionKind

    def is_exercised(self, price: float) -> bool:
        """True once the price has crossed the strike in our favour."""
        if self.kind is OptionKind.CALL:
            return price > self.strike
        return price < self.strike

    def payout(self, price: float) -> float:
        """Cash realised by exercising at ``price`` (zero when out of the money)."""
        if not self.is_exercised(price):
            return 0.0
        if self.kind is OptionKind.CALL:
            return price - self.strike
        return self.strike - price


@dataclass
class Position:
    """Shares and open option contracts held in a single instrument."""
    symbol: str
    shares: int = 0
    # Weighted average fill price; only meaningful while shares > 0.
    avg_cost: float = 0.0
    options: List[OptionContract] = field(default_factory=list)
    # Running total of option payouts realised on this instrument.
    option_payout: float = 0.0

    def is_open(self) -> bool:
        return self.shares > 0


@dataclass(frozen=True)
class Fill:
    """Record of a cash-moving event for reporting purposes."""
    # None for fills produced by end-of-day settlement.
    tick: Optional[int]
    symbol: str
    # BUY, SELL, ALERT_SELL, BUY_CALL, BUY_PUT, EXIT_CALL, EXIT_PUT,
    # EOD_SELL or EOD_PAYOUT.
    action: str
    quantity: int
    price: float
    # Signed effect on cash: negative for debits.
    amount: float


@dataclass(frozen=True)
class HoldingSnapshot:
    shares: int
    avg_cost: float
    open_options: int


@dataclass(frozen=True)
class PortfolioSnapshot:
    """Read-only view of the account handed to reporting code."""
    cash: float
    holdings: Dict[str, HoldingSnapshot]

    def held_symbols(self) -> List[str]:
        return sorted(symbol for symbol, holding in self.holdings.items() if holding.shares > 0)
