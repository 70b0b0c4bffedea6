"""
portfolio
=========

This module implements the account side of the simulator: a single cash
balance shared by every instrument, the per-instrument share positions
with their weighted average cost, and the option contracts held as
hedges.  Only the strategies and the settlement step mutate a
:class:`Portfolio`; reporting code reads it through :meth:`Portfolio.snapshot`.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from models import Fill, HoldingSnapshot, OptionContract, PortfolioSnapshot, Position

__all__ = ["Portfolio"]


class Portfolio:
    """Cash balance plus the positions held in each instrument."""

    def __init__(self, starting_cash: float) -> None:
        self.starting_cash = starting_cash
        self.cash = starting_cash
        # Positions are created lazily the first time a symbol is touched.
        self.positions: Dict[str, Position] = {}
        self.trade_log: List[Fill] = []

    def position(self, symbol: str) -> Position:
        pos = self.positions.get(symbol)
        if pos is None:
            pos = self.positions[symbol] = Position(symbol=symbol)
        return pos

    # Cash API
    def can_afford(self, amount: float) -> bool:
        return self.cash >= amount

    def debit(self, amount: float) -> None:
        # Callers check can_afford() first; reaching this is a bug upstream.
        if amount > self.cash:
            raise ValueError(f"Debit of {amount:.2f} exceeds cash balance {self.cash:.2f}")
        self.cash -= amount

    def credit(self, amount: float) -> None:
        self.cash += amount

    @property
    def profit_loss(self) -> float:
        return self.cash - self.starting_cash

    # Share positions
    def open_or_add(self, symbol: str, quantity: int, price: float) -> Position:
        if quantity <= 0:
            raise ValueError("quantity must be positive")
        pos = self.position(symbol)
        # Averaging into the position: keep the weighted-average cost.
        total_qty = pos.shares + quantity
        pos.avg_cost = (pos.avg_cost * pos.shares + price * quantity) / total_qty
        pos.shares = total_qty
        return pos

    def close_all(self, symbol: str) -> int:
        """Flatten the position and return how many shares were held."""
        pos = self.positions.get(symbol)
        if pos is None or pos.shares == 0:
            return 0
        quantity = pos.shares
        pos.shares = 0
        pos.avg_cost = 0.0
        return quantity

    # Options
    def add_option(self, symbol: str, contract: OptionContract) -> None:
        self.position(symbol).options.append(contract)

    def sweep_options(self, symbol: str, price: float) -> List[Tuple[OptionContract, float]]:
        """Remove every contract exercised at ``price`` and return it with its payout.

        Contracts that are still out of the money stay in place, so calling
        this twice at the same price returns nothing the second time.
        """
        pos = self.positions.get(symbol)
        if pos is None:
            return []
        exercised: List[Tuple[OptionContract, float]] = []
        survivors: List[OptionContract] = []
        for contract in pos.options:
            if contract.is_exercised(price):
                exercised.append((contract, contract.payout(price)))
            else:
                survivors.append(contract)
        pos.options = survivors
        return exercised

    def clear_options(self, symbol: str) -> List[OptionContract]:
        pos = self.positions.get(symbol)
        if pos is None:
            return []
        dropped, pos.options = pos.options, []
        return dropped

    # Reporting
    def record(
        self,
        tick: Optional[int],
        symbol: str,
        action: str,
        quantity: int,
        price: float,
        amount: float,
    ) -> Fill:
        fill = Fill(
            tick=tick,
            symbol=symbol,
            action=action,
            quantity=quantity,
            price=price,
            amount=amount,
        )
        self.trade_log.append(fill)
        return fill

    def snapshot(self) -> PortfolioSnapshot:
        holdings = {
            symbol: HoldingSnapshot(
                shares=pos.shares,
                avg_cost=pos.avg_cost,
                open_options=len(pos.options),
            )
            for symbol, pos in self.positions.items()
        }
        return PortfolioSnapshot(cash=self.cash, holdings=holdings)
