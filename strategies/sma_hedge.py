"""
strategies.sma_hedge
====================

Implements the intraday moving-average strategy with option hedges.
Every instrument is evaluated independently on each tick:

* Entry when the price dips below its 10-tick SMA: buy at a limit 1%
  under the price, sizing the order at 1/N of the current cash, and
  hedge with an OTM call (+5%) and an OTM put (-5%).
* Normal exit when the price is above the SMA and 1% over the average
  cost: sell everything at a limit 1% over the price.
* On checkpoint ticks (every second tick) a risk exit sells at the raw
  price when it has dropped 3% under the SMA, and exercised options are
  cashed in.
* Whatever is left is settled at the end of the day.

The rules always run in this order and each one sees the effects of the
previous ones within the same tick.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Sequence

from config import StrategyConfig
from indicators import SignalWindow
from models import OptionContract, OptionKind
from portfolio import Portfolio
from pricing import option_value
from .base import BaseStrategy

__all__ = ["SmaHedgeStrategy"]

logger = logging.getLogger(__name__)


class SmaHedgeStrategy(BaseStrategy):
    """SMA mean-reversion entries with protective call/put hedges."""

    def __init__(
        self,
        portfolio: Portfolio,
        symbols: Sequence[str],
        config: Optional[StrategyConfig] = None,
    ) -> None:
        super().__init__(portfolio)
        self.symbols = list(symbols)
        self.config = config or StrategyConfig()
        self.window = SignalWindow(self.config.window)

    def on_tick(self, symbol: str, price: float, tick: int) -> None:
        if self.settled:
            raise RuntimeError("cannot process ticks after settlement")
        self.window.push(symbol, price)
        sma = self.window.average(symbol)
        if sma is None:
            return
        cfg = self.config
        limit_buy = price * (1.0 - cfg.slippage)
        limit_sell = price * (1.0 + cfg.slippage)

        if price < sma and self.portfolio.can_afford(limit_buy):
            self._enter(symbol, price, limit_buy, tick)

        pos = self.portfolio.position(symbol)
        if price > sma and pos.shares > 0 and price > pos.avg_cost * cfg.exit_margin:
            quantity = self.portfolio.close_all(symbol)
            self._sell(symbol, "SELL", quantity, limit_sell, tick)
            logger.info("SELL %d shares of %s at $%.2f", quantity, symbol, limit_sell)

        if not cfg.is_checkpoint(tick):
            return
        # Runs after the normal exit, so a position sold above is already flat.
        if pos.shares > 0 and price < sma * cfg.risk_drop_factor:
            quantity = self.portfolio.close_all(symbol)
            self._sell(symbol, "ALERT_SELL", quantity, price, tick)
            logger.info(
                "ALERT SELL %d shares of %s at $%.2f due to drop forecast",
                quantity, symbol, price,
            )
        self._sweep_options(symbol, price, tick)

    def _enter(self, symbol: str, price: float, limit_buy: float, tick: int) -> None:
        # Budget is a 1/N slice of whatever cash is available right now.
        quantity = math.floor(self.portfolio.cash / limit_buy / len(self.symbols))
        if quantity <= 0:
            return
        cost = quantity * limit_buy
        if not self.portfolio.can_afford(cost):
            logger.debug("Skipping BUY of %s: cost $%.2f exceeds cash", symbol, cost)
            return
        self.portfolio.debit(cost)
        self.portfolio.open_or_add(symbol, quantity, limit_buy)
        self.portfolio.record(tick, symbol, "BUY", quantity, limit_buy, -cost)
        logger.info("BUY %d shares of %s at $%.2f", quantity, symbol, limit_buy)

        cfg = self.config
        # Call first: its premium is paid before the put is checked.
        self._buy_hedge(symbol, OptionKind.CALL, price, price * cfg.call_strike_factor, tick)
        self._buy_hedge(symbol, OptionKind.PUT, price, price * cfg.put_strike_factor, tick)

    def _buy_hedge(
        self, symbol: str, kind: OptionKind, spot: float, strike: float, tick: int
    ) -> Optional[OptionContract]:
        cfg = self.config
        premium = option_value(
            kind, spot, strike, cfg.hedge_maturity, cfg.risk_free_rate, cfg.volatility
        )
        if not self.portfolio.can_afford(premium):
            logger.debug("Skipping %s hedge on %s: premium $%.2f exceeds cash", kind.value, symbol, premium)
            return None
        self.portfolio.debit(premium)
        contract = OptionContract(
            strike=strike,
            premium=premium,
            time_to_maturity=cfg.hedge_maturity,
            kind=kind,
        )
        self.portfolio.add_option(symbol, contract)
        self.portfolio.record(tick, symbol, f"BUY_{kind.value}", 1, premium, -premium)
        logger.info(
            "BUY %s OPTION on %s strike: $%.2f premium: $%.2f", kind.value, symbol, strike, premium
        )
        return contract

    def _sell(self, symbol: str, action: str, quantity: int, price: float, tick: int) -> None:
        proceeds = quantity * price
        self.portfolio.credit(proceeds)
        self.portfolio.record(tick, symbol, action, quantity, price, proceeds)

    def _sweep_options(self, symbol: str, price: float, tick: int) -> None:
        pos = self.portfolio.position(symbol)
        for contract, payout in self.portfolio.sweep_options(symbol, price):
            self.portfolio.credit(payout)
            pos.option_payout += payout
            self.portfolio.record(tick, symbol, f"EXIT_{contract.kind.value}", 1, price, payout)
            logger.info(
                "ALERT EXIT %s OPTION on %s payout: $%.2f", contract.kind.value, symbol, payout
            )
