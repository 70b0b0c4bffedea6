"""
settlement
==========

End-of-day settlement: every open share position is sold at the final
price of its instrument and every remaining option contract is either
paid out (in the money) or expires worthless.  Nothing is carried over
to the next session.
"""

from __future__ import annotations

import logging
from typing import Mapping

from portfolio import Portfolio

__all__ = ["settle"]

logger = logging.getLogger(__name__)


def settle(portfolio: Portfolio, final_prices: Mapping[str, float]) -> float:
    """Liquidate the whole portfolio against ``final_prices``.

    Every instrument that still holds shares or options must have a final
    price.  Returns the total cash credited by the settlement.
    """
    # Check every price up front so a missing one leaves the book untouched.
    missing = [
        symbol
        for symbol, pos in portfolio.positions.items()
        if (pos.is_open() or pos.options) and symbol not in final_prices
    ]
    if missing:
        raise KeyError(f"No final price for: {', '.join(missing)}")
    total = 0.0
    for symbol, pos in portfolio.positions.items():
        if not pos.is_open() and not pos.options:
            continue
        price = final_prices[symbol]
        if pos.is_open():
            quantity = portfolio.close_all(symbol)
            proceeds = quantity * price
            portfolio.credit(proceeds)
            portfolio.record(None, symbol, "EOD_SELL", quantity, price, proceeds)
            logger.info("EOD SELL %d shares of %s at $%.2f", quantity, symbol, price)
            total += proceeds
        for contract, payout in portfolio.sweep_options(symbol, price):
            portfolio.credit(payout)
            pos.option_payout += payout
            portfolio.record(None, symbol, "EOD_PAYOUT", 1, price, payout)
            logger.info(
                "OPTION PAYOUT for %s strike $%.2f: $%.2f", symbol, contract.strike, payout
            )
            total += payout
        # Out-of-the-money contracts expire worthless.
        for contract in portfolio.clear_options(symbol):
            logger.debug(
                "%s option on %s strike $%.2f expired worthless",
                contract.kind.value, symbol, contract.strike,
            )
    return total
