"""
backtest
========

This module provides a command line entry point for simulating one
trading session with :class:`strategies.SmaHedgeStrategy`.  It wires
together a price feed, the portfolio and the strategy, feeds every tick
into the strategy, settles the book at the end of the day and prints the
resulting balance and profit/loss.
"""

from __future__ import annotations

import argparse
import logging
from typing import Dict, Iterable, Optional, Sequence

from config import DEFAULT_SYMBOLS, INITIAL_BALANCE, TICKS_PER_DAY, StrategyConfig
from data_loader import MarketDataLoader, RandomWalkFeed
from models import PortfolioSnapshot, PriceSample
from portfolio import Portfolio
from strategies import BaseStrategy, SmaHedgeStrategy

__all__ = ["run_session", "format_summary", "run_backtest", "parse_args", "main"]

logger = logging.getLogger(__name__)


def run_session(strategy: BaseStrategy, samples: Iterable[PriceSample]) -> Dict[str, float]:
    """Feed every sample to the strategy, then settle at the last seen prices."""
    last_prices: Dict[str, float] = {}
    strategy.on_start()
    for sample in samples:
        strategy.on_tick(sample.symbol, sample.price, sample.tick)
        last_prices[sample.symbol] = sample.price
    strategy.on_finish(last_prices)
    return last_prices


def format_summary(snapshot: PortfolioSnapshot, starting_cash: float) -> str:
    lines = [f"Final Balance: ${snapshot.cash:.2f}"]
    profit_loss = snapshot.cash - starting_cash
    label = "Profit" if profit_loss >= 0 else "Loss"
    lines.append(f"{label}: ${abs(profit_loss):.2f}")
    # Normally empty after settlement, kept for sessions stopped early.
    for symbol in snapshot.held_symbols():
        holding = snapshot.holdings[symbol]
        lines.append(f"{symbol}: {holding.shares} shares held at avg ${holding.avg_cost:.2f}")
    return "\n".join(lines)


def run_backtest(
    symbols: Sequence[str] = DEFAULT_SYMBOLS,
    ticks: int = TICKS_PER_DAY,
    starting_cash: float = INITIAL_BALANCE,
    seed: Optional[int] = None,
    prices_csv: Optional[str] = None,
    config: Optional[StrategyConfig] = None,
) -> PortfolioSnapshot:
    """Run a single session and print its summary."""
    if prices_csv is not None:
        # Recorded data decides which symbols trade and for how long.
        feed = MarketDataLoader(prices_csv)
        symbols = feed.symbols
    else:
        feed = RandomWalkFeed(symbols, ticks, seed=seed)
    portfolio = Portfolio(starting_cash)
    strategy = SmaHedgeStrategy(portfolio, symbols, config)
    print(f"Initial Balance: ${starting_cash:.2f}")
    run_session(strategy, feed.iter_samples())
    snapshot = strategy.snapshot()
    logger.debug("Session produced %d fills", len(portfolio.trade_log))
    print(format_summary(snapshot, starting_cash))
    return snapshot


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Simulate an intraday SMA trading session with option hedges")
    parser.add_argument("--ticks", type=int, default=TICKS_PER_DAY, help="Number of ticks in the session")
    parser.add_argument("--symbols", nargs="+", default=list(DEFAULT_SYMBOLS), help="Symbols to trade")
    parser.add_argument("--starting-cash", type=float, default=INITIAL_BALANCE, help="Opening cash balance")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random-walk price feed")
    # Replaces the random walk; symbols and tick count come from the file.
    parser.add_argument("--prices-csv", default=None, help="CSV file with tick,symbol,price columns")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--debug", action="store_true", help="Also log skipped actions")
    verbosity.add_argument("--quiet", action="store_true", help="Only print the summary")
    return parser.parse_args(argv)


def main(argv: Optional[Iterable[str]] = None) -> None:
    args = parse_args(argv)
    level = logging.INFO
    if args.debug:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(message)s")
    run_backtest(
        symbols=args.symbols,
        ticks=args.ticks,
        starting_cash=args.starting_cash,
        seed=args.seed,
        prices_csv=args.prices_csv,
    )


if __name__ == "__main__":
    main()
