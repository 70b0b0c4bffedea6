"""
data_loader
===========

Price feeds for the session driver.  The engine only ever sees one
:class:`models.PriceSample` at a time; this module decides where those
samples come from:

* :class:`RandomWalkFeed` synthesises an intraday random walk per symbol.
* :class:`MarketDataLoader` replays recorded ticks from a CSV file.

Both feeds round prices to cents and yield samples tick by tick, with
the symbols of a tick always in the same order.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence

import numpy as np
import pandas as pd

from models import PriceSample

__all__ = ["RandomWalkFeed", "MarketDataLoader"]


class RandomWalkFeed:
    """Synthetic multiplicative random walk, reproducible from a seed.

    Each symbol opens somewhere in [100, 149] and then moves by a uniformly
    drawn step between -10% and +10% (in 0.1% increments) every tick.
    """

    def __init__(self, symbols: Sequence[str], ticks: int, seed: Optional[int] = None) -> None:
        if ticks < 0:
            raise ValueError("ticks must be non-negative")
        self.symbols = list(symbols)
        self.ticks = ticks
        self.seed = seed

    def iter_samples(self) -> Iterator[PriceSample]:
        # A fresh generator per pass so the same seed replays the same day.
        rng = np.random.default_rng(self.seed)
        prices = {symbol: float(100 + rng.integers(0, 50)) for symbol in self.symbols}
        for tick in range(self.ticks):
            for symbol in self.symbols:
                change = int(rng.integers(-100, 101)) / 1000.0
                # Never let rounding take a price to zero.
                prices[symbol] = max(0.01, round(prices[symbol] * (1 + change), 2))
                yield PriceSample(symbol=symbol, price=prices[symbol], tick=tick)


class MarketDataLoader:
    """Load recorded ticks from a CSV file with ``tick,symbol,price`` columns."""

    REQUIRED_COLUMNS = {"tick", "symbol", "price"}

    def __init__(self, path: str) -> None:
        self.path = path
        # Load and validate immediately so a bad file fails before the session.
        self.frame: pd.DataFrame = self._load(path)

    @classmethod
    def _load(cls, path: str) -> pd.DataFrame:
        df = pd.read_csv(path)
        missing = cls.REQUIRED_COLUMNS - set(df.columns)
        if missing:
            raise ValueError(
                f"Price file {path} is missing columns: {', '.join(sorted(missing))}"
            )
        df = df[["tick", "symbol", "price"]].copy()
        # Validate after rounding: a sub-cent price would otherwise become 0.00.
        df["price"] = df["price"].astype(float).round(2)
        if df["price"].isna().any() or (df["price"] <= 0).any():
            raise ValueError(f"Price file {path} contains missing or non-positive prices")
        df["tick"] = df["tick"].astype(int)
        df["symbol"] = df["symbol"].astype(str)
        # Stable sort keeps the file's symbol order within each tick.
        return df.sort_values("tick", kind="mergesort").reset_index(drop=True)

    @property
    def symbols(self) -> List[str]:
        return [str(s) for s in pd.unique(self.frame["symbol"])]

    @property
    def ticks(self) -> int:
        return int(self.frame["tick"].nunique())

    def iter_samples(self) -> Iterator[PriceSample]:
        for row in self.frame.itertuples(index=False):
            yield PriceSample(symbol=row.symbol, price=float(row.price), tick=int(row.tick))
