"""
Intraday SMA trading simulator
==============================

Simulates a day of automated trading over a fixed set of instruments:
moving-average entries and exits, Black-Scholes priced call/put hedges,
periodic risk liquidation and end-of-day settlement.

* :mod:`pricing` – Black-Scholes option valuation.
* :mod:`indicators` – Per-symbol simple moving average window.
* :mod:`models` – Dataclasses for samples, options, positions and fills.
* :mod:`portfolio` – Cash balance and per-symbol positions.
* :mod:`settlement` – End-of-day liquidation.
* :mod:`strategies` – Package containing base and concrete strategies.
* :mod:`data_loader` – Random-walk and CSV price feeds.

The command line entry point is ``backtest.py``.
"""


"""
python3 -m backtest --seed 7 --ticks 72 --debug
"""
