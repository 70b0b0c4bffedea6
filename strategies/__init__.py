"""
strategies
==========

This package contains the trading strategies driven by the session runner.

Classes
-------
* :class:`strategies.base.BaseStrategy` – Abstract base class.
* :class:`strategies.sma_hedge.SmaHedgeStrategy` – SMA entries/exits with call/put hedges.
"""

from .base import BaseStrategy  # noqa: F401
from .sma_hedge import SmaHedgeStrategy  # noqa: F401

__all__ = [
    "BaseStrategy",
    "SmaHedgeStrategy",
]
