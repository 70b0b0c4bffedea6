"""
pricing
=======

Closed-form valuation of European options used to size the protective
hedges opened alongside every share purchase.

* :func:`norm_cdf` - Cumulative standard normal distribution.
* :func:`option_value` - Black-Scholes value of a call or put.
* :func:`call_price` / :func:`put_price` - Convenience wrappers.
"""

from __future__ import annotations

import math

from scipy.stats import norm

from models import OptionKind

__all__ = ["norm_cdf", "option_value", "call_price", "put_price"]


def norm_cdf(x: float) -> float:
    """Return Phi(x), the standard normal cumulative distribution."""
    return float(norm.cdf(x))


def option_value(
    kind: OptionKind,
    spot: float,
    strike: float,
    maturity: float,
    rate: float,
    volatility: float,
) -> float:
    """Return the Black-Scholes value of a European option.

    Parameters
    ----------
    kind : OptionKind
        CALL or PUT.
    spot : float
        Current price of the underlying, must be positive.
    strike : float
        Strike price, must be positive.
    maturity : float
        Time to maturity in the same units as ``rate``, must be positive.
    rate : float
        Continuously compounded risk-free rate.
    volatility : float
        Annualised volatility of the underlying.

    Returns
    -------
    float
        Theoretical option value.  With zero volatility the intrinsic value
        is returned instead of evaluating the closed form.
    """
    if volatility == 0:
        if kind is OptionKind.CALL:
            return max(0.0, spot - strike)
        return max(0.0, strike - spot)

    vol_sqrt_t = volatility * math.sqrt(maturity)
    d1 = (math.log(spot / strike) + (rate + 0.5 * volatility * volatility) * maturity) / vol_sqrt_t
    d2 = d1 - vol_sqrt_t
    # Present value of the strike paid at expiry.
    discounted_strike = strike * math.exp(-rate * maturity)
    if kind is OptionKind.CALL:
        return spot * norm_cdf(d1) - discounted_strike * norm_cdf(d2)
    return discounted_strike * norm_cdf(-d2) - spot * norm_cdf(-d1)


def call_price(spot: float, strike: float, maturity: float, rate: float, volatility: float) -> float:
    return option_value(OptionKind.CALL, spot, strike, maturity, rate, volatility)


def put_price(spot: float, strike: float, maturity: float, rate: float, volatility: float) -> float:
    return option_value(OptionKind.PUT, spot, strike, maturity, rate, volatility)
