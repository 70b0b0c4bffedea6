"""Tests for pricing.py - Black-Scholes valuation and the normal CDF."""

import math

import numpy as np
import pytest

from models import OptionKind
from pricing import call_price, norm_cdf, option_value, put_price


class TestNormCdf:
    def test_half_at_zero(self):
        assert norm_cdf(0.0) == 0.5

    def test_monotone_on_grid(self):
        values = [norm_cdf(x) for x in np.linspace(-8, 8, 401)]
        assert all(b >= a for a, b in zip(values, values[1:]))

    def test_symmetry(self):
        for x in (0.1, 0.5, 1.0, 2.5):
            assert norm_cdf(x) + norm_cdf(-x) == pytest.approx(1.0)

    def test_tails(self):
        assert norm_cdf(-10) == pytest.approx(0.0, abs=1e-12)
        assert norm_cdf(10) == pytest.approx(1.0)


class TestZeroVolatility:
    @pytest.mark.parametrize("spot,strike", [(100.0, 90.0), (90.0, 100.0), (100.0, 100.0)])
    def test_intrinsic_value(self, spot, strike):
        """Zero volatility returns intrinsic value exactly."""
        assert option_value(OptionKind.CALL, spot, strike, 0.1, 0.01, 0.0) == max(0.0, spot - strike)
        assert option_value(OptionKind.PUT, spot, strike, 0.1, 0.01, 0.0) == max(0.0, strike - spot)


class TestBlackScholes:
    def test_reference_values(self):
        """Textbook case: S=K=100, T=1, r=5%, sigma=20%."""
        assert call_price(100, 100, 1.0, 0.05, 0.2) == pytest.approx(10.4506, abs=1e-4)
        assert put_price(100, 100, 1.0, 0.05, 0.2) == pytest.approx(5.5735, abs=1e-4)

    def test_put_call_parity(self):
        spot, strike, maturity, rate, vol = 90.0, 94.5, 0.1, 0.01, 0.2
        call = call_price(spot, strike, maturity, rate, vol)
        put = put_price(spot, strike, maturity, rate, vol)
        assert call - put == pytest.approx(spot - strike * math.exp(-rate * maturity))

    def test_hedge_premiums_positive_and_below_spot(self):
        """OTM hedges used by the strategy cost something but far less than the share."""
        call = call_price(100.0, 105.0, 0.1, 0.01, 0.2)
        put = put_price(100.0, 95.0, 0.1, 0.01, 0.2)
        assert 0 < call < 5
        assert 0 < put < 5

    def test_call_increases_with_volatility(self):
        low = call_price(100.0, 105.0, 0.1, 0.01, 0.1)
        high = call_price(100.0, 105.0, 0.1, 0.01, 0.4)
        assert high > low

    def test_option_value_dispatches_on_kind(self):
        args = (100.0, 95.0, 0.5, 0.02, 0.3)
        assert option_value(OptionKind.CALL, *args) == call_price(*args)
        assert option_value(OptionKind.PUT, *args) == put_price(*args)
