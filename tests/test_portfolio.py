"""Tests for portfolio.py - cash, share positions and option bookkeeping."""

import pytest

from models import OptionContract, OptionKind
from portfolio import Portfolio


def _call(strike):
    return OptionContract(strike=strike, premium=1.0, time_to_maturity=0.1, kind=OptionKind.CALL)


def _put(strike):
    return OptionContract(strike=strike, premium=1.0, time_to_maturity=0.1, kind=OptionKind.PUT)


class TestCash:
    def test_debit_and_credit(self):
        portfolio = Portfolio(1000.0)
        portfolio.debit(250.0)
        portfolio.credit(100.0)
        assert portfolio.cash == 850.0
        assert portfolio.profit_loss == -150.0

    def test_can_afford_boundary(self):
        portfolio = Portfolio(100.0)
        assert portfolio.can_afford(100.0)
        assert not portfolio.can_afford(100.01)

    def test_overdraft_rejected(self):
        portfolio = Portfolio(10.0)
        with pytest.raises(ValueError):
            portfolio.debit(10.5)
        assert portfolio.cash == 10.0


class TestOpenOrAdd:
    def test_weighted_average_cost(self):
        portfolio = Portfolio(0.0)
        fills = [(10, 100.0), (5, 110.0), (20, 95.5), (1, 120.25)]
        for qty, price in fills:
            portfolio.open_or_add("X", qty, price)
        pos = portfolio.position("X")
        assert pos.shares == sum(q for q, _ in fills)
        expected = sum(q * p for q, p in fills) / sum(q for q, _ in fills)
        assert pos.avg_cost == pytest.approx(expected)

    def test_rejects_non_positive_quantity(self):
        portfolio = Portfolio(0.0)
        with pytest.raises(ValueError):
            portfolio.open_or_add("X", 0, 100.0)

    def test_average_restarts_after_close(self):
        portfolio = Portfolio(0.0)
        portfolio.open_or_add("X", 10, 100.0)
        portfolio.close_all("X")
        portfolio.open_or_add("X", 4, 80.0)
        assert portfolio.position("X").avg_cost == pytest.approx(80.0)


class TestCloseAll:
    def test_returns_quantity_and_resets(self):
        portfolio = Portfolio(0.0)
        portfolio.open_or_add("X", 7, 50.0)
        assert portfolio.close_all("X") == 7
        pos = portfolio.position("X")
        assert pos.shares == 0
        assert pos.avg_cost == 0.0

    def test_nothing_held(self):
        portfolio = Portfolio(0.0)
        assert portfolio.close_all("X") == 0
        portfolio.open_or_add("X", 1, 10.0)
        portfolio.close_all("X")
        assert portfolio.close_all("X") == 0


class TestSweepOptions:
    def test_exercised_contracts_removed_with_payout(self):
        portfolio = Portfolio(0.0)
        portfolio.add_option("X", _call(105.0))
        portfolio.add_option("X", _put(95.0))
        swept = portfolio.sweep_options("X", 110.0)
        assert [(c.kind, payout) for c, payout in swept] == [(OptionKind.CALL, 5.0)]
        remaining = portfolio.position("X").options
        assert [c.kind for c in remaining] == [OptionKind.PUT]

    def test_put_payout(self):
        portfolio = Portfolio(0.0)
        portfolio.add_option("X", _put(95.0))
        swept = portfolio.sweep_options("X", 90.0)
        assert swept[0][1] == pytest.approx(5.0)

    def test_strike_equal_to_price_is_not_exercised(self):
        portfolio = Portfolio(0.0)
        portfolio.add_option("X", _call(100.0))
        portfolio.add_option("X", _put(100.0))
        assert portfolio.sweep_options("X", 100.0) == []
        assert len(portfolio.position("X").options) == 2

    def test_idempotent(self):
        portfolio = Portfolio(0.0)
        portfolio.add_option("X", _call(105.0))
        portfolio.add_option("X", _call(120.0))
        assert len(portfolio.sweep_options("X", 110.0)) == 1
        assert portfolio.sweep_options("X", 110.0) == []
        assert len(portfolio.position("X").options) == 1

    def test_does_not_move_cash(self):
        portfolio = Portfolio(500.0)
        portfolio.add_option("X", _call(105.0))
        portfolio.sweep_options("X", 110.0)
        assert portfolio.cash == 500.0

    def test_unknown_symbol(self):
        assert Portfolio(0.0).sweep_options("X", 10.0) == []


class TestSnapshot:
    def test_reports_holdings(self):
        portfolio = Portfolio(1000.0)
        portfolio.open_or_add("A", 3, 10.0)
        portfolio.add_option("A", _call(11.0))
        portfolio.position("B")
        snap = portfolio.snapshot()
        assert snap.cash == 1000.0
        assert snap.holdings["A"].shares == 3
        assert snap.holdings["A"].avg_cost == pytest.approx(10.0)
        assert snap.holdings["A"].open_options == 1
        assert snap.held_symbols() == ["A"]

    def test_snapshot_is_detached(self):
        portfolio = Portfolio(1000.0)
        portfolio.open_or_add("A", 3, 10.0)
        snap = portfolio.snapshot()
        portfolio.close_all("A")
        portfolio.credit(30.0)
        assert snap.holdings["A"].shares == 3
        assert snap.cash == 1000.0

    def test_record_appends_fill(self):
        portfolio = Portfolio(0.0)
        fill = portfolio.record(4, "A", "BUY", 2, 9.9, -19.8)
        assert portfolio.trade_log == [fill]
        assert fill.tick == 4
