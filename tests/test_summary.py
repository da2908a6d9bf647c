"""Aggregate statistics: win rate, profit factor, expectancy, averages."""

from __future__ import annotations

import pytest

from tradebook.journal.journal_models import UNBOUNDED, Outcome, SummaryStats
from tradebook.metrics.summary import compute_summary


class TestComputeSummary:

    def test_empty_journal_is_all_zero(self):
        assert compute_summary([]) == SummaryStats()

    def test_mixed_journal(self, trade_factory):
        trades = [
            trade_factory("2024-01-01", Outcome.TARGET, 200.0),
            trade_factory("2024-01-02", Outcome.TARGET, 100.0),
            trade_factory("2024-01-03", Outcome.STOP_LOSS, -100.0),
            trade_factory("2024-01-04", Outcome.BREAKEVEN, 0.0),
        ]
        s = compute_summary(trades)
        assert s.total_trades == 4
        assert s.wins == 2
        assert s.losses == 1
        assert s.win_rate == pytest.approx(0.5)
        assert s.win_rate.percent == pytest.approx(50.0)
        assert s.avg_win == pytest.approx(150.0)
        assert s.avg_loss == pytest.approx(100.0)
        assert s.profit_factor == pytest.approx(3.0)
        assert s.risk_reward == pytest.approx(1.5)
        assert s.expectancy == pytest.approx(0.5 * 150 - 0.5 * 100)
        assert s.total_pnl == pytest.approx(200.0)
        assert s.best_trade == pytest.approx(200.0)
        assert s.worst_trade == pytest.approx(-100.0)

    def test_no_losses_gives_unbounded_profit_factor(self, trade_factory):
        s = compute_summary([trade_factory(outcome=Outcome.TARGET, pnl=50.0)])
        assert s.profit_factor == UNBOUNDED
        assert s.risk_reward == 0.0
        assert s.to_dict()["profit_factor"] == "inf"

    def test_no_wins_and_no_losses(self, trade_factory):
        s = compute_summary([trade_factory(outcome=Outcome.PENDING, pnl=0.0)])
        assert s.profit_factor == 0.0
        assert s.win_rate == 0.0

    def test_magnitudes_are_absolute(self, trade_factory):
        # A stop loss booked with a positive sign still counts as a loss of 40
        s = compute_summary([
            trade_factory("2024-01-01", Outcome.TARGET, 80.0),
            trade_factory("2024-01-02", Outcome.STOP_LOSS, 40.0),
        ])
        assert s.avg_loss == pytest.approx(40.0)
        assert s.profit_factor == pytest.approx(2.0)

    def test_partial_is_neither_win_nor_loss(self, trade_factory):
        s = compute_summary([trade_factory(outcome=Outcome.PARTIAL, pnl=30.0)])
        assert s.wins == 0 and s.losses == 0
        assert s.total_pnl == pytest.approx(30.0)

    def test_bounds_on_synthetic_journal(self, synthetic_trades):
        s = compute_summary(synthetic_trades)
        assert 0.0 <= s.win_rate <= 1.0
        assert s.wins + s.losses <= s.total_trades
        assert s.worst_trade <= s.best_trade
        assert s.total_pnl == pytest.approx(sum(t.realized_pnl for t in synthetic_trades))
