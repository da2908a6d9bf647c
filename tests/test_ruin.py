"""Risk of ruin: closed form and Monte Carlo."""

from __future__ import annotations

import math

import pytest

from tradebook.journal.journal_models import AnalyticsConfig, Outcome, SummaryStats
from tradebook.metrics.ruin import (
    estimate_risk_of_ruin,
    resolved_win_rate,
    risk_of_ruin,
    simulate_paths,
    simulate_risk_of_ruin,
)


class TestClosedForm:

    def test_positive_edge(self):
        est = estimate_risk_of_ruin(0.6, 100.0, 100.0, 1000.0)
        mean = 0.6 * 100 - 0.4 * 100
        variance = 0.6 * 100 ** 2 + 0.4 * 100 ** 2 - mean ** 2
        assert est.probability == pytest.approx(math.exp(-2 * mean * 1000 / variance))
        assert est.edge_per_trade == pytest.approx(20.0)
        assert est.ruin_level == 0.0
        assert 0.0 < est.probability < 1.0

    def test_no_possible_loss(self):
        assert estimate_risk_of_ruin(1.0, 100.0, 50.0, 1000.0).probability == 0.0
        assert estimate_risk_of_ruin(0.5, 100.0, 0.0, 1000.0).probability == 0.0

    def test_non_positive_edge_is_certain_ruin(self):
        assert estimate_risk_of_ruin(0.5, 100.0, 100.0, 1000.0).probability == 1.0
        assert estimate_risk_of_ruin(0.2, 100.0, 100.0, 1000.0).probability == 1.0

    def test_empty_bankroll(self):
        assert estimate_risk_of_ruin(0.9, 100.0, 10.0, 0.0).probability == 1.0

    def test_smaller_ruin_threshold_is_more_likely(self):
        full = estimate_risk_of_ruin(0.55, 100.0, 100.0, 2000.0, ruin_fraction=1.0)
        half = estimate_risk_of_ruin(0.55, 100.0, 100.0, 2000.0, ruin_fraction=0.5)
        assert half.probability > full.probability
        assert half.ruin_level == pytest.approx(1000.0)


class TestMonteCarlo:

    def test_reproducible_for_seed(self):
        a = simulate_risk_of_ruin(0.5, 100.0, 90.0, 500.0, seed=3, simulations=500, horizon=200)
        b = simulate_risk_of_ruin(0.5, 100.0, 90.0, 500.0, seed=3, simulations=500, horizon=200)
        assert a.probability == b.probability
        assert a.simulations == 500 and a.horizon == 200

    def test_bounds(self):
        est = simulate_risk_of_ruin(0.45, 100.0, 100.0, 300.0, seed=1)
        assert 0.0 <= est.probability <= 1.0
        assert est.method == "monte_carlo"

    def test_certain_win_never_ruins(self):
        est = simulate_risk_of_ruin(1.0, 50.0, 50.0, 100.0, seed=1, simulations=100, horizon=50)
        assert est.probability == 0.0

    def test_certain_loss_always_ruins(self):
        est = simulate_risk_of_ruin(0.0, 50.0, 50.0, 100.0, seed=1, simulations=100, horizon=50)
        assert est.probability == 1.0

    def test_compounding_never_reaches_zero(self):
        # Each loss takes 10% of current equity, so equity stays positive
        est = simulate_risk_of_ruin(0.0, 10.0, 10.0, 100.0, seed=1,
                                    simulations=50, horizon=20, compounding=True)
        assert est.probability == 0.0

    def test_agrees_with_closed_form_roughly(self):
        closed = estimate_risk_of_ruin(0.55, 100.0, 100.0, 500.0)
        mc = simulate_risk_of_ruin(0.55, 100.0, 100.0, 500.0, seed=42,
                                   simulations=2000, horizon=2000)
        assert mc.probability == pytest.approx(closed.probability, abs=0.1)


class TestFromJournal:

    def test_uses_final_equity_as_bankroll(self, equity_scenario):
        config = AnalyticsConfig(initial_capital=1000.0, ruin_simulations=100, ruin_horizon=50)
        result = risk_of_ruin(equity_scenario, 1000.0, config)
        assert set(result) == {"closed_form", "monte_carlo"}
        assert result["closed_form"].bankroll == pytest.approx(1080.0)
        assert result["monte_carlo"].bankroll == pytest.approx(1080.0)

    def test_no_losses_in_journal(self, trade_factory):
        trades = [trade_factory(outcome=Outcome.TARGET, pnl=50.0)]
        result = risk_of_ruin(trades, 1000.0)
        assert result["closed_form"].probability == 0.0


class TestSimulatedPaths:

    def test_shape_and_start(self):
        paths = simulate_paths(0.5, 10.0, 10.0, 100.0, simulations=7, horizon=4, seed=0)
        assert paths.shape == (7, 4)
        assert set(paths[:, 0].tolist()) <= {90.0, 110.0}

    def test_fixed_stake_steps(self):
        paths = simulate_paths(1.0, 25.0, 10.0, 100.0, simulations=2, horizon=3, seed=0)
        assert paths.tolist() == [[125.0, 150.0, 175.0]] * 2


class TestResolvedWinRate:
    """Pending and breakeven rows never resolved, so they carry no ruin risk."""

    def test_counts_only_wins_and_losses(self):
        summary = SummaryStats(total_trades=6, wins=2, losses=1, win_rate=2 / 6)
        assert resolved_win_rate(summary) == pytest.approx(2 / 3)

    def test_no_resolved_trades(self):
        assert resolved_win_rate(SummaryStats(total_trades=3)) == 0.0

    @pytest.mark.parametrize("neutral", [Outcome.PENDING, Outcome.BREAKEVEN])
    def test_neutral_rows_leave_estimate_unchanged(self, equity_scenario, trade_factory, neutral):
        config = AnalyticsConfig(initial_capital=1000.0, ruin_simulations=200,
                                 ruin_horizon=100, ruin_seed=9)
        padded = equity_scenario + [trade_factory("2024-01-04", neutral, 0.0)] * 5
        base = risk_of_ruin(equity_scenario, 1000.0, config)
        diluted = risk_of_ruin(padded, 1000.0, config)
        assert diluted["closed_form"].probability == pytest.approx(base["closed_form"].probability)
        assert diluted["closed_form"].edge_per_trade == pytest.approx(
            base["closed_form"].edge_per_trade)
        assert diluted["monte_carlo"].probability == base["monte_carlo"].probability
