"""
Risk of Ruin
============

Probability of losing a given share of the bankroll, under a simplified
model:
  - trades are independent
  - win probability p is the share of resolved trades (target vs stop loss)
    that hit target; pending and breakeven rows risk nothing and are left out
  - a win adds the average win, a loss subtracts the average loss
  - stake size is fixed; the Monte Carlo variant can instead scale each
    outcome with current equity (fixed stake fraction)

Two estimators:
  estimate_risk_of_ruin — closed form, diffusion approximation of gambler's
                          ruin over an unlimited horizon: exp(-2·μ·D / σ²)
  simulate_risk_of_ruin — Monte Carlo over a finite horizon
"""

from __future__ import annotations
import math
from typing import Dict, Iterable, Optional

import numpy as np

from tradebook.journal.journal_models import (
    AnalyticsConfig, Rate, RuinEstimate, SummaryStats, Trade,
)
from tradebook.metrics.equity import EquityCurve
from tradebook.metrics.summary import compute_summary


def resolved_win_rate(summary: SummaryStats) -> Rate:
    """Wins over wins + losses; trades that never resolved carry no risk."""
    return Rate.of(summary.wins, summary.wins + summary.losses)


def _moments(win_rate: float, avg_win: float, avg_loss: float):
    p = min(max(win_rate, 0.0), 1.0)
    q = 1.0 - p
    mean = p * avg_win - q * avg_loss
    variance = p * avg_win ** 2 + q * avg_loss ** 2 - mean ** 2
    return p, q, mean, max(variance, 0.0)


def simulate_paths(win_rate: float, avg_win: float, avg_loss: float,
                   start: float, simulations: int, horizon: int,
                   seed: Optional[int] = None, compounding: bool = False) -> np.ndarray:
    """
    Equity after each simulated trade, shape (simulations, horizon).
    With compounding each outcome is a fixed fraction of current equity,
    sized against ``start``.
    """
    avg_win, avg_loss = abs(avg_win), abs(avg_loss)
    p = min(max(win_rate, 0.0), 1.0)
    rng = np.random.default_rng(seed)
    wins = rng.random((simulations, horizon)) < p
    outcomes = np.where(wins, avg_win, -avg_loss)

    if compounding:
        factors = np.maximum(1.0 + outcomes / start, 0.0)
        return start * np.cumprod(factors, axis=1)
    return start + np.cumsum(outcomes, axis=1)


def estimate_risk_of_ruin(win_rate: float, avg_win: float, avg_loss: float,
                          bankroll: float, ruin_fraction: float = 1.0) -> RuinEstimate:
    avg_win, avg_loss = abs(avg_win), abs(avg_loss)
    p, q, mean, variance = _moments(win_rate, avg_win, avg_loss)
    distance = bankroll * ruin_fraction
    ruin_level = bankroll - distance

    if bankroll <= 0:
        probability = 1.0
    elif q == 0 or avg_loss == 0:
        probability = 0.0                 # nothing can be lost
    elif mean <= 0 or variance == 0:
        probability = 1.0
    else:
        probability = min(1.0, math.exp(-2.0 * mean * distance / variance))

    return RuinEstimate(
        probability=Rate(probability),
        method="closed_form",
        bankroll=bankroll,
        ruin_level=ruin_level,
        edge_per_trade=mean,
    )


def simulate_risk_of_ruin(win_rate: float, avg_win: float, avg_loss: float,
                          bankroll: float, ruin_fraction: float = 1.0,
                          simulations: int = 2000, horizon: int = 500,
                          seed: Optional[int] = None,
                          compounding: bool = False) -> RuinEstimate:
    """Share of simulated equity paths that touch the ruin level within ``horizon`` trades."""
    _, _, mean, _ = _moments(win_rate, abs(avg_win), abs(avg_loss))
    ruin_level = bankroll - bankroll * ruin_fraction

    base = dict(method="monte_carlo", bankroll=bankroll, ruin_level=ruin_level,
                edge_per_trade=mean, simulations=simulations, horizon=horizon)
    if bankroll <= 0:
        return RuinEstimate(probability=Rate(1.0), **base)

    paths = simulate_paths(win_rate, avg_win, avg_loss, bankroll,
                           simulations, horizon, seed=seed, compounding=compounding)
    ruined = np.any(paths <= ruin_level, axis=1)
    return RuinEstimate(probability=Rate(float(np.mean(ruined))), **base)


def risk_of_ruin(trades: Iterable[Trade], initial_capital: float,
                 config: Optional[AnalyticsConfig] = None) -> Dict[str, RuinEstimate]:
    """
    Both estimates from the journal itself: resolved win rate and average
    win/loss, with the equity curve's final balance as the bankroll.
    """
    config = config or AnalyticsConfig(initial_capital=initial_capital)
    trades = list(trades)
    summary = compute_summary(trades)
    win_rate = resolved_win_rate(summary)
    bankroll = EquityCurve(trades, initial_capital).final_equity

    return {
        "closed_form": estimate_risk_of_ruin(
            win_rate, summary.avg_win, summary.avg_loss,
            bankroll, config.ruin_fraction,
        ),
        "monte_carlo": simulate_risk_of_ruin(
            win_rate, summary.avg_win, summary.avg_loss,
            bankroll, config.ruin_fraction,
            simulations=config.ruin_simulations,
            horizon=config.ruin_horizon,
            seed=config.ruin_seed,
        ),
    }
