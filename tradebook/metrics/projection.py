"""
Equity projection
=================

Where the account could be ``n`` trades from now, under the same model as
the risk-of-ruin estimator: independent trades, resolved win rate, average
win / loss, fixed stake. The expected line is ``equity + edge · k``; the
bands are the 5th / 50th / 95th percentiles of simulated paths.
"""

from __future__ import annotations
from typing import Iterable, Optional

import numpy as np

from tradebook.journal.journal_models import (
    AnalyticsConfig, EquityProjection, ProjectionPoint, Trade,
)
from tradebook.metrics.equity import EquityCurve
from tradebook.metrics.ruin import resolved_win_rate, simulate_paths
from tradebook.metrics.summary import compute_summary

BAND_PERCENTILES = (5, 50, 95)


def project_equity(trades: Iterable[Trade], initial_capital: float, n_trades: int = 100,
                   config: Optional[AnalyticsConfig] = None) -> EquityProjection:
    config = config or AnalyticsConfig(initial_capital=initial_capital)
    trades = list(trades)
    summary = compute_summary(trades)
    start = EquityCurve(trades, initial_capital).final_equity
    if n_trades < 1:
        return EquityProjection(start_equity=start)

    p = resolved_win_rate(summary)
    edge = p * summary.avg_win - (1 - p) * summary.avg_loss

    paths = simulate_paths(p, summary.avg_win, summary.avg_loss, start,
                           config.ruin_simulations, n_trades, seed=config.ruin_seed)
    low, mid, high = np.percentile(paths, BAND_PERCENTILES, axis=0)

    points = tuple(
        ProjectionPoint(
            step=k + 1,
            expected=start + edge * (k + 1),
            p5=float(low[k]),
            median=float(mid[k]),
            p95=float(high[k]),
        )
        for k in range(n_trades)
    )
    return EquityProjection(
        start_equity=start,
        n_trades=n_trades,
        expectancy=edge,
        expected_final=start + edge * n_trades,
        simulations=config.ruin_simulations,
        points=points,
    )
