"""
Risk-adjusted return over per-trade P&L.

Both ratios are per trade (not annualized) and use population statistics.
Sortino's downside deviation divides the squared losses by the full trade
count, matching the figures the journal dashboard has always shown.
"""

from __future__ import annotations
from typing import Iterable

import numpy as np

from tradebook.journal.journal_models import UNBOUNDED, RiskAdjustedStats, Trade


def _pnls(trades: Iterable[Trade]) -> np.ndarray:
    return np.array([t.realized_pnl for t in trades], dtype=float)


def sharpe(trades: Iterable[Trade]) -> float:
    pnl = _pnls(trades)
    if len(pnl) < 2:
        return 0.0
    std = float(np.std(pnl))
    if np.isclose(std, 0.0):
        return 0.0
    return float(np.mean(pnl)) / std


def sortino(trades: Iterable[Trade]) -> float:
    pnl = _pnls(trades)
    if len(pnl) < 2:
        return 0.0
    negative = pnl[pnl < 0]
    if len(negative) == 0:
        return UNBOUNDED
    downside = float(np.sqrt(np.sum(negative ** 2) / len(pnl)))
    return float(np.mean(pnl)) / downside


def risk_adjusted(trades: Iterable[Trade]) -> RiskAdjustedStats:
    trades = list(trades)
    return RiskAdjustedStats(sharpe=sharpe(trades), sortino=sortino(trades))
