"""
Equity curve and drawdown
=========================

The curve is a restartable lazy sequence: iterating it re-walks the trades
in chronological order, starting from a synthetic "start" point at the
initial capital. The drawdown scan consumes the same curve.
"""

from __future__ import annotations
from typing import Iterable, Iterator, List

from tradebook.journal.journal_models import (
    DrawdownStats, EquityPoint, Rate, Trade, chronological,
)

START_LABEL = "start"


class EquityCurve:
    """Running balance, one point per trade plus the starting anchor."""

    def __init__(self, trades: Iterable[Trade], initial_capital: float = 0.0):
        self._trades = chronological(trades)
        self._initial_capital = float(initial_capital)

    @property
    def initial_capital(self) -> float:
        return self._initial_capital

    @property
    def final_equity(self) -> float:
        return self._initial_capital + sum(t.realized_pnl for t in self._trades)

    def __iter__(self) -> Iterator[EquityPoint]:
        equity = self._initial_capital
        yield EquityPoint(START_LABEL, equity)
        for trade in self._trades:
            equity += trade.realized_pnl
            yield EquityPoint(trade.entry_date.isoformat()[5:], equity)

    def __len__(self) -> int:
        return len(self._trades) + 1

    def points(self) -> List[EquityPoint]:
        return list(self)

    def values(self) -> List[float]:
        return [p.equity for p in self]

    def to_list(self) -> List[dict]:
        return [p.to_dict() for p in self]


def build_curve(trades: Iterable[Trade], initial_capital: float) -> EquityCurve:
    return EquityCurve(trades, initial_capital)


def drawdown_from_curve(curve: EquityCurve) -> DrawdownStats:
    """Single-pass peak-tracking scan over the curve."""
    peak = curve.initial_capital
    max_dd = 0.0
    dd_peak = dd_trough = peak
    for point in curve:
        peak = max(peak, point.equity)
        drawdown = peak - point.equity
        if drawdown > max_dd:
            max_dd = drawdown
            dd_peak, dd_trough = peak, point.equity

    total_pnl = curve.final_equity - curve.initial_capital
    denominator = max(peak, abs(total_pnl))
    return DrawdownStats(
        absolute=max_dd,
        percent=Rate.of(max_dd, denominator),
        peak=dd_peak,
        trough=dd_trough,
    )


def max_drawdown(trades: Iterable[Trade], initial_capital: float = 0.0) -> DrawdownStats:
    """
    Maximum peak-to-trough decline.

    With the default start of 0 this is a plain cumulative P&L walk; pass the
    account's starting capital to measure the percentage against real equity.
    """
    return drawdown_from_curve(EquityCurve(trades, initial_capital))
