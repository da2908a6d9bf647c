"""Aggregate statistics: win rate, profit factor, expectancy, risk/reward."""

from __future__ import annotations
from typing import Iterable

from tradebook.journal.journal_models import UNBOUNDED, Outcome, Rate, SummaryStats, Trade


def compute_summary(trades: Iterable[Trade]) -> SummaryStats:
    """
    Core P&L metrics.

    Wins are trades that hit target, losses are trades stopped out; sizes
    are the absolute realized P&L of each set.
    """
    trades = list(trades)
    total = len(trades)
    if total == 0:
        return SummaryStats()

    wins = [abs(t.realized_pnl) for t in trades if t.outcome == Outcome.TARGET]
    losses = [abs(t.realized_pnl) for t in trades if t.outcome == Outcome.STOP_LOSS]

    total_profit = sum(wins)
    total_loss = sum(losses)

    win_rate = Rate.of(len(wins), total)
    avg_win = total_profit / len(wins) if wins else 0.0
    avg_loss = total_loss / len(losses) if losses else 0.0

    if total_loss > 0:
        profit_factor = total_profit / total_loss
    else:
        profit_factor = UNBOUNDED if total_profit > 0 else 0.0

    pnls = [t.realized_pnl for t in trades]
    return SummaryStats(
        total_trades=total,
        wins=len(wins),
        losses=len(losses),
        win_rate=win_rate,
        profit_factor=profit_factor,
        expectancy=(win_rate * avg_win) - ((1 - win_rate) * avg_loss),
        risk_reward=avg_win / avg_loss if avg_loss else 0.0,
        avg_win=avg_win,
        avg_loss=avg_loss,
        total_pnl=sum(pnls),
        best_trade=max(pnls),
        worst_trade=min(pnls),
    )
