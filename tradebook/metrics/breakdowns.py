"""
Dashboard breakdowns
====================

  - Average holding time of closed trades
  - Performance by instrument
  - Long vs short wins/losses
  - Outcome counts split by direction
  - Daily P&L for the calendar view
  - Weekly recap for the ISO week around a date
  - Progress toward a monthly goal
"""

from __future__ import annotations
from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, Iterable, List

from tradebook.journal.journal_models import (
    DailyPnL, Direction, DirectionBreakdown, Goal, GoalProgress, HoldingTime,
    InstrumentStat, Outcome, OutcomeCount, Rate, Trade, WeeklyRecap,
)


def _holding_label(avg_seconds: float) -> str:
    hours = int(avg_seconds // 3600)
    minutes = int((avg_seconds % 3600) // 60)
    if hours > 24:
        return f"{hours / 24:.1f}d"
    return f"{hours}h {minutes}m"


def average_holding_time(trades: Iterable[Trade]) -> HoldingTime:
    """Mean time in market over trades with full entry and exit timestamps."""
    durations = [
        (t.exit_datetime - t.entry_datetime).total_seconds()
        for t in trades
        if t.is_closed and t.entry_time is not None
    ]
    if not durations:
        return HoldingTime()
    avg = sum(durations) / len(durations)
    return HoldingTime(count=len(durations), avg_seconds=avg, label=_holding_label(avg))


def by_instrument(trades: Iterable[Trade]) -> List[InstrumentStat]:
    """Per-instrument totals, in order of first appearance."""
    rows: Dict[str, Dict[str, float]] = {}
    for t in trades:
        row = rows.setdefault(t.instrument, {"trades": 0, "wins": 0, "losses": 0, "pnl": 0.0})
        row["trades"] += 1
        row["pnl"] += t.realized_pnl
        if t.outcome == Outcome.TARGET:
            row["wins"] += 1
        elif t.outcome == Outcome.STOP_LOSS:
            row["losses"] += 1
    return [
        InstrumentStat(
            instrument=name,
            trades=int(row["trades"]),
            wins=int(row["wins"]),
            losses=int(row["losses"]),
            pnl=row["pnl"],
            win_rate=Rate.of(row["wins"], row["trades"]),
        )
        for name, row in rows.items()
    ]


def direction_breakdown(trades: Iterable[Trade]) -> DirectionBreakdown:
    counts = defaultdict(int)
    for t in trades:
        if t.outcome == Outcome.TARGET:
            counts[(t.direction, "wins")] += 1
        elif t.outcome == Outcome.STOP_LOSS:
            counts[(t.direction, "losses")] += 1
    return DirectionBreakdown(
        long_wins=counts[(Direction.LONG, "wins")],
        long_losses=counts[(Direction.LONG, "losses")],
        short_wins=counts[(Direction.SHORT, "wins")],
        short_losses=counts[(Direction.SHORT, "losses")],
    )


def outcome_breakdown(trades: Iterable[Trade]) -> List[OutcomeCount]:
    counts = defaultdict(lambda: {"long": 0, "short": 0})
    for t in trades:
        counts[t.outcome][t.direction.value] += 1
    return [
        OutcomeCount(
            outcome=outcome,
            total=counts[outcome]["long"] + counts[outcome]["short"],
            long=counts[outcome]["long"],
            short=counts[outcome]["short"],
        )
        for outcome in Outcome
    ]


def daily_pnl(trades: Iterable[Trade]) -> List[DailyPnL]:
    days = defaultdict(lambda: {"trades": 0, "pnl": 0.0})
    for t in trades:
        days[t.entry_date]["trades"] += 1
        days[t.entry_date]["pnl"] += t.realized_pnl
    return [
        DailyPnL(day=day, trades=v["trades"], pnl=v["pnl"])
        for day, v in sorted(days.items())
    ]


def weekly_recap(trades: Iterable[Trade], week_of: date) -> WeeklyRecap:
    """Totals for the Monday..Sunday week containing ``week_of``."""
    start = week_of - timedelta(days=week_of.weekday())
    end = start + timedelta(days=6)
    week = [t for t in trades if start <= t.entry_date <= end]
    if not week:
        return WeeklyRecap(week_start=start, week_end=end)

    wins = sum(1 for t in week if t.outcome == Outcome.TARGET)
    losses = sum(1 for t in week if t.outcome == Outcome.STOP_LOSS)
    days = daily_pnl(week)
    return WeeklyRecap(
        week_start=start,
        week_end=end,
        trades=len(week),
        wins=wins,
        losses=losses,
        win_rate=Rate.of(wins, len(week)),
        pnl=sum(t.realized_pnl for t in week),
        best_day=max(days, key=lambda d: d.pnl).day,
        worst_day=min(days, key=lambda d: d.pnl).day,
    )


def goal_progress(trades: Iterable[Trade], goal: Goal) -> GoalProgress:
    """Month-to-date results against the goal; progress is achieved / target."""
    month = [t for t in trades
             if t.entry_date.year == goal.year and t.entry_date.month == goal.month]
    wins = sum(1 for t in month if t.outcome == Outcome.TARGET)
    win_rate = Rate.of(wins, len(month))
    profit = sum(t.realized_pnl for t in month)

    def _progress(achieved: float, target: float) -> float:
        return achieved / target if target else 0.0

    return GoalProgress(
        month=goal.month,
        year=goal.year,
        trades=len(month),
        win_rate=win_rate,
        profit=profit,
        trades_progress=_progress(len(month), goal.target_trades),
        win_rate_progress=_progress(win_rate, goal.target_win_rate),
        profit_progress=_progress(profit, goal.target_profit),
    )
