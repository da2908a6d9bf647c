"""Consecutive win/loss streaks in chronological order."""

from __future__ import annotations
from typing import Iterable

from tradebook.journal.journal_models import (
    Outcome, StreakState, StreakType, Trade, chronological,
)

WIN_OUTCOMES = frozenset({Outcome.TARGET, Outcome.PARTIAL})


def classify(trade: Trade) -> StreakType:
    if trade.outcome in WIN_OUTCOMES:
        return StreakType.WIN
    if trade.outcome == Outcome.STOP_LOSS:
        return StreakType.LOSS
    return StreakType.NONE


def streaks(trades: Iterable[Trade]) -> StreakState:
    """
    Neutral trades (breakeven, pending) break both streaks without
    counting toward either. The current streak belongs to the last trade.
    """
    ordered = chronological(trades)
    if not ordered:
        return StreakState()

    max_win = max_loss = 0
    win_run = loss_run = 0
    for trade in ordered:
        kind = classify(trade)
        if kind == StreakType.WIN:
            win_run += 1
            loss_run = 0
            max_win = max(max_win, win_run)
        elif kind == StreakType.LOSS:
            loss_run += 1
            win_run = 0
            max_loss = max(max_loss, loss_run)
        else:
            win_run = loss_run = 0

    last = classify(ordered[-1])
    current = {StreakType.WIN: win_run, StreakType.LOSS: loss_run}.get(last, 0)
    return StreakState(
        current_streak=current,
        current_streak_type=last,
        max_win_streak=max_win,
        max_loss_streak=max_loss,
    )
