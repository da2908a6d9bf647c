"""
Shared fixtures and synthetic data generators for journal analytics tests.

Generates realistic journals: a few instruments, both directions, entry
times through the trading day, outcome mix driven by a configurable win
rate and P&L drawn around fixed average win / loss sizes.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Any

import numpy as np
import pytest

from tradebook.journal.journal_models import Direction, Outcome, Trade
from tradebook.utils import config
from tradebook.utils.config import reload_settings


# ─────────────────────────────────────────────────────────
# Trade factory
# ─────────────────────────────────────────────────────────

def make_trade(
    day: date | str = date(2024, 1, 1),
    outcome: Outcome | str = Outcome.TARGET,
    pnl: float = 100.0,
    at: time | str | None = None,
    **kwargs: Any,
) -> Trade:
    """Compact Trade constructor for hand-written scenarios."""
    if isinstance(day, str):
        day = date.fromisoformat(day)
    if isinstance(at, str):
        at = time.fromisoformat(at)
    return Trade(
        entry_date=day,
        entry_time=at,
        outcome=Outcome(outcome),
        realized_pnl=pnl,
        **kwargs,
    )


# ─────────────────────────────────────────────────────────
# Synthetic journal generator
# ─────────────────────────────────────────────────────────

INSTRUMENTS = ("EURUSD", "GBPUSD", "XAUUSD", "US30")
EMOTIONS = ("Neutral", "FOMO", "Confident", "Fear")
CONFLUENCES_FOR = ("Strong trend", "Key level", "High volume")
CONFLUENCES_AGAINST = ("Upcoming news", "Counter trend")


def generate_trades(
    n: int = 200,
    win_rate: float = 0.55,
    avg_win: float = 120.0,
    avg_loss: float = 80.0,
    seed: int = 42,
    start_date: date = date(2024, 1, 1),
) -> list[Trade]:
    """Generate a reproducible journal of ``n`` closed trades.

    Outcomes: target with probability ``win_rate``; the rest split between
    stop loss (80%), breakeven (10%) and partial (10%). Realized P&L is
    drawn from a normal around the average win / loss, sign matched to
    the outcome.
    """
    rng = np.random.default_rng(seed)
    trades = []
    day = start_date
    for i in range(n):
        day += timedelta(days=int(rng.integers(0, 2)))
        entry_at = time(int(rng.integers(6, 23)), int(rng.integers(0, 60)))

        u = rng.random()
        if u < win_rate:
            outcome = Outcome.TARGET
            pnl = abs(rng.normal(avg_win, avg_win * 0.2))
        else:
            v = rng.random()
            if v < 0.8:
                outcome = Outcome.STOP_LOSS
                pnl = -abs(rng.normal(avg_loss, avg_loss * 0.2))
            elif v < 0.9:
                outcome = Outcome.BREAKEVEN
                pnl = 0.0
            else:
                outcome = Outcome.PARTIAL
                pnl = abs(rng.normal(avg_win * 0.4, avg_win * 0.1))

        hold = timedelta(minutes=int(rng.integers(5, 600)))
        exit_dt = datetime.combine(day, entry_at) + hold

        trades.append(Trade(
            entry_date=day,
            entry_time=entry_at,
            exit_date=exit_dt.date(),
            exit_time=exit_dt.time(),
            id=f"syn-{i:04d}",
            instrument=str(rng.choice(INSTRUMENTS)),
            direction=Direction.LONG if rng.random() < 0.5 else Direction.SHORT,
            outcome=outcome,
            realized_pnl=round(float(pnl), 2),
            emotion=str(rng.choice(EMOTIONS)),
            confluences_for=frozenset(
                str(c) for c in rng.choice(CONFLUENCES_FOR, size=2, replace=False)
            ),
            confluences_against=frozenset({str(rng.choice(CONFLUENCES_AGAINST))}),
        ))
    return trades


# ─────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────

@pytest.fixture
def trade_factory():
    return make_trade


@pytest.fixture
def journal_generator():
    return generate_trades


@pytest.fixture
def equity_scenario() -> list[Trade]:
    """+100, -50, +30 on consecutive days from 1000 capital."""
    return [
        make_trade("2024-01-01", Outcome.TARGET, 100.0),
        make_trade("2024-01-02", Outcome.STOP_LOSS, -50.0),
        make_trade("2024-01-03", Outcome.TARGET, 30.0),
    ]


@pytest.fixture
def synthetic_trades() -> list[Trade]:
    return generate_trades()


@pytest.fixture
def raw_record() -> dict[str, Any]:
    """A journal server row: camelCase keys and decimal columns as strings."""
    return {
        "id": "a1b2c3",
        "entryDate": "2024-03-04",
        "entryTime": "09:30",
        "exitDate": "2024-03-04",
        "exitTime": "11:45:00",
        "instrument": "EURUSD",
        "direction": "short",
        "targetPrice": "1.08500",
        "stopLossPrice": "1.09100",
        "stopLossPips": "30",
        "takeProfitPips": "60",
        "riskRewardRatio": "2.00",
        "outcome": "target",
        "realizedPnL": "152.40",
        "emotion": "Confident",
        "confluencesFor": ["Strong trend", "Key level"],
        "confluencesAgainst": ["Upcoming news"],
        "attachments": ["https://img.example/1.png"],
        "notes": "clean breakdown",
    }


@pytest.fixture
def clean_settings(monkeypatch):
    """Settings rebuilt from defaults; the cache is reset afterwards."""
    for key in ("TRADEBOOK_INITIAL_CAPITAL", "TRADEBOOK_JOURNAL_BASE_URL",
                "TRADEBOOK_MAX_RETRIES", "TRADEBOOK_RETRY_DELAY"):
        monkeypatch.delenv(key, raising=False)
    settings = reload_settings()
    yield settings
    config._settings = None
