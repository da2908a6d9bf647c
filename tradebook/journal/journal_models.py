"""
Journal Data Models — canonical trades and derived aggregates
=============================================================

Trade             — immutable canonical record built by the normalizer
AnalyticsConfig   — starting capital, date range, tag catalogs, ruin settings
Derived results   — summary, equity points, drawdown, streaks, buckets, recaps, projections

Percentages are carried as ``Rate``: a float holding a fraction in [0, 1].
``Rate.percent`` gives the 0-100 value for display. Unbounded ratios hold
``UNBOUNDED`` (float inf) and serialize as the string "inf".
"""

from __future__ import annotations
import uuid
from dataclasses import dataclass, field, asdict
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from tradebook.utils.exceptions import ConfigError


UNBOUNDED = float("inf")
UNBOUNDED_LABEL = "inf"


# ── Enums ────────────────────────────────────────────────────

class Outcome(str, Enum):
    TARGET = "target"
    STOP_LOSS = "stop_loss"
    BREAKEVEN = "breakeven"
    PARTIAL = "partial"
    PENDING = "pending"


class Direction(str, Enum):
    LONG = "long"
    SHORT = "short"


class StreakType(str, Enum):
    WIN = "win"
    LOSS = "loss"
    NONE = "none"


class Rate(float):
    """A fraction in [0, 1]. Use ``percent`` for the 0-100 display value."""

    @classmethod
    def of(cls, part: float, whole: float) -> "Rate":
        return cls(part / whole) if whole else cls(0.0)

    @property
    def percent(self) -> float:
        return float(self) * 100

    def __repr__(self) -> str:
        return f"Rate({float(self)!r})"


def to_jsonable(value: Any) -> Any:
    """Convert dataclass dumps into plain JSON-safe structures."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, float):
        if value == UNBOUNDED:
            return UNBOUNDED_LABEL
        return float(value)
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (frozenset, set)):
        return sorted(to_jsonable(v) for v in value)
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CANONICAL TRADE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class Trade:
    """
    One journaled trade. Built once by the normalizer and never mutated;
    every analytics module treats a list of these as read-only input.
    """
    entry_date: date
    id: str = field(default_factory=lambda: str(uuid.uuid4())[:12])
    entry_time: Optional[time] = None
    exit_date: Optional[date] = None          # set together with exit_time
    exit_time: Optional[time] = None
    instrument: str = ""                      # e.g. "EURUSD"
    direction: Direction = Direction.LONG

    # ── Plan ──
    target_price: float = 0.0
    stop_loss_price: float = 0.0
    stop_loss_pips: Optional[float] = None
    take_profit_pips: Optional[float] = None
    risk_reward_ratio: Optional[float] = None

    # ── Outcome ──
    outcome: Outcome = Outcome.PENDING
    realized_pnl: float = 0.0                 # account currency, authoritative

    # ── Review ──
    emotion: Optional[str] = None
    confluences_for: frozenset = frozenset()
    confluences_against: frozenset = frozenset()
    attachments: Tuple[str, ...] = ()
    notes: str = ""

    @property
    def is_closed(self) -> bool:
        return self.exit_date is not None and self.exit_time is not None

    @property
    def entry_datetime(self) -> datetime:
        return datetime.combine(self.entry_date, self.entry_time or time.min)

    @property
    def exit_datetime(self) -> Optional[datetime]:
        if not self.is_closed:
            return None
        return datetime.combine(self.exit_date, self.exit_time)

    def to_dict(self) -> dict:
        return to_jsonable(asdict(self))


def trade_sort_key(trade: Trade) -> Tuple[date, time]:
    """Chronological key; a missing entry time sorts as midnight."""
    return (trade.entry_date, trade.entry_time or time.min)


def chronological(trades: Iterable[Trade]) -> List[Trade]:
    return sorted(trades, key=trade_sort_key)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CONFIGURATION
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class DateRange:
    """Inclusive entry-date window. Either end may be open."""
    start: Optional[date] = None
    end: Optional[date] = None

    def __post_init__(self):
        if self.start and self.end and self.start > self.end:
            raise ConfigError(f"Date range start {self.start} is after end {self.end}")

    def contains(self, day: date) -> bool:
        if self.start and day < self.start:
            return False
        if self.end and day > self.end:
            return False
        return True


@dataclass(frozen=True)
class AnalyticsConfig:
    initial_capital: float = 10000.0
    date_range: Optional[DateRange] = None

    # Tag catalogs; None derives the catalog from the trades themselves
    confluences_for: Optional[Tuple[str, ...]] = None
    confluences_against: Optional[Tuple[str, ...]] = None
    emotions: Optional[Tuple[str, ...]] = None

    # ── Risk of ruin ──
    ruin_fraction: float = 1.0
    ruin_simulations: int = 2000
    ruin_horizon: int = 500
    ruin_seed: Optional[int] = 42

    # ── Equity projection ──
    projection_trades: int = 100

    def __post_init__(self):
        if not 0 < self.ruin_fraction <= 1:
            raise ConfigError(f"ruin_fraction must be in (0, 1], got {self.ruin_fraction}")
        if self.ruin_simulations < 1:
            raise ConfigError(f"ruin_simulations must be positive, got {self.ruin_simulations}")
        if self.ruin_horizon < 1:
            raise ConfigError(f"ruin_horizon must be positive, got {self.ruin_horizon}")
        if self.projection_trades < 1:
            raise ConfigError(f"projection_trades must be positive, got {self.projection_trades}")

    @classmethod
    def from_settings(cls, settings, **overrides) -> "AnalyticsConfig":
        def _catalog(values: Optional[Sequence[str]]) -> Optional[Tuple[str, ...]]:
            return tuple(values) if values is not None else None

        params: Dict[str, Any] = dict(
            initial_capital=settings.initial_capital,
            confluences_for=_catalog(settings.confluences_for),
            confluences_against=_catalog(settings.confluences_against),
            emotions=_catalog(settings.emotions),
            ruin_fraction=settings.ruin_fraction,
            ruin_simulations=settings.ruin_simulations,
            ruin_horizon=settings.ruin_horizon,
            ruin_seed=settings.ruin_seed,
            projection_trades=settings.projection_trades,
        )
        params.update(overrides)
        return cls(**params)


@dataclass(frozen=True)
class Goal:
    """Monthly target, as set on the journal's goals page."""
    month: int
    year: int
    target_trades: int = 0
    target_win_rate: float = 0.0      # fraction
    target_profit: float = 0.0

    @classmethod
    def from_dict(cls, d: dict) -> "Goal":
        return cls(**{k: v for k, v in d.items() if k in cls.__dataclass_fields__})


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# DERIVED AGGREGATES
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class SummaryStats:
    total_trades: int = 0
    wins: int = 0
    losses: int = 0
    win_rate: Rate = Rate(0.0)
    profit_factor: float = 0.0        # UNBOUNDED when nothing was lost
    expectancy: float = 0.0
    risk_reward: float = 0.0
    avg_win: float = 0.0
    avg_loss: float = 0.0
    total_pnl: float = 0.0
    best_trade: float = 0.0
    worst_trade: float = 0.0

    def to_dict(self) -> dict:
        return to_jsonable(asdict(self))


@dataclass(frozen=True)
class EquityPoint:
    label: str
    equity: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class DrawdownStats:
    absolute: float = 0.0
    percent: Rate = Rate(0.0)
    peak: float = 0.0                 # equity high before the deepest trough
    trough: float = 0.0

    def to_dict(self) -> dict:
        return to_jsonable(asdict(self))


@dataclass(frozen=True)
class RiskAdjustedStats:
    sharpe: float = 0.0
    sortino: float = 0.0              # UNBOUNDED with no losing trades

    def to_dict(self) -> dict:
        return to_jsonable(asdict(self))


@dataclass(frozen=True)
class StreakState:
    current_streak: int = 0
    current_streak_type: StreakType = StreakType.NONE
    max_win_streak: int = 0
    max_loss_streak: int = 0

    def to_dict(self) -> dict:
        return to_jsonable(asdict(self))


@dataclass(frozen=True)
class BucketStat:
    key: int                          # weekday 0=Sun..6=Sat, or hour of day
    label: str
    count: int = 0
    wins: int = 0
    win_rate: Rate = Rate(0.0)

    def to_dict(self) -> dict:
        return to_jsonable(asdict(self))


@dataclass(frozen=True)
class TagStat:
    name: str
    count: int = 0
    wins: int = 0
    losses: int = 0
    win_rate: Rate = Rate(0.0)

    def to_dict(self) -> dict:
        return to_jsonable(asdict(self))


@dataclass(frozen=True)
class RuinEstimate:
    probability: Rate = Rate(0.0)
    method: str = "closed_form"       # "closed_form" / "monte_carlo"
    bankroll: float = 0.0
    ruin_level: float = 0.0           # equity at or below which the account is ruined
    edge_per_trade: float = 0.0
    simulations: int = 0
    horizon: int = 0

    def to_dict(self) -> dict:
        return to_jsonable(asdict(self))


@dataclass(frozen=True)
class HoldingTime:
    count: int = 0
    avg_seconds: float = 0.0
    label: str = "N/A"

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class InstrumentStat:
    instrument: str
    trades: int = 0
    wins: int = 0
    losses: int = 0
    pnl: float = 0.0
    win_rate: Rate = Rate(0.0)

    def to_dict(self) -> dict:
        return to_jsonable(asdict(self))


@dataclass(frozen=True)
class DirectionBreakdown:
    long_wins: int = 0
    long_losses: int = 0
    short_wins: int = 0
    short_losses: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class OutcomeCount:
    outcome: Outcome
    total: int = 0
    long: int = 0
    short: int = 0

    def to_dict(self) -> dict:
        return to_jsonable(asdict(self))


@dataclass(frozen=True)
class DailyPnL:
    day: date
    trades: int = 0
    pnl: float = 0.0

    def to_dict(self) -> dict:
        return to_jsonable(asdict(self))


@dataclass(frozen=True)
class GoalProgress:
    month: int
    year: int
    trades: int = 0
    win_rate: Rate = Rate(0.0)
    profit: float = 0.0
    trades_progress: float = 0.0      # achieved / target, 0 when target unset
    win_rate_progress: float = 0.0
    profit_progress: float = 0.0

    def to_dict(self) -> dict:
        return to_jsonable(asdict(self))


@dataclass(frozen=True)
class WeeklyRecap:
    week_start: date                  # ISO week, Monday
    week_end: date                    # Sunday
    trades: int = 0
    wins: int = 0
    losses: int = 0
    win_rate: Rate = Rate(0.0)
    pnl: float = 0.0
    best_day: Optional[date] = None
    worst_day: Optional[date] = None

    def to_dict(self) -> dict:
        return to_jsonable(asdict(self))


@dataclass(frozen=True)
class ProjectionPoint:
    step: int                         # trades ahead of today
    expected: float
    p5: float
    median: float
    p95: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class EquityProjection:
    start_equity: float = 0.0
    n_trades: int = 0
    expectancy: float = 0.0
    expected_final: float = 0.0
    simulations: int = 0
    points: Tuple[ProjectionPoint, ...] = ()

    def to_dict(self) -> dict:
        return to_jsonable(asdict(self))
