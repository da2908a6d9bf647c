"""
Journal Analytics Engine — one pass over a trade list, every statistic
======================================================================

Computes the dashboard metrics from canonical trades:
  - Summary (win rate, profit factor, expectancy, risk/reward)
  - Equity curve and max drawdown
  - Sharpe / Sortino
  - Win/loss streaks
  - Performance by weekday and hour
  - Confluence and emotion win rates
  - Risk of ruin (closed form + Monte Carlo)
  - Holding time, instrument/direction/outcome breakdowns, daily P&L, goals
  - Weekly recap and equity projection

Trades are filtered by the configured date range and sorted once here; the
metric functions stay pure and can be called on their own.
"""

from __future__ import annotations
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence

from tradebook.journal.journal_models import (
    AnalyticsConfig, BucketStat, DailyPnL, DirectionBreakdown, DrawdownStats,
    EquityProjection, Goal, GoalProgress, HoldingTime, InstrumentStat,
    OutcomeCount, RiskAdjustedStats, RuinEstimate, StreakState, SummaryStats,
    TagStat, Trade, WeeklyRecap, chronological,
)
from tradebook.metrics import breakdowns
from tradebook.metrics.equity import EquityCurve, drawdown_from_curve
from tradebook.metrics.projection import project_equity
from tradebook.metrics.risk_adjusted import risk_adjusted
from tradebook.metrics.ruin import risk_of_ruin
from tradebook.metrics.streaks import streaks
from tradebook.metrics.summary import compute_summary
from tradebook.metrics.tags import (
    confluence_against_stats, confluence_for_stats, emotion_stats,
)
from tradebook.metrics.time_buckets import by_hour, by_weekday
from tradebook.utils.logger import get_logger

logger = get_logger(__name__)


class JournalAnalytics:
    """
    Analytics over one immutable trade list.
    Every call recomputes from the list; nothing is cached between calls.
    """

    def __init__(self, trades: Iterable[Trade], config: Optional[AnalyticsConfig] = None):
        self._config = config or AnalyticsConfig()
        date_range = self._config.date_range
        selected = [t for t in trades if date_range is None or date_range.contains(t.entry_date)]
        self._trades: List[Trade] = chronological(selected)

    @property
    def trades(self) -> List[Trade]:
        return list(self._trades)

    @property
    def config(self) -> AnalyticsConfig:
        return self._config

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # INDIVIDUAL METRICS
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def summary(self) -> SummaryStats:
        return compute_summary(self._trades)

    def equity_curve(self) -> EquityCurve:
        return EquityCurve(self._trades, self._config.initial_capital)

    def drawdown(self) -> DrawdownStats:
        return drawdown_from_curve(self.equity_curve())

    def risk_adjusted(self) -> RiskAdjustedStats:
        return risk_adjusted(self._trades)

    def streaks(self) -> StreakState:
        return streaks(self._trades)

    def by_weekday(self) -> List[BucketStat]:
        return by_weekday(self._trades)

    def by_hour(self) -> List[BucketStat]:
        return by_hour(self._trades)

    def confluences_for(self) -> List[TagStat]:
        return confluence_for_stats(self._trades, self._config.confluences_for)

    def confluences_against(self) -> List[TagStat]:
        return confluence_against_stats(self._trades, self._config.confluences_against)

    def emotions(self) -> List[TagStat]:
        return emotion_stats(self._trades, self._config.emotions)

    def risk_of_ruin(self) -> Dict[str, RuinEstimate]:
        return risk_of_ruin(self._trades, self._config.initial_capital, self._config)

    def holding_time(self) -> HoldingTime:
        return breakdowns.average_holding_time(self._trades)

    def by_instrument(self) -> List[InstrumentStat]:
        return breakdowns.by_instrument(self._trades)

    def direction_breakdown(self) -> DirectionBreakdown:
        return breakdowns.direction_breakdown(self._trades)

    def outcome_breakdown(self) -> List[OutcomeCount]:
        return breakdowns.outcome_breakdown(self._trades)

    def daily_pnl(self) -> List[DailyPnL]:
        return breakdowns.daily_pnl(self._trades)

    def goal_progress(self, goal: Goal) -> GoalProgress:
        return breakdowns.goal_progress(self._trades, goal)

    def weekly_recap(self, week_of: Optional[date] = None) -> WeeklyRecap:
        """Defaults to the week of the latest trade, or the current week."""
        if week_of is None:
            week_of = self._trades[-1].entry_date if self._trades else date.today()
        return breakdowns.weekly_recap(self._trades, week_of)

    def equity_projection(self, n_trades: Optional[int] = None) -> EquityProjection:
        return project_equity(
            self._trades, self._config.initial_capital,
            n_trades or self._config.projection_trades, self._config,
        )

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # FULL REPORT
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def compute_full_analytics(self, goals: Sequence[Goal] = (),
                               week_of: Optional[date] = None) -> Dict[str, Any]:
        """Every metric as plain JSON-safe dicts, ready to return from the API."""
        curve = self.equity_curve()
        result: Dict[str, Any] = {}
        result["total_trades"] = len(self._trades)
        result["initial_capital"] = self._config.initial_capital
        result["final_equity"] = curve.final_equity
        result["summary"] = self.summary().to_dict()
        result["equity_curve"] = curve.to_list()
        result["drawdown"] = drawdown_from_curve(curve).to_dict()
        result["risk_adjusted"] = self.risk_adjusted().to_dict()
        result["streaks"] = self.streaks().to_dict()
        result["by_weekday"] = [b.to_dict() for b in self.by_weekday()]
        result["by_hour"] = [b.to_dict() for b in self.by_hour()]
        result["confluences_for"] = [s.to_dict() for s in self.confluences_for()]
        result["confluences_against"] = [s.to_dict() for s in self.confluences_against()]
        result["emotions"] = [s.to_dict() for s in self.emotions()]
        result["risk_of_ruin"] = {k: v.to_dict() for k, v in self.risk_of_ruin().items()}
        result["holding_time"] = self.holding_time().to_dict()
        result["by_instrument"] = [s.to_dict() for s in self.by_instrument()]
        result["direction_breakdown"] = self.direction_breakdown().to_dict()
        result["outcome_breakdown"] = [o.to_dict() for o in self.outcome_breakdown()]
        result["daily_pnl"] = [d.to_dict() for d in self.daily_pnl()]
        result["goals"] = [self.goal_progress(g).to_dict() for g in goals]
        result["weekly_recap"] = self.weekly_recap(week_of).to_dict()
        result["equity_projection"] = self.equity_projection().to_dict()

        logger.debug("analytics_computed", total_trades=len(self._trades))
        return result
