"""
Trade Journal Analytics
=======================

Raw journal records in, dashboard statistics out.

Architecture:
  journal_models.py    — Trade, AnalyticsConfig and the result dataclasses
  normalizer.py        — raw dicts → canonical Trade records
  journal_analytics.py — JournalAnalytics facade over tradebook.metrics
                         (import it from its module; it depends on tradebook.metrics)
"""

from tradebook.journal.journal_models import (
    # Inputs
    Trade,
    Outcome,
    Direction,
    DateRange,
    AnalyticsConfig,
    Goal,
    # Results
    Rate,
    SummaryStats,
    EquityPoint,
    DrawdownStats,
    RiskAdjustedStats,
    StreakState,
    StreakType,
    BucketStat,
    TagStat,
    RuinEstimate,
    UNBOUNDED,
)

from tradebook.journal.normalizer import normalize_trade, normalize_trades

__all__ = [
    # Models
    "Trade", "Outcome", "Direction", "DateRange", "AnalyticsConfig", "Goal",
    "Rate", "SummaryStats", "EquityPoint", "DrawdownStats", "RiskAdjustedStats",
    "StreakState", "StreakType", "BucketStat", "TagStat", "RuinEstimate", "UNBOUNDED",
    # Engines
    "normalize_trade", "normalize_trades",
]
