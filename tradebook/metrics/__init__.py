"""
Pure metric functions over canonical trades.

  summary.py        — win rate, profit factor, expectancy, averages
  equity.py         — equity curve and max drawdown
  risk_adjusted.py  — Sharpe / Sortino
  streaks.py        — win/loss streaks
  time_buckets.py   — performance by weekday and hour
  tags.py           — confluence and emotion win rates
  ruin.py           — risk of ruin
  breakdowns.py     — holding time, instrument, direction, outcome, daily, weekly, goals
  projection.py     — expected equity n trades ahead with percentile bands
"""
