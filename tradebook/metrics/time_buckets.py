"""Win rate by weekday and by hour of entry."""

from __future__ import annotations
from collections import defaultdict
from typing import Dict, Iterable, List

from tradebook.journal.journal_models import BucketStat, Rate, Trade
from tradebook.metrics.streaks import WIN_OUTCOMES

WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
FIRST_HOUR = 6
LAST_HOUR = 22


def _finalize(key: int, label: str, counts: Dict[str, int]) -> BucketStat:
    return BucketStat(
        key=key,
        label=label,
        count=counts["count"],
        wins=counts["wins"],
        win_rate=Rate.of(counts["wins"], counts["count"]),
    )


def by_weekday(trades: Iterable[Trade]) -> List[BucketStat]:
    """Seven buckets keyed 0=Sunday .. 6=Saturday from the entry date."""
    buckets = defaultdict(lambda: {"count": 0, "wins": 0})
    for t in trades:
        day = (t.entry_date.weekday() + 1) % 7   # date.weekday() is Monday=0
        buckets[day]["count"] += 1
        if t.outcome in WIN_OUTCOMES:
            buckets[day]["wins"] += 1
    return [_finalize(d, WEEKDAY_LABELS[d], buckets[d]) for d in range(7)]


def by_hour(trades: Iterable[Trade]) -> List[BucketStat]:
    """One bucket per hour 06:00..22:00; trades outside the window are left out."""
    buckets = defaultdict(lambda: {"count": 0, "wins": 0})
    for t in trades:
        if t.entry_time is None:
            continue
        hour = t.entry_time.hour
        if not FIRST_HOUR <= hour <= LAST_HOUR:
            continue
        buckets[hour]["count"] += 1
        if t.outcome in WIN_OUTCOMES:
            buckets[hour]["wins"] += 1
    return [_finalize(h, f"{h:02d}:00", buckets[h]) for h in range(FIRST_HOUR, LAST_HOUR + 1)]
