"""
Confluence and emotion win rates.

A trade counts toward every tag it carries. The catalog of tags to report
comes from configuration; with no catalog it is derived from the trades in
order of first appearance. Tags outside an explicit catalog are ignored.
"""

from __future__ import annotations
from typing import Callable, Iterable, List, Optional, Sequence

from tradebook.journal.journal_models import Outcome, Rate, TagStat, Trade, chronological

TagSelector = Callable[[Trade], Iterable[str]]


def select_confluences_for(trade: Trade) -> Iterable[str]:
    return trade.confluences_for


def select_confluences_against(trade: Trade) -> Iterable[str]:
    return trade.confluences_against


def select_emotion(trade: Trade) -> Iterable[str]:
    return (trade.emotion,) if trade.emotion else ()


def observed_catalog(trades: Sequence[Trade], selector: TagSelector) -> List[str]:
    seen: List[str] = []
    for t in chronological(trades):
        for tag in sorted(selector(t)):
            if tag not in seen:
                seen.append(tag)
    return seen


def tag_stats(trades: Iterable[Trade], catalog: Optional[Sequence[str]],
              selector: TagSelector) -> List[TagStat]:
    trades = list(trades)
    names = list(catalog) if catalog is not None else observed_catalog(trades, selector)
    tag_sets = [(frozenset(selector(t)), t.outcome) for t in trades]

    stats = []
    for name in names:
        outcomes = [outcome for tags, outcome in tag_sets if name in tags]
        wins = sum(1 for o in outcomes if o == Outcome.TARGET)
        losses = sum(1 for o in outcomes if o == Outcome.STOP_LOSS)
        stats.append(TagStat(
            name=name,
            count=len(outcomes),
            wins=wins,
            losses=losses,
            win_rate=Rate.of(wins, len(outcomes)),
        ))
    return stats


def confluence_for_stats(trades: Iterable[Trade],
                         catalog: Optional[Sequence[str]] = None) -> List[TagStat]:
    return tag_stats(trades, catalog, select_confluences_for)


def confluence_against_stats(trades: Iterable[Trade],
                             catalog: Optional[Sequence[str]] = None) -> List[TagStat]:
    return tag_stats(trades, catalog, select_confluences_against)


def emotion_stats(trades: Iterable[Trade],
                  catalog: Optional[Sequence[str]] = None) -> List[TagStat]:
    return tag_stats(trades, catalog, select_emotion)
