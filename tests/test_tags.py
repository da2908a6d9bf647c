"""Confluence and emotion win rates."""

from __future__ import annotations

import pytest

from tradebook.journal.journal_models import Outcome
from tradebook.metrics.tags import (
    confluence_against_stats,
    confluence_for_stats,
    emotion_stats,
)


@pytest.fixture
def tagged(trade_factory):
    return [
        trade_factory("2024-01-01", Outcome.TARGET, 100.0, emotion="Confident",
                      confluences_for=frozenset({"Key level", "Strong trend"})),
        trade_factory("2024-01-02", Outcome.STOP_LOSS, -50.0, emotion="FOMO",
                      confluences_for=frozenset({"Key level"}),
                      confluences_against=frozenset({"Upcoming news"})),
        trade_factory("2024-01-03", Outcome.BREAKEVEN, 0.0, emotion="Confident",
                      confluences_for=frozenset({"Strong trend"})),
    ]


class TestConfluences:

    def test_catalog_order_and_counts(self, tagged):
        stats = confluence_for_stats(tagged, ["Strong trend", "Key level", "High volume"])
        assert [s.name for s in stats] == ["Strong trend", "Key level", "High volume"]
        trend, level, volume = stats
        assert (trend.count, trend.wins, trend.losses) == (2, 1, 0)
        assert trend.win_rate == pytest.approx(0.5)
        assert (level.count, level.wins, level.losses) == (2, 1, 1)
        assert volume.count == 0 and volume.win_rate == 0.0

    def test_derived_catalog_in_first_appearance_order(self, tagged):
        stats = confluence_for_stats(tagged)
        assert [s.name for s in stats] == ["Key level", "Strong trend"]

    def test_tags_outside_catalog_ignored(self, tagged):
        stats = confluence_against_stats(tagged, ["Counter trend"])
        assert len(stats) == 1
        assert stats[0].count == 0

    def test_against(self, tagged):
        (news,) = confluence_against_stats(tagged)
        assert news.name == "Upcoming news"
        assert news.losses == 1 and news.win_rate == 0.0


class TestEmotions:

    def test_emotion_counts(self, tagged):
        stats = {s.name: s for s in emotion_stats(tagged)}
        assert stats["Confident"].count == 2
        assert stats["Confident"].wins == 1
        assert stats["FOMO"].losses == 1

    def test_untagged_trades_are_skipped(self, trade_factory):
        assert emotion_stats([trade_factory()]) == []
