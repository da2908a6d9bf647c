from __future__ import annotations

from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, Field

from tradebook.journal.journal_models import AnalyticsConfig, DateRange, Goal
from tradebook.utils.config import Settings


class GoalRequest(BaseModel):
    month: int = Field(ge=1, le=12)
    year: int
    target_trades: int = 0
    target_win_rate: float = Field(default=0.0, ge=0, le=1, description="Fraction, 0..1")
    target_profit: float = 0.0

    def to_goal(self) -> Goal:
        return Goal(**self.model_dump())


class AnalyticsRequest(BaseModel):
    trades: list[dict[str, Any]] = Field(default_factory=list)
    initial_capital: Optional[float] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    confluences_for: Optional[list[str]] = None
    confluences_against: Optional[list[str]] = None
    emotions: Optional[list[str]] = None
    goals: list[GoalRequest] = Field(default_factory=list)
    week_of: Optional[date] = None

    def to_config(self, settings: Settings) -> AnalyticsConfig:
        """Request fields override settings; unset fields fall back to them."""
        overrides: dict[str, Any] = {}
        if self.initial_capital is not None:
            overrides["initial_capital"] = self.initial_capital
        if self.start_date or self.end_date:
            overrides["date_range"] = DateRange(self.start_date, self.end_date)
        for name in ("confluences_for", "confluences_against", "emotions"):
            values = getattr(self, name)
            if values is not None:
                overrides[name] = tuple(values)
        return AnalyticsConfig.from_settings(settings, **overrides)
