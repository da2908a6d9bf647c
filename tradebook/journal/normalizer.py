"""
Trade Record Normalizer
=======================

Turns raw persisted trade records into canonical ``Trade`` objects.

Raw records come from the journal server with decimal columns encoded as
strings, camelCase keys and a few legacy labels from the original form
("parziale", "non_fillato"). Normalization is total: bad numbers fall back
to 0 (or None for optional annotations) and never raise. A record without a
usable entry date cannot be placed on the timeline, so it is skipped.
"""

from __future__ import annotations
import math
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, List, Mapping, Optional

from tradebook.journal.journal_models import Direction, Outcome, Trade
from tradebook.utils.logger import get_logger

logger = get_logger(__name__)


# Canonical field → accepted raw keys, in lookup order
FIELD_ALIASES = {
    "id": ("id", "trade_id", "tradeId"),
    "entry_date": ("entry_date", "entryDate", "date"),
    "entry_time": ("entry_time", "entryTime", "time"),
    "exit_date": ("exit_date", "exitDate"),
    "exit_time": ("exit_time", "exitTime"),
    "instrument": ("instrument", "pair", "symbol"),
    "direction": ("direction",),
    "target_price": ("target_price", "targetPrice", "target"),
    "stop_loss_price": ("stop_loss_price", "stopLossPrice", "stopLoss", "stop_loss"),
    "stop_loss_pips": ("stop_loss_pips", "stopLossPips", "slPips", "sl_pips"),
    "take_profit_pips": ("take_profit_pips", "takeProfitPips", "tpPips", "tp_pips"),
    "risk_reward_ratio": ("risk_reward_ratio", "riskRewardRatio", "rr"),
    "outcome": ("outcome", "result"),
    "realized_pnl": ("realized_pnl", "realizedPnL", "realizedPnl", "pnl"),
    "emotion": ("emotion",),
    "confluences_for": ("confluences_for", "confluencesFor", "confluencesPro", "confluences_pro"),
    "confluences_against": ("confluences_against", "confluencesAgainst",
                            "confluencesContro", "confluences_contro"),
    "attachments": ("attachments", "imageUrls", "image_urls"),
    "notes": ("notes",),
}

OUTCOME_ALIASES = {
    "target": Outcome.TARGET,
    "tp": Outcome.TARGET,
    "stop_loss": Outcome.STOP_LOSS,
    "stoploss": Outcome.STOP_LOSS,
    "sl": Outcome.STOP_LOSS,
    "breakeven": Outcome.BREAKEVEN,
    "be": Outcome.BREAKEVEN,
    "partial": Outcome.PARTIAL,
    "parziale": Outcome.PARTIAL,
    "pending": Outcome.PENDING,
    "non_fillato": Outcome.PENDING,
}


def _lookup(raw: Mapping[str, Any], name: str) -> Any:
    for key in FIELD_ALIASES[name]:
        value = raw.get(key)
        if value is not None and value != "":
            return value
    return None


def to_float(value: Any, default: Optional[float] = 0.0) -> Optional[float]:
    """Parse ints, floats, Decimals and decimal strings; fall back to ``default``."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(Decimal(str(value).strip().replace(",", ".")))
        except (InvalidOperation, ValueError):
            return default
    return number if math.isfinite(number) else default


def parse_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def parse_time(value: Any) -> Optional[time]:
    if isinstance(value, time):
        return value
    if isinstance(value, datetime):
        return value.time()
    if not isinstance(value, str) or not value.strip():
        return None
    parts = value.strip().split(":")
    if len(parts) < 2:
        return None
    try:
        hour, minute = int(parts[0]), int(parts[1])
        second = int(float(parts[2])) if len(parts) > 2 else 0
        return time(hour, minute, second)
    except ValueError:
        return None


def parse_outcome(value: Any) -> Outcome:
    if isinstance(value, Outcome):
        return value
    key = str(value or "").strip().lower().replace(" ", "_").replace("-", "_")
    return OUTCOME_ALIASES.get(key, Outcome.PENDING)


def parse_direction(value: Any) -> Direction:
    if isinstance(value, Direction):
        return value
    key = str(value or "").strip().lower()
    if key in ("short", "sell"):
        return Direction.SHORT
    return Direction.LONG


def _as_list(value: Any) -> list:
    """A lone scalar (string, number, mapping) becomes a one-element list."""
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


def _tags(value: Any) -> frozenset:
    if not value:
        return frozenset()
    value = _as_list(value)
    return frozenset(str(v).strip() for v in value if str(v).strip())


def _strings(value: Any) -> tuple:
    if not value:
        return ()
    return tuple(str(v) for v in _as_list(value) if v)


def normalize_trade(raw: Mapping[str, Any]) -> Optional[Trade]:
    """
    Build a canonical Trade from one raw record.
    Returns None when the record has no parseable entry date.
    """
    entry_date = parse_date(_lookup(raw, "entry_date"))
    if entry_date is None:
        return None

    exit_date = parse_date(_lookup(raw, "exit_date"))
    exit_time = parse_time(_lookup(raw, "exit_time"))
    if exit_date is None or exit_time is None:
        exit_date, exit_time = None, None

    emotion = _lookup(raw, "emotion")
    kwargs = dict(
        entry_date=entry_date,
        entry_time=parse_time(_lookup(raw, "entry_time")),
        exit_date=exit_date,
        exit_time=exit_time,
        instrument=str(_lookup(raw, "instrument") or "").strip(),
        direction=parse_direction(_lookup(raw, "direction")),
        target_price=to_float(_lookup(raw, "target_price")),
        stop_loss_price=to_float(_lookup(raw, "stop_loss_price")),
        stop_loss_pips=to_float(_lookup(raw, "stop_loss_pips"), None),
        take_profit_pips=to_float(_lookup(raw, "take_profit_pips"), None),
        risk_reward_ratio=to_float(_lookup(raw, "risk_reward_ratio"), None),
        outcome=parse_outcome(_lookup(raw, "outcome")),
        realized_pnl=to_float(_lookup(raw, "realized_pnl")),
        emotion=str(emotion).strip() if emotion else None,
        confluences_for=_tags(_lookup(raw, "confluences_for")),
        confluences_against=_tags(_lookup(raw, "confluences_against")),
        attachments=_strings(_lookup(raw, "attachments")),
        notes=str(_lookup(raw, "notes") or ""),
    )
    trade_id = _lookup(raw, "id")
    if trade_id is not None:
        kwargs["id"] = str(trade_id)
    return Trade(**kwargs)


def normalize_trades(raws: Iterable[Mapping[str, Any]]) -> List[Trade]:
    """Normalize a batch, skipping records that cannot be dated."""
    trades: List[Trade] = []
    skipped = 0
    for raw in raws:
        if not isinstance(raw, Mapping):
            skipped += 1
            logger.warning("trade_skipped", reason="not_a_mapping", raw_type=type(raw).__name__)
            continue
        trade = normalize_trade(raw)
        if trade is None:
            skipped += 1
            logger.warning("trade_skipped", reason="missing_entry_date", trade_id=raw.get("id"))
            continue
        trades.append(trade)
    if skipped:
        logger.info("trades_normalized", kept=len(trades), skipped=skipped)
    return trades
