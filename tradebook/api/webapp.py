from __future__ import annotations

from datetime import date
from typing import Any, AsyncIterator, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from tradebook import __version__
from tradebook.api.client import JournalClient
from tradebook.api.schemas import AnalyticsRequest
from tradebook.journal.journal_analytics import JournalAnalytics
from tradebook.journal.journal_models import AnalyticsConfig, DateRange
from tradebook.journal.normalizer import normalize_trades
from tradebook.utils.config import Settings, get_settings
from tradebook.utils.exceptions import ErrorCategory, JournalError
from tradebook.utils.logger import get_logger

logger = get_logger(__name__)

app = FastAPI(title="Trade Journal Analytics", version=__version__)

ERROR_STATUS = {
    ErrorCategory.CONFIG: 400,
    ErrorCategory.AUTHENTICATION: 401,
    ErrorCategory.NETWORK: 502,
    ErrorCategory.DATA: 502,
}


async def get_journal_client() -> AsyncIterator[JournalClient]:
    client = JournalClient()
    try:
        yield client
    finally:
        await client.close()


@app.exception_handler(JournalError)
async def journal_error_handler(request: Request, exc: JournalError) -> JSONResponse:
    status = ERROR_STATUS.get(exc.category, 500)
    logger.error("request_failed", path=request.url.path, category=exc.category.value,
                 error=exc.message)
    return JSONResponse({"error": exc.message, "category": exc.category.value},
                        status_code=status)


@app.get("/api/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/api/analytics")
async def analytics_from_body(
    body: AnalyticsRequest, settings: Settings = Depends(get_settings)
) -> dict[str, Any]:
    config = body.to_config(settings)
    trades = normalize_trades(body.trades)
    goals = [g.to_goal() for g in body.goals]
    return JournalAnalytics(trades, config).compute_full_analytics(goals, week_of=body.week_of)


@app.get("/api/analytics")
async def analytics_from_journal(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    week_of: Optional[date] = None,
    client: JournalClient = Depends(get_journal_client),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    date_range = DateRange(start_date, end_date) if start_date or end_date else None
    config = AnalyticsConfig.from_settings(settings, date_range=date_range)
    trades = await client.get_trades()
    logger.info("journal_trades_fetched", count=len(trades))
    return JournalAnalytics(trades, config).compute_full_analytics(week_of=week_of)
