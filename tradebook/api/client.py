from __future__ import annotations

import asyncio
from typing import Any, Optional

import aiohttp

from tradebook.journal.journal_models import Trade
from tradebook.journal.normalizer import normalize_trades
from tradebook.utils.config import Settings, get_settings
from tradebook.utils.exceptions import (
    AuthenticationError,
    DataError,
    JournalError,
    NetworkError,
)
from tradebook.utils.logger import get_logger

logger = get_logger(__name__)

SESSION_COOKIE = "session"


class JournalClient:
    """Reads raw trade records from the journal server."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            cookies = {}
            if self._settings.journal_session_cookie:
                cookies[SESSION_COOKIE] = self._settings.journal_session_cookie
            self._session = aiohttp.ClientSession(
                base_url=self._settings.journal_base_url,
                timeout=aiohttp.ClientTimeout(total=self._settings.request_timeout),
                cookies=cookies,
            )
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "JournalClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    async def _request(self, method: str, endpoint: str, params: Any = None) -> Any:
        settings = self._settings

        last_error: Optional[Exception] = None
        for attempt in range(settings.max_retries):
            try:
                session = await self._get_session()
                async with session.request(method, endpoint, params=params) as response:
                    if response.status in (401, 403):
                        logger.error("auth_failed", endpoint=endpoint, status=response.status)
                        raise AuthenticationError(
                            "Journal session expired or invalid", response.status
                        )

                    if response.status != 200:
                        text = await response.text()
                        raise NetworkError(text or "Request failed", response.status)

                    try:
                        return await response.json()
                    except (aiohttp.ContentTypeError, ValueError) as e:
                        raise DataError(f"Invalid JSON from {endpoint}: {e}", response.status)

            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_error = e
                wait_time = settings.retry_delay * (2 ** attempt)
                logger.warning(
                    "request_retry",
                    endpoint=endpoint,
                    attempt=attempt + 1,
                    error=str(e),
                )
                if attempt < settings.max_retries - 1:
                    await asyncio.sleep(wait_time)
            except JournalError:
                raise

        raise NetworkError(f"Request failed after {settings.max_retries} attempts: {last_error}")

    async def get_raw_trades(self) -> list[dict[str, Any]]:
        data = await self._request("GET", "/api/trades")
        if isinstance(data, dict) and "trades" in data:
            data = data["trades"]
        if not isinstance(data, list):
            raise DataError(f"Expected a list of trades, got {type(data).__name__}")
        return data

    async def get_trades(self) -> list[Trade]:
        return normalize_trades(await self.get_raw_trades())
