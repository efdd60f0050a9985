"""Binance spot REST client (klines only).

Klines are public market data, so no API key is sent. Transient failures
(418/429 rate limiting, 5xx, connection errors) are retried with exponential
backoff; any other 4xx fails immediately since retrying would not help.
"""

from __future__ import annotations

import asyncio
from typing import Any

import aiohttp

from coinchart.config import Settings, get_settings
from coinchart.errors import MarketDataError
from coinchart.utils import get_logger


class BinanceRestClient:
    """Async REST client for the Binance spot API."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.base_url = self.settings.binance_rest_url.rstrip("/")
        self.max_attempts = max(1, int(self.settings.rest_max_attempts))
        self.logger = get_logger("binance.rest")
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.settings.rest_timeout_sec)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def close(self) -> None:
        """Close the session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    @staticmethod
    def _backoff(attempt: int) -> float:
        return min(60.0, 2.0 ** attempt)

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make an API request with basic retry/backoff."""
        session = await self._get_session()
        url = f"{self.base_url}{endpoint}"

        for attempt in range(1, self.max_attempts + 1):
            try:
                async with session.request(method, url, params=params) as response:
                    if response.status in (418, 429):
                        retry_after = response.headers.get("Retry-After")
                        wait = 0.0
                        if retry_after:
                            try:
                                wait = float(retry_after)
                            except ValueError:
                                wait = 0.0
                        if wait <= 0:
                            wait = self._backoff(attempt)
                        self.logger.warning("rate_limited", status=response.status, wait_seconds=wait, attempt=attempt)
                        await asyncio.sleep(wait)
                        continue

                    if 500 <= response.status < 600:
                        wait = self._backoff(attempt)
                        self.logger.warning("server_error_retry", status=response.status, wait_seconds=wait, attempt=attempt)
                        await asyncio.sleep(wait)
                        continue

                    if response.status >= 400:
                        body = await response.text()
                        self.logger.error(
                            "request_failed",
                            endpoint=endpoint,
                            status=response.status,
                            params=params,
                            body=body[:2000],
                        )
                        raise MarketDataError(
                            f"Binance API error {response.status} for {endpoint}: {body[:2000]}"
                        )

                    return await response.json()

            except aiohttp.ClientError as e:
                wait = self._backoff(attempt)
                self.logger.warning("client_error_retry", endpoint=endpoint, error=str(e), attempt=attempt, wait_seconds=wait)
                await asyncio.sleep(wait)

        raise MarketDataError(f"Binance request failed after {self.max_attempts} attempts: {endpoint}")

    async def get_klines(self, symbol: str, interval: str, limit: int = 500) -> list[list[Any]]:
        """Get recent candles as ``[open_time_ms, open_price]`` pairs.

        Args:
            symbol: Trading pair symbol (e.g. BTCJPY)
            interval: Kline interval (1m, 5m, 30m, ...)
            limit: Number of klines (max 1000)

        The price stays the decimal string Binance sends; parsing happens in
        the window filter.
        """
        data = await self._request(
            "GET",
            "/api/v3/klines",
            {"symbol": symbol, "interval": interval, "limit": limit},
        )
        if not isinstance(data, list):
            raise MarketDataError(f"unexpected klines payload for {symbol}: {str(data)[:200]}")
        return [[item[0], item[1]] for item in data]


__all__ = ["BinanceRestClient"]
