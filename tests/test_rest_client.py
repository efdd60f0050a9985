"""Tests for the Binance klines client (no network)."""

from unittest.mock import AsyncMock

import aiohttp
import pytest

from coinchart.binance.rest_client import BinanceRestClient
from coinchart.config import Settings
from coinchart.errors import MarketDataError


class _FakeResponse:
    def __init__(self, status, payload=None, headers=None, body=""):
        self.status = status
        self.payload = payload
        self.headers = headers or {}
        self.body = body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def json(self):
        return self.payload

    async def text(self):
        return self.body


class _FakeSession:
    closed = False

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, params=None):
        self.calls.append((method, url, params))
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def _client(responses, max_attempts=3):
    client = BinanceRestClient(Settings(rest_max_attempts=max_attempts, binance_rest_url="https://example.test/"))
    client._backoff = lambda attempt: 0.0
    client._session = _FakeSession(responses)
    return client


KLINE_ROWS = [
    [1_704_067_200_000, "6500000.0", "6510000.0", "6490000.0", "6505000.0", "1.2", 1_704_067_259_999],
    [1_704_067_260_000, "6505000.0", "6520000.0", "6500000.0", "6515000.0", "0.8", 1_704_067_319_999],
]


@pytest.mark.asyncio
async def test_get_klines_returns_time_price_pairs():
    client = BinanceRestClient(Settings())
    client._request = AsyncMock(return_value=KLINE_ROWS)

    out = await client.get_klines("BTCJPY", "1m", 181)

    client._request.assert_awaited_once_with(
        "GET", "/api/v3/klines", {"symbol": "BTCJPY", "interval": "1m", "limit": 181}
    )
    assert out == [[1_704_067_200_000, "6500000.0"], [1_704_067_260_000, "6505000.0"]]


@pytest.mark.asyncio
async def test_get_klines_rejects_error_payload():
    client = BinanceRestClient(Settings())
    client._request = AsyncMock(return_value={"code": -1121, "msg": "Invalid symbol."})

    with pytest.raises(MarketDataError):
        await client.get_klines("NOPE", "1m", 10)


@pytest.mark.asyncio
async def test_request_retries_after_rate_limit():
    client = _client([
        _FakeResponse(429, headers={"Retry-After": "0"}),
        _FakeResponse(200, payload=KLINE_ROWS),
    ])

    data = await client._request("GET", "/api/v3/klines", {"symbol": "BTCJPY"})

    assert data == KLINE_ROWS
    assert len(client._session.calls) == 2
    assert client._session.calls[0][1] == "https://example.test/api/v3/klines"


@pytest.mark.asyncio
async def test_request_retries_connection_errors():
    client = _client([
        aiohttp.ClientConnectionError("reset"),
        _FakeResponse(200, payload=[]),
    ])

    assert await client._request("GET", "/api/v3/klines") == []


@pytest.mark.asyncio
async def test_request_fails_fast_on_client_error():
    client = _client([_FakeResponse(400, body='{"code":-1121}'), _FakeResponse(200, payload=[])])

    with pytest.raises(MarketDataError):
        await client._request("GET", "/api/v3/klines")

    assert len(client._session.calls) == 1


@pytest.mark.asyncio
async def test_request_gives_up_after_max_attempts():
    client = _client([_FakeResponse(503), _FakeResponse(502)], max_attempts=2)

    with pytest.raises(MarketDataError):
        await client._request("GET", "/api/v3/klines")

    assert len(client._session.calls) == 2


@pytest.mark.asyncio
async def test_close_is_idempotent():
    client = BinanceRestClient(Settings())
    await client.close()
    assert client._session is None
