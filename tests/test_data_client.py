"""Tests for the Alpha Vantage client: what counts as data, no data, and failure."""

import httpx
import pytest

from commodities_pulse.data_client import AlphaVantageClient
from commodities_pulse.errors import UpstreamError

WTI_PAYLOAD = {
    "name": "Crude Oil Prices: West Texas Intermediate (WTI)",
    "interval": "daily",
    "unit": "dollars per barrel",
    "data": [{"date": "2025-01-06", "value": "74.25"}, {"date": "2025-01-03", "value": "73.96"}],
}


def _client(handler) -> AlphaVantageClient:
    return AlphaVantageClient(
        api_key="test-key",
        url="https://provider.test/query",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_fetch_series_sends_function_interval_and_key():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        return httpx.Response(200, json=WTI_PAYLOAD)

    client = _client(handler)
    try:
        payload = await client.fetch_series("WTI", "daily")
    finally:
        await client.aclose()

    assert payload == WTI_PAYLOAD
    assert seen == {"function": "WTI", "interval": "daily", "apikey": "test-key"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": "boom"}),
        httpx.Response(429, text="slow down"),
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json={"Information": "API rate limit reached"}),
        httpx.Response(200, json={**WTI_PAYLOAD, "data": []}),
        httpx.Response(200, json=[1, 2, 3]),
        httpx.Response(200, json={**WTI_PAYLOAD, "data": {"date": "2025-01-06"}}),
        httpx.Response(200, json={**WTI_PAYLOAD, "data": "74.25"}),
    ],
)
async def test_fetch_series_treats_bad_responses_as_no_data(response):
    client = _client(lambda request: response)
    try:
        assert await client.fetch_series("WTI", "daily") is None
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_fetch_series_raises_on_transport_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)
    try:
        with pytest.raises(UpstreamError, match="WTI"):
            await client.fetch_series("WTI", "daily")
    finally:
        await client.aclose()
