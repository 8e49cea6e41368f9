"""
Alpha Vantage commodity series client.

Returns the provider payload unchanged:
  {
    "name": "Crude Oil Prices: West Texas Intermediate (WTI)",
    "interval": "daily",
    "unit": "dollars per barrel",
    "data": [ {"date": "2025-01-06", "value": "74.25"}, ... ]   # newest first
  }

Notes / Pitfalls:
- Non-2xx, malformed JSON and rate-limit notices ({"Note": ...} / {"Information": ...})
  all mean "no data" -> None. Callers never see a half-parsed payload.
- Transport errors (connect, timeout) raise UpstreamError; the single-symbol
  routes surface them, the bulk fetch records them per symbol.
- No retries: one request per call.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from commodities_pulse import config
from commodities_pulse.errors import UpstreamError
from commodities_pulse.observability import UPSTREAM_CALLS, UPSTREAM_LATENCY
from commodities_pulse.utils import timer_s

logger = logging.getLogger(__name__)

# Keys the provider uses instead of "data" when it refuses a request
_NOTICE_KEYS = ("Note", "Information", "Error Message")


class AlphaVantageClient:
    def __init__(
        self,
        api_key: str | None = None,
        *,
        url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = config.ALPHA_VANTAGE_API_KEY if api_key is None else api_key
        self.url = url or config.PROVIDER_URL
        self._client = httpx.AsyncClient(
            timeout=config.HTTP_TIMEOUT_SEC if timeout is None else timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_series(self, function: str, interval: str) -> dict[str, Any] | None:
        """One provider call. Payload with a non-empty `data` list, else None."""
        params = {"function": function, "interval": interval, "apikey": self.api_key}
        try:
            with timer_s() as elapsed:
                r = await self._client.get(self.url, params=params)
            UPSTREAM_LATENCY.observe(elapsed())
            r.raise_for_status()
            payload = r.json()
        except httpx.HTTPStatusError as e:
            UPSTREAM_CALLS.labels(function=function, outcome="http_error").inc()
            logger.warning(
                "provider returned HTTP %s",
                e.response.status_code,
                extra={"function": function, "interval": interval, "outcome": "http_error"},
            )
            return None
        except httpx.RequestError as e:
            UPSTREAM_CALLS.labels(function=function, outcome="transport_error").inc()
            logger.warning(
                "provider unreachable: %s",
                e,
                extra={"function": function, "interval": interval, "outcome": "transport_error"},
            )
            raise UpstreamError(f"{function}: {type(e).__name__}: {e}") from e
        except ValueError:
            # json.JSONDecodeError
            UPSTREAM_CALLS.labels(function=function, outcome="bad_json").inc()
            logger.warning(
                "provider returned malformed JSON",
                extra={"function": function, "interval": interval, "outcome": "bad_json"},
            )
            return None

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, list) or not data:
            UPSTREAM_CALLS.labels(function=function, outcome="no_data").inc()
            notice = None
            if isinstance(payload, dict):
                notice = next((payload[k] for k in _NOTICE_KEYS if k in payload), None)
            logger.warning(
                "provider returned no data: %s",
                notice,
                extra={"function": function, "interval": interval, "outcome": "no_data"},
            )
            return None

        UPSTREAM_CALLS.labels(function=function, outcome="ok").inc()
        return payload
