"""
Fetch/transform layer: raw provider series -> the service's four views.

  get_latest   -> {name, price, unit, date, interval}
  get_all      -> {key: price view | {"error": msg}} for the whole catalog
  get_history  -> [{date, price}, ...] newest first, truncated to `limit`
  get_index    -> {name, value, unit, date} for the global commodity index
  get_analysis -> price + changes / moving averages / volatility / signals

Every function takes the provider client explicitly; nothing here holds state.
None means "unknown symbol or no data" and is never an error.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

import numpy as np
import pandas as pd

from commodities_pulse import config
from commodities_pulse.analytics import ANALYSIS_WINDOW, analyze
from commodities_pulse.catalog import COMMODITIES, COMMODITY_INFO, INDEX_FUNCTION, provider_function

logger = logging.getLogger(__name__)

NO_DATA = "No data available"


class SeriesProvider(Protocol):
    async def fetch_series(self, function: str, interval: str) -> dict[str, Any] | None: ...


def _is_scalar(value: Any) -> bool:
    return isinstance(value, str | int | float) and not isinstance(value, bool)


def series_frame(payload: dict[str, Any] | None) -> pd.DataFrame:
    """
    Provider payload -> DataFrame[date, price], newest first.
    Values are decimal strings; non-numeric ones (the provider sends "." for
    non-trading days) and non-finite ones are dropped rather than carried as NaN.
    A `data` field that is not a list of {date, value} objects yields an empty frame.
    """
    rows = (payload or {}).get("data")
    if not isinstance(rows, list):
        rows = []
    rows = [r for r in rows if isinstance(r, dict)]

    df = pd.DataFrame(rows, columns=["date", "value"])
    scalar = df["value"].map(_is_scalar).astype(bool)
    df["price"] = pd.to_numeric(df["value"].where(scalar), errors="coerce").astype(float)
    df = df[df["date"].notna() & np.isfinite(df["price"])].reset_index(drop=True)
    return df[["date", "price"]]


async def _fetch_frame(
    client: SeriesProvider, function: str, interval: str
) -> tuple[dict[str, Any], pd.DataFrame] | None:
    payload = await client.fetch_series(function, interval)
    if payload is None:
        return None
    df = series_frame(payload)
    if df.empty:
        return None
    return payload, df


async def get_latest(
    client: SeriesProvider, commodity: str, interval: str = "daily"
) -> dict[str, Any] | None:
    fn = provider_function(commodity)
    if not fn:
        return None

    fetched = await _fetch_frame(client, fn, interval)
    if fetched is None:
        return None
    payload, df = fetched

    latest = df.iloc[0]
    return {
        "name": payload.get("name"),
        "price": float(latest["price"]),
        "unit": payload.get("unit"),
        "date": str(latest["date"]),
        "interval": payload.get("interval", interval),
    }


async def get_all(
    client: SeriesProvider, interval: str = "daily", *, delay_s: float | None = None
) -> dict[str, dict[str, Any]]:
    """
    Latest price for every catalog symbol, one provider call at a time.
    A failing symbol gets {"error": ...} and the batch carries on.
    """
    delay = config.BATCH_DELAY_SEC if delay_s is None else delay_s
    results: dict[str, dict[str, Any]] = {}

    for i, commodity in enumerate(COMMODITIES):
        if i and delay > 0:
            await asyncio.sleep(delay)
        try:
            data = await get_latest(client, commodity, interval)
        except Exception as e:
            logger.warning("bulk fetch failed: %s", e, extra={"commodity": commodity})
            results[commodity] = {"error": str(e)}
            continue
        results[commodity] = data if data is not None else {"error": NO_DATA}

    return results


async def get_history(
    client: SeriesProvider, commodity: str, interval: str = "monthly", limit: int = 12
) -> list[dict[str, Any]] | None:
    fn = provider_function(commodity)
    if not fn:
        return None

    fetched = await _fetch_frame(client, fn, interval)
    if fetched is None:
        return None
    _, df = fetched

    return [
        {"date": str(row.date), "price": float(row.price)}
        for row in df.head(limit).itertuples(index=False)
    ]


async def get_index(client: SeriesProvider) -> dict[str, Any] | None:
    fetched = await _fetch_frame(client, INDEX_FUNCTION, "monthly")
    if fetched is None:
        return None
    payload, df = fetched

    latest = df.iloc[0]
    return {
        "name": payload.get("name"),
        "value": float(latest["price"]),
        "unit": payload.get("unit"),
        "date": str(latest["date"]),
    }


async def get_analysis(client: SeriesProvider, commodity: str) -> dict[str, Any] | None:
    key = commodity.lower()
    fn = provider_function(key)
    if not fn:
        return None

    # Daily series regardless of caller; ~90 trading days of history
    fetched = await _fetch_frame(client, fn, "daily")
    if fetched is None:
        return None
    payload, df = fetched

    window = df.head(ANALYSIS_WINDOW)
    prices = [float(p) for p in window["price"]]
    info = COMMODITY_INFO.get(key, {})

    return {
        "commodity": key,
        "name": payload.get("name"),
        "category": info.get("category", "Unknown"),
        "current": {
            "price": prices[0],
            "unit": payload.get("unit"),
            "date": str(window["date"].iloc[0]),
        },
        **analyze(prices),
    }
