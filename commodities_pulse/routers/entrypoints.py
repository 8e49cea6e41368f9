# commodities_pulse/routers/entrypoints.py
# Paid entrypoints: POST /entrypoints/{key}/invoke -> {"output": {...}}.
# Pricing/metering happens in front of this service; prices here are informational.

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request, status

from commodities_pulse import fetchers
from commodities_pulse.cache import TTLCache
from commodities_pulse.catalog import COMMODITY_INFO, available, normalize_key, provider_function
from commodities_pulse.data_client import AlphaVantageClient
from commodities_pulse.errors import UpstreamError, http_error
from commodities_pulse.schemas import (
    AllInput,
    AnalysisInput,
    ErrorCode,
    HistoricalInput,
    IndexInput,
    PriceInput,
)
from commodities_pulse.utils import utc_now_iso

router = APIRouter(prefix="/entrypoints", tags=["entrypoints"])

# TTLs (seconds) per entrypoint
PRICE_TTL_S = 60
ALL_TTL_S = 120  # ten sequential provider calls
HISTORICAL_TTL_S = 300
INDEX_TTL_S = 300
ANALYSIS_TTL_S = 120

_COMMODITY_CHOICES = " | ".join(available())

ENTRYPOINTS: list[dict[str, Any]] = [
    {
        "path": "/entrypoints/price/invoke",
        "method": "POST",
        "price": "$0.001",
        "description": "Get current price for a single commodity",
        "input": {"commodity": _COMMODITY_CHOICES, "interval": "daily | weekly | monthly"},
    },
    {
        "path": "/entrypoints/all/invoke",
        "method": "POST",
        "price": "$0.005",
        "description": "Get prices for all major commodities",
        "input": {"interval": "daily | weekly | monthly"},
    },
    {
        "path": "/entrypoints/historical/invoke",
        "method": "POST",
        "price": "$0.002",
        "description": "Get historical prices for a commodity",
        "input": {
            "commodity": "string",
            "interval": "daily | weekly | monthly",
            "limit": "number (1-60)",
        },
    },
    {
        "path": "/entrypoints/index/invoke",
        "method": "POST",
        "price": "$0.001",
        "description": "Get the global commodities price index",
    },
    {
        "path": "/entrypoints/analysis/invoke",
        "method": "POST",
        "price": "$0.003",
        "description": (
            "Enriched analysis: price + 7d/30d/90d changes + moving averages "
            "+ volatility + trend signals"
        ),
        "input": {"commodity": _COMMODITY_CHOICES},
    },
]


# --------- dependencies (built once in the app lifespan) ---------


def get_cache(request: Request) -> TTLCache:
    return request.app.state.cache


def get_provider(request: Request) -> AlphaVantageClient:
    return request.app.state.provider


def _unknown_commodity() -> dict[str, Any]:
    return {"output": {"error": "Unknown commodity", "available": available()}}


def _no_data() -> dict[str, Any]:
    return {"output": {"error": fetchers.NO_DATA}}


def _upstream_failure(e: UpstreamError):
    return http_error(
        ErrorCode.UPSTREAM_UNAVAILABLE,
        str(e),
        http_status=status.HTTP_502_BAD_GATEWAY,
        hint="Market-data provider unreachable; retry shortly.",
    )


# --------- entrypoints ---------


@router.post("/price/invoke")
async def price(
    body: PriceInput,
    cache: TTLCache = Depends(get_cache),
    provider: AlphaVantageClient = Depends(get_provider),
) -> dict[str, Any]:
    key = normalize_key(body.commodity)
    if not provider_function(key):
        return _unknown_commodity()

    cache_key = f"commodity:{key}:{body.interval}"
    try:
        data = await cache.get_or_compute(
            cache_key, lambda: fetchers.get_latest(provider, key, body.interval), PRICE_TTL_S
        )
    except UpstreamError as e:
        raise _upstream_failure(e) from e

    if not data:
        return _no_data()

    info = COMMODITY_INFO.get(key, {})
    return {
        "output": {
            **data,
            "category": info.get("category"),
            "description": info.get("description"),
            "fetchedAt": utc_now_iso(),
            "cacheAge": cache.age_seconds(cache_key) or 0,
        }
    }


@router.post("/all/invoke")
async def all_commodities(
    body: AllInput | None = None,
    cache: TTLCache = Depends(get_cache),
    provider: AlphaVantageClient = Depends(get_provider),
) -> dict[str, Any]:
    body = body or AllInput()

    # per-symbol failures are captured inside get_all; nothing to catch here
    data = await cache.get_or_compute(
        f"all:{body.interval}", lambda: fetchers.get_all(provider, body.interval), ALL_TTL_S
    )

    return {
        "output": {
            "commodities": data,
            "count": len(data),
            "interval": body.interval,
            "fetchedAt": utc_now_iso(),
        }
    }


@router.post("/historical/invoke")
async def historical(
    body: HistoricalInput,
    cache: TTLCache = Depends(get_cache),
    provider: AlphaVantageClient = Depends(get_provider),
) -> dict[str, Any]:
    key = normalize_key(body.commodity)
    if not provider_function(key):
        return _unknown_commodity()

    try:
        data = await cache.get_or_compute(
            f"historical:{key}:{body.interval}:{body.limit}",
            lambda: fetchers.get_history(provider, key, body.interval, body.limit),
            HISTORICAL_TTL_S,
        )
    except UpstreamError as e:
        raise _upstream_failure(e) from e

    if not data:
        return _no_data()

    info = COMMODITY_INFO.get(key, {})
    return {
        "output": {
            "commodity": info.get("description") or key,
            "interval": body.interval,
            "dataPoints": len(data),
            "history": data,
            "fetchedAt": utc_now_iso(),
        }
    }


@router.post("/index/invoke")
async def commodities_index(
    body: IndexInput | None = None,
    cache: TTLCache = Depends(get_cache),
    provider: AlphaVantageClient = Depends(get_provider),
) -> dict[str, Any]:
    try:
        data = await cache.get_or_compute(
            "commodities-index", lambda: fetchers.get_index(provider), INDEX_TTL_S
        )
    except UpstreamError as e:
        raise _upstream_failure(e) from e

    if not data:
        return _no_data()

    return {"output": {**data, "fetchedAt": utc_now_iso()}}


@router.post("/analysis/invoke")
async def analysis(
    body: AnalysisInput,
    cache: TTLCache = Depends(get_cache),
    provider: AlphaVantageClient = Depends(get_provider),
) -> dict[str, Any]:
    key = normalize_key(body.commodity)
    if not provider_function(key):
        return _unknown_commodity()

    try:
        data = await cache.get_or_compute(
            f"analysis:{key}", lambda: fetchers.get_analysis(provider, key), ANALYSIS_TTL_S
        )
    except UpstreamError as e:
        raise _upstream_failure(e) from e

    if not data:
        return _no_data()

    return {"output": {**data, "fetchedAt": utc_now_iso()}}
