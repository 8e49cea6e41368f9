# commodities_pulse/main.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Literal

from fastapi import FastAPI
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from commodities_pulse import config
from commodities_pulse.cache import TTLCache
from commodities_pulse.catalog import COMMODITIES, COMMODITY_INFO, available
from commodities_pulse.data_client import AlphaVantageClient
from commodities_pulse.errors import http_exception_handler
from commodities_pulse.logging_conf import setup_logging

# --- Observability ---
from commodities_pulse.observability import metrics_endpoint, timing_middleware

# --- Routers ---
from commodities_pulse.routers import entrypoints  # /entrypoints/{key}/invoke
from commodities_pulse.schemas import HealthResponse, VersionResponse
from commodities_pulse.utils import utc_now_iso
from commodities_pulse.version import (
    DESCRIPTION,
    SERVICE_NAME,
    SERVICE_VERSION,
    service_version_payload,
)

logger = logging.getLogger("commodities_pulse")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One cache + one provider client per process, shared by every request
    if not config.ALPHA_VANTAGE_API_KEY:
        logger.warning("ALPHA_VANTAGE_API_KEY is not set; provider calls will be refused")
    app.state.cache = TTLCache(max_entries=config.CACHE_MAX_ENTRIES)
    app.state.provider = AlphaVantageClient()
    try:
        yield
    finally:
        await app.state.provider.aclose()


# --- App ---
setup_logging()
app = FastAPI(
    title="Commodities Pulse", version=SERVICE_VERSION, description=DESCRIPTION, lifespan=lifespan
)

# --- Include routers ---
app.include_router(entrypoints.router)

# --- Errors + observability ---
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.middleware("http")(timing_middleware)


# --- Schemas for utility endpoints ---
class CommodityListing(BaseModel):
    key: str
    category: str
    description: str
    alphaVantageFunction: str


class CommoditiesResponse(BaseModel):
    commodities: list[CommodityListing]


class OverviewResponse(BaseModel):
    agent: Literal["commodities-pulse"] = "commodities-pulse"
    version: str
    description: str
    endpoints: list[dict]
    free: list[dict]
    commodities: list[str]


# --- Free endpoints ---


@app.get("/", response_model=OverviewResponse)
def overview():
    return {
        "agent": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "description": "Real-time commodity prices for AI agents",
        "endpoints": entrypoints.ENTRYPOINTS,
        "free": [
            {"path": "/health", "description": "Health check"},
            {"path": "/commodities", "description": "List available commodities"},
        ],
        "commodities": available(),
    }


@app.get("/health", response_model=HealthResponse)
def health():
    return {"status": "ok", "agent": SERVICE_NAME, "timestamp": utc_now_iso()}


@app.get("/commodities", response_model=CommoditiesResponse)
def list_commodities():
    return {
        "commodities": [
            {"key": key, **info, "alphaVantageFunction": COMMODITIES[key]}
            for key, info in COMMODITY_INFO.items()
        ]
    }


@app.get("/version", response_model=VersionResponse)
def version():
    return VersionResponse(**service_version_payload())


@app.get("/metrics")
def metrics():
    return metrics_endpoint()
