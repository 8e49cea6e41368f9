from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

Interval = Literal["daily", "weekly", "monthly"]


# --- Health payload ---
class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    agent: str = "commodities-pulse"
    timestamp: str


# --- Version payload ---
class VersionResponse(BaseModel):
    service: str  # "commodities-pulse:1.0.0"
    service_version: str


# --- Entrypoint inputs (validated before reaching the fetch layer) ---
class PriceInput(BaseModel):
    commodity: str = Field(..., description="Commodity name (e.g., wti, brent, natural_gas)")
    interval: Interval = "daily"


class AllInput(BaseModel):
    interval: Interval = "daily"


class HistoricalInput(BaseModel):
    commodity: str = Field(..., description="Commodity name")
    interval: Interval = "monthly"
    limit: int = Field(12, ge=1, le=60)


class IndexInput(BaseModel):
    pass


class AnalysisInput(BaseModel):
    commodity: str = Field(..., description="Commodity name (e.g., wti, copper, wheat)")


# --- Error taxonomy ---
class ErrorCode(str, Enum):
    INVALID_REQUEST = "INVALID_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorDetail(BaseModel):
    code: ErrorCode
    message: str
    hint: str | None = None


class ErrorResponse(BaseModel):
    error: ErrorDetail
