# commodities_pulse/logging_conf.py
# Log sources, all JSON lines on stdout:
#   commodities_pulse.data_client  provider failures / refusals (function, interval, outcome)
#   commodities_pulse.cache        misses (cache_key)
#   commodities_pulse.fetchers     per-symbol bulk failures (commodity)
#   request                        one line per HTTP request from the timing middleware
from __future__ import annotations

import json
import logging
import os
from logging.config import dictConfig
from typing import Any

from commodities_pulse.version import SERVICE_NAME

# Structured fields callers attach via `extra=`
CONTEXT_FIELDS = ("function", "interval", "outcome", "commodity", "cache_key")


class JsonFormatter(logging.Formatter):
    """One JSON object per record, tagged with the service name and any context fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "service": SERVICE_NAME,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            val = getattr(record, field, None)
            if val is not None:
                payload[field] = val
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging() -> None:
    """Route the service, uvicorn and request loggers through one JSON stdout handler."""
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    console = {"level": log_level, "handlers": ["console"], "propagate": False}

    dict_config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"json": {"()": JsonFormatter}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "stream": "ext://sys.stdout",
            },
        },
        "root": {"level": log_level, "handlers": ["console"]},
        "loggers": {
            "commodities_pulse": console,
            "request": console,
            "uvicorn": console,
            "uvicorn.error": console,
            # request lines come from the timing middleware instead
            "uvicorn.access": {**console, "level": "WARNING"},
            # httpx logs each URL at INFO, apikey query param included
            "httpx": {**console, "level": "WARNING"},
        },
    }

    dictConfig(dict_config)
