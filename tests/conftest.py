"""Shared fixtures: provider-shaped payloads and an in-memory provider double."""

from datetime import date, timedelta

import pytest


def _make_payload(name: str, values: list, interval: str = "daily", unit: str = "USD") -> dict:
    """Provider-shaped payload; values newest first, one day apart."""
    newest = date(2025, 3, 31)
    return {
        "name": name,
        "interval": interval,
        "unit": unit,
        "data": [
            {"date": (newest - timedelta(days=i)).isoformat(), "value": str(v)}
            for i, v in enumerate(values)
        ],
    }


class FakeProvider:
    """
    Stands in for AlphaVantageClient. `series` maps function name -> payload,
    None (no data) or an Exception instance (raised on fetch).
    """

    def __init__(self, series: dict | None = None):
        self.series = series or {}
        self.calls: list[tuple[str, str]] = []

    async def fetch_series(self, function: str, interval: str):
        self.calls.append((function, interval))
        result = self.series.get(function)
        if isinstance(result, Exception):
            raise result
        return result

    async def aclose(self) -> None:
        pass


@pytest.fixture
def make_payload():
    return _make_payload


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()
