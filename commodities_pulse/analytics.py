# commodities_pulse/analytics.py
from __future__ import annotations

import math
from typing import Any, Literal

import numpy as np

# Prices are ordered newest -> oldest: prices[0] is the current price.

ANALYSIS_WINDOW = 90
VOLATILITY_MIN_POINTS = 7
VOLATILITY_WINDOW = 30  # returns over prices[0:30] -> at most 29 values

VolatilityLevel = Literal["low", "medium", "high", "unknown"]
Signal = Literal["above", "below", "at", "unknown"]
Trend = Literal["bullish", "bearish", "neutral", "unknown"]


def round2(value: float | None) -> float | None:
    """Round half up to 2 dp (2.345 -> 2.35, -2.345 -> -2.34)."""
    if value is None:
        return None
    return math.floor(value * 100 + 0.5) / 100


def calculate_change(current: float, previous: float) -> float | None:
    """Percent change from `previous` to `current`. None if previous is 0."""
    if previous == 0:
        return None
    return (current - previous) / previous * 100


def change_at(prices: list[float], k: int) -> float | None:
    """Percent change of prices[0] vs prices[k]; needs more than k points."""
    if len(prices) <= k:
        return None
    return calculate_change(prices[0], prices[k])


def calculate_ma(prices: list[float], period: int) -> float | None:
    """Mean of the newest `period` prices. None if insufficient."""
    if len(prices) < period:
        return None
    return sum(prices[:period]) / period


def calculate_volatility(prices: list[float]) -> float | None:
    """Population stdev of day-over-day returns, as a percentage. None if < 7 prices."""
    if len(prices) < VOLATILITY_MIN_POINTS:
        return None
    window = prices[: min(len(prices), VOLATILITY_WINDOW)]
    if any(p == 0 for p in window[1:]):
        return None
    returns = [(window[i - 1] - window[i]) / window[i] for i in range(1, len(window))]
    return float(np.std(returns)) * 100


def volatility_level(vol: float | None) -> VolatilityLevel:
    if vol is None:
        return "unknown"
    if vol < 1:
        return "low"
    if vol < 3:
        return "medium"
    return "high"


def get_signal(current: float, ma: float | None) -> Signal:
    """Current price vs a moving average, with a +/-1% dead band."""
    if ma is None or ma == 0:
        return "unknown"
    diff = (current - ma) / ma * 100
    if diff > 1:
        return "above"
    if diff < -1:
        return "below"
    return "at"


def get_trend(change7: float | None, change30: float | None) -> Trend:
    if change7 is None or change30 is None:
        return "unknown"
    if change7 > 2 and change30 > 0:
        return "bullish"
    if change7 < -2 and change30 < 0:
        return "bearish"
    return "neutral"


def analyze(prices: list[float]) -> dict[str, Any]:
    """
    Derive changes, moving averages, volatility and signals from a
    newest-first price list (only the newest 90 are used).

    Returns the `changes`, `movingAverages`, `volatility` and `signal` blocks
    of a commodity analysis. Blocks degrade to None / "unknown" when the
    series is too short; an empty list is rejected.
    """
    if not prices:
        raise ValueError("analyze() needs at least one price")

    prices = prices[:ANALYSIS_WINDOW]
    current = prices[0]

    change7 = change_at(prices, 7)
    change30 = change_at(prices, 30)
    change90 = change_at(prices, 89)

    ma7 = calculate_ma(prices, 7)
    ma30 = calculate_ma(prices, 30)

    vol = calculate_volatility(prices)

    # Signals and trend compare unrounded values
    return {
        "changes": {
            "day7": round2(change7),
            "day30": round2(change30),
            "day90": round2(change90),
        },
        "movingAverages": {
            "ma7": round2(ma7),
            "ma30": round2(ma30),
        },
        "volatility": {
            "daily": round2(vol),
            "level": volatility_level(vol),
        },
        "signal": {
            "vs7dma": get_signal(current, ma7),
            "vs30dma": get_signal(current, ma30),
            "trend": get_trend(change7, change30),
        },
    }
