"""Tests for the analytics derivation over newest-first price lists."""

import statistics

import pytest

from commodities_pulse.analytics import (
    analyze,
    calculate_ma,
    calculate_volatility,
    change_at,
    get_signal,
    get_trend,
    round2,
    volatility_level,
)


def _reference_series() -> list[float]:
    """90 points: p0=110, p1..p6=105, p7..p29=100, p30..p88=90, p89=80."""
    return [110.0] + [105.0] * 6 + [100.0] * 23 + [90.0] * 59 + [80.0]


def test_change_defined_only_when_series_longer_than_offset():
    prices = [110.0] + [100.0] * 7  # n == 8
    assert change_at(prices, 7) == pytest.approx(10.0)
    assert change_at(prices[:7], 7) is None  # n == 7 == k


def test_change_against_zero_price_is_none():
    assert change_at([5.0, 0.0], 1) is None


def test_ma_uses_only_newest_window():
    base = [10.0, 20.0, 30.0, 40.0, 50.0, 60.0, 70.0]
    assert calculate_ma(base, 7) == pytest.approx(40.0)
    assert calculate_ma(base + [1000.0, -5.0], 7) == pytest.approx(40.0)


def test_ma_none_when_insufficient():
    assert calculate_ma([1.0] * 6, 7) is None
    assert calculate_ma([1.0] * 29, 30) is None


def test_volatility_none_below_seven_points():
    assert calculate_volatility([100.0] * 6) is None
    assert calculate_volatility([100.0] * 7) == pytest.approx(0.0)


def test_volatility_non_negative_and_uses_first_thirty_prices():
    prices = [100.0 + (i % 3) for i in range(30)]
    vol = calculate_volatility(prices)
    assert vol is not None and vol >= 0

    # Anything past index 29 is outside the window
    assert calculate_volatility(prices + [1.0, 5000.0]) == pytest.approx(vol)


def test_volatility_is_population_stdev_of_29_returns():
    prices = _reference_series()
    window = prices[:30]
    returns = [(window[i - 1] - window[i]) / window[i] for i in range(1, 30)]
    assert len(returns) == 29
    assert calculate_volatility(prices) == pytest.approx(statistics.pstdev(returns) * 100)


@pytest.mark.parametrize(
    "vol, level",
    [
        (None, "unknown"),
        (0.0, "low"),
        (0.99, "low"),
        (1.0, "medium"),
        (2.99, "medium"),
        (3.0, "high"),
    ],
)
def test_volatility_level_cutoffs(vol, level):
    assert volatility_level(vol) == level


def test_signal_cases():
    assert get_signal(100.0, None) == "unknown"
    assert get_signal(100.0, 100.0) == "at"
    assert get_signal(102.0, 100.0) == "above"
    assert get_signal(98.0, 100.0) == "below"
    assert get_signal(100.5, 100.0) == "at"


def test_trend_cases():
    assert get_trend(3, 1) == "bullish"
    assert get_trend(-3, -1) == "bearish"
    assert get_trend(0, 0) == "neutral"
    assert get_trend(3, -1) == "neutral"
    assert get_trend(None, 1) == "unknown"
    assert get_trend(3, None) == "unknown"


def test_round2_rounds_half_up():
    assert round2(None) is None
    assert round2(1.005 + 1e-9) == 1.01
    assert round2(2.5) == 2.5
    assert round2(-0.125) == -0.12
    assert round2(22.2222) == 22.22


def test_analyze_reference_series():
    prices = _reference_series()
    result = analyze(prices)

    assert result["changes"]["day7"] == pytest.approx(10.0)
    assert result["changes"]["day30"] == pytest.approx(22.22)
    assert result["changes"]["day90"] == pytest.approx(37.5)

    assert result["movingAverages"]["ma7"] == pytest.approx(round2(sum(prices[:7]) / 7))
    assert result["movingAverages"]["ma7"] == pytest.approx(105.71)
    assert result["movingAverages"]["ma30"] == pytest.approx(101.33)

    window = prices[:30]
    returns = [(window[i - 1] - window[i]) / window[i] for i in range(1, 30)]
    expected_vol = round2(statistics.pstdev(returns) * 100)
    assert result["volatility"]["daily"] == pytest.approx(expected_vol)
    assert result["volatility"]["level"] == "medium"

    assert result["signal"] == {"vs7dma": "above", "vs30dma": "above", "trend": "bullish"}


def test_analyze_truncates_to_ninety_points():
    prices = _reference_series() + [1.0] * 50
    assert analyze(prices) == analyze(_reference_series())


def test_analyze_short_series_degrades():
    result = analyze([100.0, 99.0, 98.0])
    assert result["changes"] == {"day7": None, "day30": None, "day90": None}
    assert result["movingAverages"] == {"ma7": None, "ma30": None}
    assert result["volatility"] == {"daily": None, "level": "unknown"}
    assert result["signal"] == {"vs7dma": "unknown", "vs30dma": "unknown", "trend": "unknown"}


def test_analyze_rejects_empty():
    with pytest.raises(ValueError):
        analyze([])
