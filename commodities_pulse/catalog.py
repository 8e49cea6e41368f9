# commodities_pulse/catalog.py
# Static symbol catalog: user-facing keys -> Alpha Vantage function names.

from __future__ import annotations

COMMODITIES: dict[str, str] = {
    "wti": "WTI",
    "brent": "BRENT",
    "natural_gas": "NATURAL_GAS",
    "copper": "COPPER",
    "aluminum": "ALUMINUM",
    "wheat": "WHEAT",
    "corn": "CORN",
    "coffee": "COFFEE",
    "cotton": "COTTON",
    "sugar": "SUGAR",
}

# Global aggregate (IMF primary commodity index), not a listed symbol
INDEX_FUNCTION = "ALL_COMMODITIES"

COMMODITY_INFO: dict[str, dict[str, str]] = {
    "wti": {"category": "Energy", "description": "West Texas Intermediate Crude Oil"},
    "brent": {"category": "Energy", "description": "Brent Crude Oil"},
    "natural_gas": {"category": "Energy", "description": "Henry Hub Natural Gas"},
    "copper": {"category": "Metals", "description": "Global Copper"},
    "aluminum": {"category": "Metals", "description": "Global Aluminum"},
    "wheat": {"category": "Agriculture", "description": "Global Wheat"},
    "corn": {"category": "Agriculture", "description": "Global Corn"},
    "coffee": {"category": "Agriculture", "description": "Global Coffee (Arabica)"},
    "cotton": {"category": "Agriculture", "description": "Global Cotton"},
    "sugar": {"category": "Agriculture", "description": "Global Sugar"},
}


def normalize_key(commodity: str) -> str:
    """'Natural Gas' / 'natural-gas' -> 'natural_gas'."""
    key = (commodity or "").strip().lower()
    return key.replace(" ", "_").replace("-", "_")


def provider_function(key: str) -> str | None:
    return COMMODITIES.get(key.lower())


def available() -> list[str]:
    return list(COMMODITIES)
