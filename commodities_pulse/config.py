# commodities_pulse/config.py
# Purpose: Env-driven settings, read once at import.
# Pitfalls: Tests that need other values should pass them explicitly, not mutate env.

from __future__ import annotations

import os

ALPHA_VANTAGE_API_KEY = os.getenv("ALPHA_VANTAGE_API_KEY", "")
PROVIDER_URL = os.getenv("CP_PROVIDER_URL", "https://www.alphavantage.co/query")
HTTP_TIMEOUT_SEC = float(os.getenv("CP_HTTP_TIMEOUT_SEC", "10"))

# Free tier allows 5 calls/min; the bulk fetch spaces calls out
BATCH_DELAY_SEC = float(os.getenv("CP_BATCH_DELAY_SEC", "0.2"))

_max_entries = os.getenv("CP_CACHE_MAX_ENTRIES", "").strip()
CACHE_MAX_ENTRIES: int | None = int(_max_entries) if _max_entries else None

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
