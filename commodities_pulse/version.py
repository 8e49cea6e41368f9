# commodities_pulse/version.py

SERVICE_NAME = "commodities-pulse"
SERVICE_VERSION = "1.0.0"
DESCRIPTION = (
    "Real-time commodity prices: crude oil, natural gas, metals, agriculture. "
    "Powered by Alpha Vantage."
)


def service_version_payload() -> dict:
    """Used by /version endpoints."""
    return {
        "service": f"{SERVICE_NAME}:{SERVICE_VERSION}",
        "service_version": SERVICE_VERSION,
    }
