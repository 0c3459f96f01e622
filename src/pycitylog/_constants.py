"""Constants shared across pycitylog modules."""

from __future__ import annotations

DEFAULT_BASE_URL = "http://localhost:9000"
DEFAULT_GEOCODE_URL = "https://api.bigdatacloud.net/data/reverse-geocode-client"

USER_AGENT = "pycitylog"

CITIES_ENDPOINT = "/cities"

# Offset from an ASCII capital letter to its regional indicator symbol.
REGIONAL_INDICATOR_OFFSET = 127397


def city_endpoint(city_id: int | str) -> str:
    """Path of a single city resource."""
    return f"{CITIES_ENDPOINT}/{city_id}"
