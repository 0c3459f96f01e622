"""Cities collection endpoints.

Endpoints:
  - GET    /cities        (list)
  - GET    /cities/{id}   (single record)
  - POST   /cities        (create, server assigns ``id``)
  - DELETE /cities/{id}   (remove)
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from pycitylog._constants import CITIES_ENDPOINT, city_endpoint
from pycitylog._transport import Transport
from pycitylog.exceptions import CityLogTransportError
from pycitylog.models.city import CityDraft, CityRecord

_logger = logging.getLogger(__name__)


def _parse_record(endpoint: str, item: Any) -> CityRecord:
    """Validate one city payload, mapping validation errors to the transport failure."""
    try:
        return CityRecord.model_validate(item)
    except ValidationError as exc:
        raise CityLogTransportError(
            f"Unexpected city payload from {endpoint}: {exc.error_count()} validation error(s)",
            endpoint=endpoint,
        ) from exc


async def fetch_cities(transport: Transport) -> list[CityRecord]:
    """Fetch the whole cities collection in server order."""
    endpoint = CITIES_ENDPOINT
    decoded = await transport.request_json("GET", endpoint)
    if not isinstance(decoded, list):
        raise CityLogTransportError(
            f"{endpoint} did not return a list (got {type(decoded).__name__})",
            endpoint=endpoint,
        )
    cities = [_parse_record(endpoint, item) for item in decoded]
    _logger.debug("Fetched %d cities", len(cities))
    return cities


async def fetch_city(transport: Transport, city_id: int | str) -> CityRecord:
    """Fetch a single city by id."""
    endpoint = city_endpoint(city_id)
    decoded = await transport.request_json("GET", endpoint)
    return _parse_record(endpoint, decoded)


async def create_city(transport: Transport, draft: CityDraft) -> CityRecord:
    """Create a city from a draft and return the stored record with its id."""
    endpoint = CITIES_ENDPOINT
    decoded = await transport.request_json("POST", endpoint, json_body=draft.to_payload())
    record = _parse_record(endpoint, decoded)
    _logger.debug("Created city id=%s name=%s", record.id, record.city_name)
    return record


async def delete_city(transport: Transport, city_id: int | str) -> None:
    """Delete a city by id. Any body in the response is ignored."""
    await transport.request_json("DELETE", city_endpoint(city_id))
