"""Reverse geocoding used to pre-fill new city drafts.

This sits outside the synchronization store: it never touches store
state and its failures are reported to the caller directly.
"""

from __future__ import annotations

import logging
from datetime import datetime

import aiohttp
from pydantic import ValidationError

from pycitylog._constants import DEFAULT_GEOCODE_URL, REGIONAL_INDICATOR_OFFSET
from pycitylog._transport import HttpTransport
from pycitylog.exceptions import CityLogTransportError, GeocodingError
from pycitylog.models.city import CityDraft, Position
from pycitylog.models.geocode import ReverseGeocodeResult

_logger = logging.getLogger(__name__)


def country_code_to_emoji(country_code: str) -> str:
    """Convert an ISO alpha-2 country code to its flag emoji.

    ``"fr"`` and ``"FR"`` both give the French flag.
    """
    code = country_code.strip().upper()
    if not code or not all("A" <= ch <= "Z" for ch in code):
        raise ValueError(f"Invalid country code: {country_code!r}")
    return "".join(chr(REGIONAL_INDICATOR_OFFSET + ord(ch)) for ch in code)


def draft_from_geocode(
    result: ReverseGeocodeResult,
    position: Position,
    *,
    visited_on: datetime,
    notes: str = "",
    city_name: str | None = None,
) -> CityDraft:
    """Build a draft pre-filled from a reverse geocoding result.

    An explicit *city_name* wins over the geocoded name.
    """
    return CityDraft(
        city_name=city_name or result.display_name,
        country=result.country_name,
        date=visited_on,
        notes=notes,
        position=position,
        emoji=country_code_to_emoji(result.country_code),
    )


class ReverseGeocoder:
    """Looks up the place at a coordinate."""

    def __init__(
        self,
        http_session: aiohttp.ClientSession,
        *,
        base_url: str = DEFAULT_GEOCODE_URL,
        timeout: float | None = None,
    ) -> None:
        self._transport = HttpTransport(base_url, http_session, timeout=timeout)

    async def lookup(self, lat: float, lng: float) -> ReverseGeocodeResult:
        """Reverse geocode one coordinate.

        Raises
        ------
        GeocodingError
            If the service finds no country at this coordinate.
        CityLogTransportError
            If the request itself fails.
        """
        decoded = await self._transport.request_json(
            "GET",
            "",
            params={"latitude": lat, "longitude": lng},
        )
        if not isinstance(decoded, dict):
            raise CityLogTransportError("Reverse geocoding did not return an object")
        try:
            result = ReverseGeocodeResult.model_validate(decoded)
        except ValidationError as exc:
            raise CityLogTransportError("Unexpected reverse geocoding payload") from exc

        _logger.debug("Reverse geocoded %s,%s -> %r (%s)", lat, lng, result.display_name, result.country_code)
        if not result.country_code:
            raise GeocodingError("No location found for given coordinates.")
        return result
