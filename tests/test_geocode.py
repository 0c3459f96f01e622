from __future__ import annotations

import contextlib
from collections.abc import AsyncIterator
from datetime import UTC, datetime
from typing import Any

import aiohttp
import pytest
from aiohttp import test_utils, web

from pycitylog.exceptions import CityLogTransportError, GeocodingError
from pycitylog.geocode import ReverseGeocoder, country_code_to_emoji, draft_from_geocode
from pycitylog.models.city import Position
from pycitylog.models.geocode import ReverseGeocodeResult


@contextlib.asynccontextmanager
async def _geocode_server(payload: dict[str, Any], seen: list[dict[str, str]]) -> AsyncIterator[str]:
    async def _handler(request: web.Request) -> web.StreamResponse:
        seen.append(dict(request.query))
        return web.json_response(payload)

    app = web.Application()
    app.router.add_get("/data/reverse-geocode-client", _handler)
    server = test_utils.TestServer(app)
    await server.start_server()
    try:
        yield str(server.make_url("/data/reverse-geocode-client"))
    finally:
        await server.close()


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        ("FR", "\U0001f1eb\U0001f1f7"),
        ("it", "\U0001f1ee\U0001f1f9"),
        (" pt ", "\U0001f1f5\U0001f1f9"),
    ],
)
def test_country_code_to_emoji(code: str, expected: str) -> None:
    assert country_code_to_emoji(code) == expected


@pytest.mark.parametrize("code", ["", "F1", "??"])
def test_country_code_to_emoji_rejects_garbage(code: str) -> None:
    with pytest.raises(ValueError):
        country_code_to_emoji(code)


def test_draft_from_geocode_prefills_fields() -> None:
    result = ReverseGeocodeResult(city="", locality="Oia", country_name="Greece", country_code="GR")
    visited_on = datetime(2027, 7, 1, tzinfo=UTC)

    draft = draft_from_geocode(result, Position(lat=36.46, lng=25.38), visited_on=visited_on, notes="sunset")

    assert draft.city_name == "Oia"
    assert draft.country == "Greece"
    assert draft.emoji == "\U0001f1ec\U0001f1f7"
    assert draft.date == visited_on
    assert draft.notes == "sunset"


def test_draft_from_geocode_explicit_name_wins() -> None:
    result = ReverseGeocodeResult(city="Roma", country_name="Italy", country_code="IT")
    draft = draft_from_geocode(
        result,
        Position(lat=41.9, lng=12.5),
        visited_on=datetime(2027, 7, 1, tzinfo=UTC),
        city_name="Rome",
    )
    assert draft.city_name == "Rome"


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_lookup_sends_coordinates() -> None:
    seen: list[dict[str, str]] = []
    payload = {"city": "Rome", "locality": "Rome", "countryName": "Italy", "countryCode": "IT"}

    async with _geocode_server(payload, seen) as url, aiohttp.ClientSession() as session:
        result = await ReverseGeocoder(session, base_url=url).lookup(41.9, 12.5)

    assert result.display_name == "Rome"
    assert result.country_code == "IT"
    assert seen == [{"latitude": "41.9", "longitude": "12.5"}]


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_lookup_without_country_is_geocoding_error() -> None:
    seen: list[dict[str, str]] = []
    payload = {"city": "", "locality": "", "countryName": "", "countryCode": ""}

    async with _geocode_server(payload, seen) as url, aiohttp.ClientSession() as session:
        with pytest.raises(GeocodingError, match="No location found"):
            await ReverseGeocoder(session, base_url=url).lookup(0.0, -30.0)


@pytest.mark.asyncio
async def test_lookup_connection_failure_is_transport_error() -> None:
    async with aiohttp.ClientSession() as session:
        with pytest.raises(CityLogTransportError):
            await ReverseGeocoder(session, base_url="http://127.0.0.1:1/geo").lookup(1.0, 2.0)
