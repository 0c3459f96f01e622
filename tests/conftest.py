from __future__ import annotations

# pylint: disable=redefined-outer-name

import asyncio
from collections.abc import Callable
from typing import Any

import pytest

from pycitylog.exceptions import CityLogTransportError
from pycitylog.models.city import CityDraft, CityId, CityRecord, same_city_id


def _city_payload(city_id: CityId, name: str = "Paris", country: str = "France") -> dict[str, Any]:
    return {
        "id": city_id,
        "cityName": name,
        "country": country,
        "date": "2027-10-31T15:59:59.138Z",
        "notes": "",
        "position": {"lat": 48.85, "lng": 2.35},
        "emoji": "\U0001f1eb\U0001f1f7",
    }


class FakeRepository:
    """In-memory stand-in for :class:`CitiesClient`.

    ``gate`` holds every call open until set, ``gates`` does the same per
    method name; ``fail`` names the methods that raise the transport failure.
    """

    def __init__(self) -> None:
        self.cities: list[CityRecord] = []
        self.calls: list[tuple[str, Any]] = []
        self.fail: set[str] = set()
        self.next_id: CityId = 100
        self.gate: asyncio.Event | None = None
        self.gates: dict[str, asyncio.Event] = {}
        self.started = asyncio.Event()

    async def _enter(self, name: str, arg: Any = None) -> None:
        self.calls.append((name, arg))
        self.started.set()
        gate = self.gates.get(name, self.gate)
        if gate is not None:
            await gate.wait()
        if name in self.fail:
            raise CityLogTransportError(f"{name} failed", endpoint="/cities")

    async def list_all(self) -> list[CityRecord]:
        await self._enter("list_all")
        return list(self.cities)

    async def get_one(self, city_id: CityId) -> CityRecord:
        await self._enter("get_one", city_id)
        for city in self.cities:
            if same_city_id(city.id, city_id):
                return city
        raise CityLogTransportError(f"HTTP 404 from GET /cities/{city_id}", status_code=404)

    async def create(self, draft: CityDraft) -> CityRecord:
        await self._enter("create", draft)
        record = CityRecord(id=self.next_id, **draft.model_dump())
        self.cities.append(record)
        return record

    async def remove(self, city_id: CityId) -> None:
        await self._enter("remove", city_id)
        self.cities = [city for city in self.cities if not same_city_id(city.id, city_id)]


@pytest.fixture
def make_city() -> Callable[..., CityRecord]:
    def _make(city_id: CityId, name: str = "Paris", country: str = "France") -> CityRecord:
        return CityRecord.model_validate(_city_payload(city_id, name, country))

    return _make


@pytest.fixture
def make_draft() -> Callable[..., CityDraft]:
    def _make(name: str = "Rome", country: str = "Italy") -> CityDraft:
        return CityDraft.model_validate(
            {
                "cityName": name,
                "country": country,
                "date": "2027-06-01T10:00:00Z",
                "notes": "pasta",
                "position": {"lat": 41.9, "lng": 12.5},
                "emoji": "\U0001f1ee\U0001f1f9",
            }
        )

    return _make


@pytest.fixture
def repository() -> FakeRepository:
    return FakeRepository()
