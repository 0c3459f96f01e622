"""City visit models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from pycitylog.models._base import CityLogBaseModel

CityId = int | str


def same_city_id(left: CityId | None, right: CityId | None) -> bool:
    """Compare two city ids by identity.

    JSON bodies may carry numeric ids while URL paths and user input
    carry strings, so both sides are compared in their string form.
    """
    if left is None or right is None:
        return False
    return str(left) == str(right)


class Position(CityLogBaseModel):
    """Map coordinate of a visit, in degrees."""

    lat: float
    lng: float

    @field_validator("lat")
    @classmethod
    def _check_lat(cls, value: float) -> float:
        if not -90.0 <= value <= 90.0:
            raise ValueError(f"latitude out of range: {value}")
        return value

    @field_validator("lng")
    @classmethod
    def _check_lng(cls, value: float) -> float:
        if not -180.0 <= value <= 180.0:
            raise ValueError(f"longitude out of range: {value}")
        return value


class CityDraft(CityLogBaseModel):
    """A visit built on the client, before the server assigns an id.

    Parameters
    ----------
    city_name : str
        Name of the visited city. Must be non-empty.
    country : str
        Country display name.
    date : datetime
        When the visit happened.
    notes : str
        Free-form notes about the trip.
    position : Position
        Where the pin was dropped.
    emoji : str
        Country flag emoji.
    """

    city_name: str
    country: str = ""
    date: datetime
    notes: str = ""
    position: Position
    emoji: str = ""

    @field_validator("city_name")
    @classmethod
    def _normalize_city_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("city_name must be non-empty")
        return name

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict using the API's camelCase field names."""
        return self.model_dump(mode="json", by_alias=True)


class CityRecord(CityDraft):
    """A persisted visit with its server-assigned ``id``."""

    id: CityId = Field(..., description="Server-assigned identity")

    def to_draft(self) -> CityDraft:
        """Drop the identity, e.g. to re-create the visit elsewhere."""
        return CityDraft.model_validate(self.model_dump(exclude={"id"}))
