"""Reverse geocoding response model."""

from __future__ import annotations

from pydantic import Field, field_validator

from pycitylog.models._base import CityLogBaseModel


class ReverseGeocodeResult(CityLogBaseModel):
    """Subset of the reverse geocoding payload used to pre-fill a draft.

    Parameters
    ----------
    city : str
        City name, often empty outside urban areas.
    locality : str
        Fallback locality name.
    country_name : str
        Country display name.
    country_code : str
        ISO 3166-1 alpha-2 code, empty when the point is not on land.
    """

    city: str = ""
    locality: str = ""
    country_name: str = ""
    country_code: str = Field(default="")

    @field_validator("city", "locality", "country_name", "country_code", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return "" if value is None else value

    @property
    def display_name(self) -> str:
        return self.city or self.locality or ""
