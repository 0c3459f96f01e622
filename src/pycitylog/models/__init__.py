"""Data models for cities API payloads."""

from pycitylog.models._base import CityLogBaseModel
from pycitylog.models.city import CityDraft, CityId, CityRecord, Position, same_city_id
from pycitylog.models.geocode import ReverseGeocodeResult

__all__ = [
    "CityDraft",
    "CityId",
    "CityLogBaseModel",
    "CityRecord",
    "Position",
    "ReverseGeocodeResult",
    "same_city_id",
]
