"""pycitylog - Async Python client and synchronization store for a city travel log."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pycitylog")
except PackageNotFoundError:
    __version__ = "0+local"
from pycitylog.client import CitiesClient, CityRepository
from pycitylog.config import CityLogConfig
from pycitylog.exceptions import (
    CityLogConfigError,
    CityLogError,
    CityLogStateError,
    CityLogStoreClosedError,
    CityLogTransportError,
    GeocodingError,
)
from pycitylog.geocode import ReverseGeocoder, country_code_to_emoji, draft_from_geocode
from pycitylog.models import CityDraft, CityRecord, Position, ReverseGeocodeResult, same_city_id
from pycitylog.state import CitiesHandle, CitiesStore, Operation, Phase, StoreState

__all__ = [
    "__version__",
    "CitiesClient",
    "CitiesHandle",
    "CitiesStore",
    "CityDraft",
    "CityLogConfig",
    "CityLogConfigError",
    "CityLogError",
    "CityLogStateError",
    "CityLogStoreClosedError",
    "CityLogTransportError",
    "CityRecord",
    "CityRepository",
    "GeocodingError",
    "Operation",
    "Phase",
    "Position",
    "ReverseGeocodeResult",
    "ReverseGeocoder",
    "StoreState",
    "country_code_to_emoji",
    "draft_from_geocode",
    "same_city_id",
]
