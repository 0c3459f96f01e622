"""Custom exception hierarchy for pycitylog."""

from __future__ import annotations


class CityLogError(Exception):
    """Base exception for all pycitylog errors."""


class CityLogConfigError(CityLogError):
    """Invalid or missing configuration."""


class CityLogTransportError(CityLogError):
    """A remote call failed (network, non-2xx status, unparseable body).

    This is the single failure signal of the remote resource client.
    Callers distinguish failures by the operation that produced them,
    not by cause.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class GeocodingError(CityLogError):
    """Reverse geocoding returned no usable location."""


class CityLogStateError(CityLogError):
    """Programming error in the state machine (e.g. unknown transition).

    Never raised for network failures; those are recorded in the store
    state instead.
    """


class CityLogStoreClosedError(CityLogStateError):
    """Store state or operations accessed outside an open store lifetime."""
