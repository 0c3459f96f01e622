"""High-level async client for the cities REST API."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import aiohttp

from pycitylog._api import cities as _cities_api
from pycitylog._transport import HttpTransport
from pycitylog.config import CityLogConfig
from pycitylog.exceptions import CityLogError
from pycitylog.models.city import CityDraft, CityId, CityRecord

_logger = logging.getLogger(__name__)


class CityRepository(Protocol):
    """The four remote operations the synchronization store depends on.

    Every method performs one round trip and raises
    :class:`~pycitylog.exceptions.CityLogTransportError` on any failure.
    """

    async def list_all(self) -> list[CityRecord]:
        ...

    async def get_one(self, city_id: CityId) -> CityRecord:
        ...

    async def create(self, draft: CityDraft) -> CityRecord:
        ...

    async def remove(self, city_id: CityId) -> None:
        ...


class CitiesClient:
    """Async client for the cities collection.

    Usage::

        async with CitiesClient(config) as client:
            cities = await client.list_all()
    """

    def __init__(
        self,
        config: CityLogConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config if config is not None else CityLogConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport: HttpTransport | None = None

    @property
    def config(self) -> CityLogConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> CitiesClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(
            self._config.base_url,
            self._http_session,
            timeout=self._config.request_timeout,
        )
        _logger.debug("Cities client opened for %s", self._transport.base_url)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    def _require_transport(self) -> HttpTransport:
        if self._transport is None:
            raise CityLogError("Client not initialized. Use 'async with CitiesClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Remote operations
    # ------------------------------------------------------------------

    async def list_all(self) -> list[CityRecord]:
        """Fetch every city in server order."""
        return await _cities_api.fetch_cities(self._require_transport())

    async def get_one(self, city_id: CityId) -> CityRecord:
        """Fetch a single city."""
        return await _cities_api.fetch_city(self._require_transport(), city_id)

    async def create(self, draft: CityDraft) -> CityRecord:
        """Persist a new city; the returned record carries the server id."""
        return await _cities_api.create_city(self._require_transport(), draft)

    async def remove(self, city_id: CityId) -> None:
        """Delete a city."""
        await _cities_api.delete_city(self._require_transport(), city_id)
