"""Access handle through which collaborators read and change store state."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pycitylog.exceptions import CityLogStoreClosedError
from pycitylog.models.city import CityDraft, CityId, CityRecord
from pycitylog.state.events import StoreState

if TYPE_CHECKING:
    from pycitylog.state.store import CitiesStore


class CitiesHandle:
    """Read-only view of a :class:`CitiesStore` plus its four operations.

    A handle can only be created for an open store, and every read or call
    re-checks that the store is still open. Using it outside the store's
    lifetime raises :class:`CityLogStoreClosedError`.
    """

    __slots__ = ("_store",)

    def __init__(self, store: CitiesStore) -> None:
        if not store.is_open:
            raise CityLogStoreClosedError("CitiesHandle is used outside an open CitiesStore")
        self._store = store

    def _require_store(self) -> CitiesStore:
        if not self._store.is_open:
            raise CityLogStoreClosedError("CitiesHandle is used after its CitiesStore was closed")
        return self._store

    def snapshot(self) -> StoreState:
        return self._require_store().state

    @property
    def cities(self) -> tuple[CityRecord, ...]:
        return self.snapshot().cities

    @property
    def current_city(self) -> CityRecord | None:
        return self.snapshot().current_city

    @property
    def is_loading(self) -> bool:
        return self.snapshot().is_loading

    @property
    def error(self) -> str:
        return self.snapshot().error

    async def refresh_all(self) -> None:
        await self._require_store().refresh_all()

    async def select(self, city_id: CityId) -> None:
        await self._require_store().select(city_id)

    async def add(self, draft: CityDraft) -> None:
        await self._require_store().add(draft)

    async def remove(self, city_id: CityId) -> None:
        await self._require_store().remove(city_id)
